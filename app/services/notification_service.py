"""Password reset notifier interface + default implementation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PasswordResetMessage:
    email: str
    reset_url: str


class PasswordResetNotifier(Protocol):
    def send_password_reset(self, message: PasswordResetMessage) -> None:
        """Deliver the reset link to the account holder."""


class LoggingResetNotifier:
    """
    Default notifier: records that a reset link was issued.

    Neither the link (a credential) nor the address is written to the log.
    A mail integration replaces this via the get_reset_notifier dependency.
    """

    def send_password_reset(self, message: PasswordResetMessage) -> None:
        logger.info("Password reset link issued (no mail transport configured)")


_default_notifier = LoggingResetNotifier()


def get_reset_notifier() -> PasswordResetNotifier:
    """FastAPI dependency returning the active reset notifier."""
    return _default_notifier
