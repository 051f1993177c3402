"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, tables rebuilt for each test
- User factory and bearer-token headers for each role
- HTTPX AsyncClient bound to the app
- Capturing password-reset notifier
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator, Callable, Generator

# Must be set before the app (and its settings) are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "1"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENV"] = "test"
os.environ["JWT_SECRET"] = "test-session-secret-for-the-suite-0123456789"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from app.main import app
from app.core.deps import get_db
from app.core.security import create_session_token, hash_password
from app.db.base import Base
from app.db.enums import Role
from app.db.models import User
from app.db.session import SessionLocal, engine
from app.services.notification_service import PasswordResetMessage, get_reset_notifier


DEFAULT_PASSWORD = "password123"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    The in-memory engine uses a single shared connection, so the app and
    the test see the same data through this one session.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# =============================================================================
# User / Auth Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    """Factory creating a persisted user with DEFAULT_PASSWORD."""
    counter = {"n": 0}

    def _make(
        role: Role = Role.SALES,
        email: str | None = None,
        first_name: str = "Test",
        last_name: str = "User",
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        counter["n"] += 1
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email or f"{role.value}{counter['n']}@example.com",
            password_hash=hash_password(password),
            role=role.value,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


def bearer(user: User) -> dict[str, str]:
    """Authorization header for user's current token version."""
    token = create_session_token(user.id, user.role, user.token_version)
    return {"Authorization": f"Bearer {token}"}


@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    headers: dict[str, str]


@pytest.fixture(scope="function")
def sales_auth(make_user) -> TestAuth:
    user = make_user(Role.SALES, first_name="Sally", last_name="Seller")
    return TestAuth(user=user, headers=bearer(user))


@pytest.fixture(scope="function")
def manager_auth(make_user) -> TestAuth:
    user = make_user(Role.MANAGER, first_name="Mona", last_name="Manager")
    return TestAuth(user=user, headers=bearer(user))


@pytest.fixture(scope="function")
def admin_auth(make_user) -> TestAuth:
    user = make_user(Role.ADMIN, first_name="Ada", last_name="Admin")
    return TestAuth(user=user, headers=bearer(user))


@pytest.fixture(scope="function")
def support_auth(make_user) -> TestAuth:
    user = make_user(Role.SUPPORT, first_name="Sam", last_name="Support")
    return TestAuth(user=user, headers=bearer(user))


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient for testing; pass auth headers per request.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(client: AsyncClient, sales_auth: TestAuth) -> AsyncClient:
    """Client carrying a sales user's bearer token."""
    client.headers.update(sales_auth.headers)
    return client


class CapturingNotifier:
    """Records reset messages instead of delivering them."""

    def __init__(self):
        self.messages: list[PasswordResetMessage] = []

    def send_password_reset(self, message: PasswordResetMessage) -> None:
        self.messages.append(message)

    @property
    def last_token(self) -> str:
        return self.messages[-1].reset_url.rsplit("/", 1)[-1]


@pytest.fixture(scope="function")
def reset_notifier(client: AsyncClient) -> CapturingNotifier:
    notifier = CapturingNotifier()
    app.dependency_overrides[get_reset_notifier] = lambda: notifier
    return notifier


@pytest.fixture(scope="function")
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build bearer headers for an arbitrary user."""
    return bearer
