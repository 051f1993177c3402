"""Cross-entity reference checks shared by the record services."""

from sqlalchemy.orm import Session

from app.core.errors import DependentRecordsExist, ReferenceNotFound
from app.db.models import Contact, Deal, Organization, Task


def _exists(db: Session, model, record_id: int) -> bool:
    return db.query(model.id).filter(model.id == record_id).first() is not None


def ensure_organization(db: Session, organization_id: int | None) -> None:
    if organization_id is not None and not _exists(db, Organization, organization_id):
        raise ReferenceNotFound("Organization not found")


def ensure_contact(db: Session, contact_id: int | None) -> None:
    if contact_id is not None and not _exists(db, Contact, contact_id):
        raise ReferenceNotFound("Contact not found")


def ensure_deal(db: Session, deal_id: int | None) -> None:
    if deal_id is not None and not _exists(db, Deal, deal_id):
        raise ReferenceNotFound("Deal not found")


def check_references(db: Session, data: dict) -> None:
    """
    Verify every foreign key present in a create/update payload.

    Only keys that appear in data are checked; a None value clears the
    link and needs no check.
    """
    if "organization_id" in data:
        ensure_organization(db, data["organization_id"])
    if "contact_id" in data:
        ensure_contact(db, data["contact_id"])
    if "deal_id" in data:
        ensure_deal(db, data["deal_id"])


def _count(db: Session, model, column, record_id: int) -> int:
    return db.query(model.id).filter(column == record_id).count()


def ensure_organization_deletable(db: Session, organization_id: int) -> None:
    """Organizations with contacts, deals or tasks cannot be deleted."""
    blockers = [
        label
        for label, model in (("contacts", Contact), ("deals", Deal), ("tasks", Task))
        if _count(db, model, model.organization_id, organization_id)
    ]
    if blockers:
        raise DependentRecordsExist(
            f"Organization has linked {', '.join(blockers)}; remove or reassign them first"
        )


def ensure_contact_deletable(db: Session, contact_id: int) -> None:
    """Contacts with deals or tasks cannot be deleted."""
    blockers = [
        label
        for label, model in (("deals", Deal), ("tasks", Task))
        if _count(db, model, model.contact_id, contact_id)
    ]
    if blockers:
        raise DependentRecordsExist(
            f"Contact has linked {', '.join(blockers)}; remove or reassign them first"
        )


def ensure_deal_deletable(db: Session, deal_id: int) -> None:
    if _count(db, Task, Task.deal_id, deal_id):
        raise DependentRecordsExist("Deal has linked tasks; remove or reassign them first")
