"""Calling service - volunteer role slots and their sustain/set apart/release workflow."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ward_api.db.enums import CallingStatus
from ward_api.db.models import Calling, FollowUpTask, Member
from ward_api.schemas.auth import UserSession
from ward_api.schemas.calling import CallingCreate, CallingUpdate
from ward_api.services import followup_rules, task_service

logger = logging.getLogger(__name__)


def list_callings(db: Session, q: str | None = None) -> list[Calling]:
    """List callings by organization then title, optionally searching title/organization/member."""
    query = db.query(Calling).outerjoin(Member, Calling.member_id == Member.id).options(
        joinedload(Calling.member)
    )
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Calling.title.ilike(pattern),
                Calling.organization.ilike(pattern),
                Member.name.ilike(pattern),
            )
        )
    return query.order_by(Calling.organization, Calling.title).all()


def list_vacant(db: Session) -> list[Calling]:
    return (
        db.query(Calling)
        .filter(Calling.status == CallingStatus.VACANT.value)
        .order_by(Calling.organization, Calling.title)
        .all()
    )


def get_calling(db: Session, calling_id: UUID) -> Calling | None:
    return db.query(Calling).filter(Calling.id == calling_id).first()


def _normalize(db: Session, calling: Calling) -> None:
    """
    Enforce filled iff a member is linked.

    Vacant clears member, sustained date and set apart flag.
    Raises ValueError for a filled calling without an existing member.
    """
    if calling.status == CallingStatus.VACANT.value:
        calling.member_id = None
        calling.sustained_date = None
        calling.is_set_apart = False
        return
    if calling.member_id is None:
        raise ValueError("A filled calling requires a member")
    if db.get(Member, calling.member_id) is None:
        raise ValueError("Member not found")


def create_calling(db: Session, data: CallingCreate) -> Calling:
    """Create a calling. No follow-up tasks are produced on create."""
    payload = data.model_dump(exclude_unset=True)
    status = payload.get("status")
    if status is None:
        status = CallingStatus.FILLED if data.member_id else CallingStatus.VACANT

    calling = Calling(
        title=data.title.strip(),
        organization=data.organization.strip(),
        status=status.value,
        member_id=data.member_id,
        sustained_date=data.sustained_date,
        is_set_apart=data.is_set_apart,
        notes=data.notes,
    )
    _normalize(db, calling)
    db.add(calling)
    db.commit()
    db.refresh(calling)
    return calling


def update_calling(
    db: Session,
    calling: Calling,
    data: CallingUpdate,
    identity: UserSession,
) -> tuple[Calling, list[FollowUpTask]]:
    """
    Apply an edit-form submission.

    The record is updated first, then any sustained/set apart tasks are
    inserted; both are committed together.
    """
    changes = data.model_dump(exclude_unset=True)
    previous_sustained_date = calling.sustained_date
    previous_set_apart = calling.is_set_apart

    for field in ("title", "organization"):
        if changes.get(field) is not None:
            setattr(calling, field, changes[field].strip())
    for field in ("sustained_date", "notes"):
        if field in changes:
            setattr(calling, field, changes[field])
    if changes.get("is_set_apart") is not None:
        calling.is_set_apart = changes["is_set_apart"]

    if "member_id" in changes:
        calling.member_id = changes["member_id"]
        if changes.get("status") is None:
            calling.status = (
                CallingStatus.FILLED.value if calling.member_id else CallingStatus.VACANT.value
            )
    if changes.get("status") is not None:
        calling.status = changes["status"].value

    try:
        _normalize(db, calling)
        member = db.get(Member, calling.member_id) if calling.member_id else None
        tasks = followup_rules.edit_transition_tasks(
            calling,
            member,
            identity,
            changes,
            previous_sustained_date,
            previous_set_apart,
            date.today(),
        )
        task_service.enqueue(db, tasks)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(calling)
    return calling, tasks


def delete_calling(db: Session, calling: Calling) -> None:
    """Delete a calling. No follow-up task is produced."""
    db.delete(calling)
    db.commit()


# =============================================================================
# Assign / Release
# =============================================================================

def assign_member(
    db: Session,
    calling: Calling,
    member: Member,
    identity: UserSession,
) -> tuple[Calling, FollowUpTask]:
    """
    Fill a vacant calling. Assignment implies sustaining today.

    Raises:
        ValueError: calling is not vacant
    """
    if calling.is_filled:
        raise ValueError("Calling is already filled")

    today = date.today()
    calling.status = CallingStatus.FILLED.value
    calling.member_id = member.id
    calling.sustained_date = today
    try:
        task = followup_rules.sustained_task(calling, member, identity, today)
        task_service.enqueue(db, [task])
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(calling)
    logger.info("Calling assigned calling_id=%s member_id=%s", calling.id, member.id)
    return calling, task


def release_member(
    db: Session,
    calling: Calling,
    identity: UserSession,
) -> tuple[Calling, FollowUpTask]:
    """
    Release the current holder and reset the calling to vacant.

    Raises:
        ValueError: calling is not filled
    """
    if not calling.is_filled or calling.member_id is None:
        raise ValueError("Calling is not filled")

    member = db.get(Member, calling.member_id)
    if member is None:
        raise ValueError("Member not found")

    calling.status = CallingStatus.VACANT.value
    calling.member_id = None
    calling.sustained_date = None
    calling.is_set_apart = False
    try:
        task = followup_rules.released_task(calling, member, identity, date.today())
        task_service.enqueue(db, [task])
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(calling)
    logger.info("Calling released calling_id=%s member_id=%s", calling.id, member.id)
    return calling, task
