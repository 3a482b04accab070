"""FHE group service - rosters, leaders and activity images."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from ward_api.db.models import FheGroup, Member
from ward_api.schemas.fhe_group import FheGroupCreate, FheGroupUpdate

logger = logging.getLogger(__name__)


def _check_leader(db: Session, leader_id: UUID | None) -> None:
    if leader_id is not None and db.get(Member, leader_id) is None:
        raise ValueError("Leader not found")


def list_groups(db: Session) -> list[FheGroup]:
    """Groups by name with leader and members loaded."""
    return (
        db.query(FheGroup)
        .options(selectinload(FheGroup.leader), selectinload(FheGroup.members))
        .order_by(FheGroup.name)
        .all()
    )


def get_group(db: Session, group_id: UUID) -> FheGroup | None:
    return db.query(FheGroup).filter(FheGroup.id == group_id).first()


def create_group(db: Session, data: FheGroupCreate) -> FheGroup:
    _check_leader(db, data.leader_id)
    group = FheGroup(
        name=data.name.strip(),
        leader_id=data.leader_id,
        location=data.location,
        meeting_time=data.meeting_time,
    )
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def update_group(db: Session, group: FheGroup, data: FheGroupUpdate) -> FheGroup:
    """Partial update; explicit null clears leader, location or meeting time."""
    update_data = data.model_dump(exclude_unset=True)
    if "leader_id" in update_data:
        _check_leader(db, update_data["leader_id"])

    for field, value in update_data.items():
        if field == "name":
            if value is None:
                continue
            value = value.strip()
        setattr(group, field, value)

    db.commit()
    db.refresh(group)
    return group


def delete_group(db: Session, group: FheGroup) -> int:
    """Unassign every member, then delete the group. Returns members unassigned."""
    group_id = group.id
    try:
        unassigned = (
            db.query(Member)
            .filter(Member.fhe_group_id == group_id)
            .update({Member.fhe_group_id: None}, synchronize_session="fetch")
        )
        db.delete(group)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted fhe_group_id=%s unassigned=%d", group_id, unassigned)
    return unassigned


def assign_member(db: Session, group: FheGroup, member: Member) -> FheGroup:
    """Move a member into this group (leaving any previous one)."""
    member.fhe_group_id = group.id
    db.commit()
    db.refresh(group)
    return group


def remove_member(db: Session, group: FheGroup, member: Member) -> FheGroup:
    """
    Remove a member from this group.

    Raises:
        ValueError: member is not in this group
    """
    if member.fhe_group_id != group.id:
        raise ValueError("Member is not in this group")
    member.fhe_group_id = None
    db.commit()
    db.refresh(group)
    return group


def set_activity_image(db: Session, group: FheGroup, url: str) -> FheGroup:
    group.activity_image = url
    db.commit()
    db.refresh(group)
    return group
