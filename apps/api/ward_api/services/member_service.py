"""Member service - ward directory operations."""

import logging
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from ward_api.db.enums import CallingStatus
from ward_api.db.models import Calling, FheGroup, Member
from ward_api.schemas.member import MemberCreate, MemberUpdate

logger = logging.getLogger(__name__)


def _clean_skills(skills: list[str] | None) -> list[str]:
    return [s.strip() for s in skills or [] if s and s.strip()]


def _check_group(db: Session, group_id: UUID | None) -> None:
    if group_id is not None and db.get(FheGroup, group_id) is None:
        raise ValueError("FHE group not found")


def list_members(db: Session, q: str | None = None) -> list[Member]:
    """List members by name, optionally searching name/email/phone."""
    query = db.query(Member).options(
        selectinload(Member.fhe_group), selectinload(Member.callings)
    )
    if q:
        pattern = f"%{q.strip()}%"
        query = query.filter(
            or_(
                Member.name.ilike(pattern),
                Member.email.ilike(pattern),
                Member.phone.ilike(pattern),
            )
        )
    return query.order_by(Member.name).all()


def list_unassigned(db: Session) -> list[Member]:
    """Members not in any FHE group."""
    return (
        db.query(Member)
        .filter(Member.fhe_group_id.is_(None))
        .order_by(Member.name)
        .all()
    )


def get_member(db: Session, member_id: UUID) -> Member | None:
    return db.query(Member).filter(Member.id == member_id).first()


def create_member(db: Session, data: MemberCreate) -> Member:
    _check_group(db, data.fhe_group_id)
    member = Member(
        name=data.name.strip(),
        email=data.email,
        phone=data.phone,
        address=data.address,
        status=data.status.value,
        skills=_clean_skills(data.skills),
        fhe_group_id=data.fhe_group_id,
        notes=data.notes,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def update_member(db: Session, member: Member, data: MemberUpdate) -> Member:
    """
    Update member fields.

    Uses exclude_unset=True so only explicitly provided fields are updated.
    None values ARE applied to clear optional fields.
    """
    update_data = data.model_dump(exclude_unset=True)
    if "fhe_group_id" in update_data:
        _check_group(db, update_data["fhe_group_id"])

    required_fields = {"name", "status"}
    for field, value in update_data.items():
        if value is None and field in required_fields:
            continue
        if field == "status":
            value = value.value
        elif field == "skills":
            value = _clean_skills(value)
        elif field == "name":
            value = value.strip()
        setattr(member, field, value)

    db.commit()
    db.refresh(member)
    return member


def delete_member(db: Session, member: Member) -> list[UUID]:
    """
    Delete a member.

    Every calling the member holds is vacated first (member, sustained date
    and set apart flag cleared) and groups they lead lose their leader.
    Returns the ids of the vacated callings.
    """
    member_id = member.id
    held = db.query(Calling).filter(Calling.member_id == member_id).all()
    vacated = [c.id for c in held]
    try:
        for calling in held:
            calling.status = CallingStatus.VACANT.value
            calling.member_id = None
            calling.sustained_date = None
            calling.is_set_apart = False
        db.query(FheGroup).filter(FheGroup.leader_id == member_id).update(
            {FheGroup.leader_id: None}, synchronize_session="fetch"
        )
        db.flush()
        db.delete(member)
        db.commit()
    except Exception:
        db.rollback()
        raise

    if vacated:
        logger.info("Vacated %d callings for deleted member_id=%s", len(vacated), member_id)
    return vacated
