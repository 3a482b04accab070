"""Members router - ward directory."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.member import MemberCreate, MemberListResponse, MemberRead, MemberUpdate
from ward_api.services import member_service

router = APIRouter()

can_view = require_permission(Resource.MEMBERS, Action.VIEW)
can_edit = require_permission(Resource.MEMBERS, Action.EDIT)


@router.get("", response_model=MemberListResponse, dependencies=[Depends(can_view)])
def list_members(
    q: str | None = Query(None, max_length=100, description="Search name, email or phone"),
    db: Session = Depends(get_db),
):
    members = member_service.list_members(db, q)
    return MemberListResponse(
        items=[MemberRead.model_validate(m) for m in members], total=len(members)
    )


@router.get("/unassigned", response_model=list[MemberRead], dependencies=[Depends(can_view)])
def list_unassigned(db: Session = Depends(get_db)):
    """Members not in any FHE group."""
    return member_service.list_unassigned(db)


@router.get("/{member_id}", response_model=MemberRead, dependencies=[Depends(can_view)])
def get_member(member_id: UUID, db: Session = Depends(get_db)):
    member = member_service.get_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


@router.post(
    "",
    response_model=MemberRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def create_member(data: MemberCreate, db: Session = Depends(get_db)):
    try:
        return member_service.create_member(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch(
    "/{member_id}",
    response_model=MemberRead,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def update_member(member_id: UUID, data: MemberUpdate, db: Session = Depends(get_db)):
    member = member_service.get_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    try:
        return member_service.update_member(db, member, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/{member_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def delete_member(member_id: UUID, db: Session = Depends(get_db)):
    """Delete a member, vacating any callings they hold."""
    member = member_service.get_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    member_service.delete_member(db, member)
    return None
