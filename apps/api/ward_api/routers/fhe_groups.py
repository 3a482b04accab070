"""FHE groups router - rosters, leaders and activity images."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ward_api.core.config import settings
from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.fhe_group import (
    FheGroupCreate,
    FheGroupRead,
    FheGroupUpdate,
    GroupMemberAssign,
)
from ward_api.services import fhe_group_service, member_service, storage_client

router = APIRouter()

can_view = require_permission(Resource.FHE_GROUPS, Action.VIEW)
can_edit = require_permission(Resource.FHE_GROUPS, Action.EDIT)

write_deps = [Depends(require_csrf_header), Depends(can_edit)]


def _get_or_404(db: Session, group_id: UUID):
    group = fhe_group_service.get_group(db, group_id)
    if not group:
        raise HTTPException(status_code=404, detail="FHE group not found")
    return group


def _member_or_404(db: Session, member_id: UUID):
    member = member_service.get_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


@router.get("", response_model=list[FheGroupRead], dependencies=[Depends(can_view)])
def list_groups(db: Session = Depends(get_db)):
    return fhe_group_service.list_groups(db)


@router.get("/{group_id}", response_model=FheGroupRead, dependencies=[Depends(can_view)])
def get_group(group_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, group_id)


@router.post("", response_model=FheGroupRead, status_code=201, dependencies=write_deps)
def create_group(data: FheGroupCreate, db: Session = Depends(get_db)):
    try:
        return fhe_group_service.create_group(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{group_id}", response_model=FheGroupRead, dependencies=write_deps)
def update_group(group_id: UUID, data: FheGroupUpdate, db: Session = Depends(get_db)):
    group = _get_or_404(db, group_id)
    try:
        return fhe_group_service.update_group(db, group, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{group_id}", status_code=204, dependencies=write_deps)
def delete_group(group_id: UUID, db: Session = Depends(get_db)):
    """Delete a group; its members become unassigned."""
    fhe_group_service.delete_group(db, _get_or_404(db, group_id))
    return None


# =============================================================================
# Roster
# =============================================================================

@router.post("/{group_id}/members", response_model=FheGroupRead, dependencies=write_deps)
def assign_member(group_id: UUID, data: GroupMemberAssign, db: Session = Depends(get_db)):
    group = _get_or_404(db, group_id)
    member = _member_or_404(db, data.member_id)
    return fhe_group_service.assign_member(db, group, member)


@router.delete(
    "/{group_id}/members/{member_id}",
    response_model=FheGroupRead,
    dependencies=write_deps,
)
def remove_member(group_id: UUID, member_id: UUID, db: Session = Depends(get_db)):
    group = _get_or_404(db, group_id)
    member = _member_or_404(db, member_id)
    try:
        return fhe_group_service.remove_member(db, group, member)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# =============================================================================
# Activity image
# =============================================================================

@router.post("/{group_id}/image", response_model=FheGroupRead, dependencies=write_deps)
async def upload_image(
    group_id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    """Upload an activity image and store its public URL on the group."""
    group = _get_or_404(db, group_id)
    content = await file.read(settings.MAX_IMAGE_UPLOAD_BYTES + 1)
    try:
        ext = storage_client.validate_image(file.filename, file.content_type, len(content))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        url = storage_client.upload_group_image(group.id, content, file.content_type, ext)
    except storage_client.StorageError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return fhe_group_service.set_activity_image(db, group, url)
