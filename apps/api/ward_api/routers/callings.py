"""Callings router - role slots, assignment and release."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.auth import UserSession
from ward_api.schemas.calling import (
    CallingAssign,
    CallingChangeResponse,
    CallingCreate,
    CallingRead,
    CallingUpdate,
)
from ward_api.schemas.task import FollowUpTaskRead
from ward_api.services import calling_service, member_service

router = APIRouter()

can_view = require_permission(Resource.CALLINGS, Action.VIEW)
can_edit = require_permission(Resource.CALLINGS, Action.EDIT)


def _get_or_404(db: Session, calling_id: UUID):
    calling = calling_service.get_calling(db, calling_id)
    if not calling:
        raise HTTPException(status_code=404, detail="Calling not found")
    return calling


def _change_response(calling, tasks) -> CallingChangeResponse:
    return CallingChangeResponse(
        calling=CallingRead.model_validate(calling),
        tasks_created=[FollowUpTaskRead.model_validate(t) for t in tasks],
    )


@router.get("", response_model=list[CallingRead], dependencies=[Depends(can_view)])
def list_callings(
    q: str | None = Query(None, max_length=100, description="Search title, organization or member"),
    db: Session = Depends(get_db),
):
    return calling_service.list_callings(db, q)


@router.get("/vacant", response_model=list[CallingRead], dependencies=[Depends(can_view)])
def list_vacant(db: Session = Depends(get_db)):
    return calling_service.list_vacant(db)


@router.get("/{calling_id}", response_model=CallingRead, dependencies=[Depends(can_view)])
def get_calling(calling_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, calling_id)


@router.post(
    "",
    response_model=CallingRead,
    status_code=201,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def create_calling(data: CallingCreate, db: Session = Depends(get_db)):
    try:
        return calling_service.create_calling(db, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch(
    "/{calling_id}",
    response_model=CallingChangeResponse,
    dependencies=[Depends(require_csrf_header)],
)
def update_calling(
    calling_id: UUID,
    data: CallingUpdate,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """
    Edit a calling.

    A new sustained date or set apart false -> true enqueues LCR update tasks.
    """
    calling = _get_or_404(db, calling_id)
    try:
        calling, tasks = calling_service.update_calling(db, calling, data, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _change_response(calling, tasks)


@router.delete(
    "/{calling_id}",
    status_code=204,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def delete_calling(calling_id: UUID, db: Session = Depends(get_db)):
    calling_service.delete_calling(db, _get_or_404(db, calling_id))
    return None


@router.post(
    "/{calling_id}/assign",
    response_model=CallingChangeResponse,
    dependencies=[Depends(require_csrf_header)],
)
def assign_member(
    calling_id: UUID,
    data: CallingAssign,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Fill a vacant calling; the member is sustained today."""
    calling = _get_or_404(db, calling_id)
    member = member_service.get_member(db, data.member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    try:
        calling, task = calling_service.assign_member(db, calling, member, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _change_response(calling, [task])


@router.post(
    "/{calling_id}/release",
    response_model=CallingChangeResponse,
    dependencies=[Depends(require_csrf_header)],
)
def release_member(
    calling_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Release the holder and reset the calling to vacant."""
    calling = _get_or_404(db, calling_id)
    try:
        calling, task = calling_service.release_member(db, calling, session)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _change_response(calling, [task])
