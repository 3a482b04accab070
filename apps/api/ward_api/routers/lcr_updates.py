"""LCR updates router - follow-up task queue for the membership records system."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ward_api.core.deps import get_current_session, get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.db.enums import FollowUpTaskStatus
from ward_api.schemas.auth import UserSession
from ward_api.schemas.task import FollowUpTaskListResponse, FollowUpTaskRead
from ward_api.services import task_service

# LCR updates are a clerk workflow, gated on editing members
router = APIRouter(
    dependencies=[Depends(require_permission(Resource.MEMBERS, Action.EDIT))]
)


def _get_or_404(db: Session, task_id: UUID):
    task = task_service.get_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.get("", response_model=FollowUpTaskListResponse)
def list_tasks(
    status: FollowUpTaskStatus = Query(FollowUpTaskStatus.PENDING),
    db: Session = Depends(get_db),
):
    tasks = task_service.list_tasks(db, status)
    return FollowUpTaskListResponse(
        items=[FollowUpTaskRead.model_validate(t) for t in tasks],
        total=len(tasks),
        pending=task_service.count_pending(db),
    )


@router.get("/{task_id}", response_model=FollowUpTaskRead)
def get_task(task_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, task_id)


@router.post(
    "/{task_id}/complete",
    response_model=FollowUpTaskRead,
    dependencies=[Depends(require_csrf_header)],
)
def complete_task(
    task_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Mark task as completed, stamped with the operator's name."""
    task = _get_or_404(db, task_id)
    return task_service.complete_task(db, task, session)


@router.post(
    "/{task_id}/uncomplete",
    response_model=FollowUpTaskRead,
    dependencies=[Depends(require_csrf_header)],
)
def uncomplete_task(task_id: UUID, db: Session = Depends(get_db)):
    """Revert a task to pending."""
    task = _get_or_404(db, task_id)
    return task_service.uncomplete_task(db, task)
