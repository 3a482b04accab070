"""Follow-up task service - LCR update queue."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from ward_api.db.enums import FollowUpTaskStatus
from ward_api.db.models import FollowUpTask
from ward_api.schemas.auth import UserSession

logger = logging.getLogger(__name__)


def enqueue(db: Session, tasks: list[FollowUpTask]) -> list[FollowUpTask]:
    """
    Add rule-produced tasks to the current transaction.

    Flushes so ids are assigned; the caller commits together with the
    record change that triggered them.
    """
    for task in tasks:
        db.add(task)
    if tasks:
        db.flush()
    for task in tasks:
        logger.info("Follow-up task enqueued task_id=%s type=%s", task.id, task.type)
    return tasks


def list_tasks(
    db: Session,
    status: FollowUpTaskStatus = FollowUpTaskStatus.PENDING,
) -> list[FollowUpTask]:
    """
    List tasks by status.

    Pending and all: newest created first. Completed: newest completed first.
    """
    query = db.query(FollowUpTask)
    if status == FollowUpTaskStatus.PENDING:
        query = query.filter(FollowUpTask.completed.is_(False))
    elif status == FollowUpTaskStatus.COMPLETED:
        query = query.filter(FollowUpTask.completed.is_(True))
        return query.order_by(
            FollowUpTask.completed_at.desc(), FollowUpTask.created_at.desc()
        ).all()
    return query.order_by(FollowUpTask.created_at.desc()).all()


def count_pending(db: Session) -> int:
    return db.query(FollowUpTask).filter(FollowUpTask.completed.is_(False)).count()


def get_task(db: Session, task_id: UUID) -> FollowUpTask | None:
    return db.query(FollowUpTask).filter(FollowUpTask.id == task_id).first()


def complete_task(
    db: Session,
    task: FollowUpTask,
    identity: UserSession,
) -> FollowUpTask:
    """Mark task as completed. Already completed tasks are returned unchanged."""
    if task.completed:
        return task

    task.completed = True
    task.completed_at = datetime.now(timezone.utc)
    task.completed_by = identity.display_name
    db.commit()
    db.refresh(task)
    logger.info("Follow-up task completed task_id=%s user_id=%s", task.id, identity.user_id)
    return task


def uncomplete_task(db: Session, task: FollowUpTask) -> FollowUpTask:
    """Revert a task to pending, clearing completion metadata."""
    if not task.completed:
        return task

    task.completed = False
    task.completed_at = None
    task.completed_by = None
    db.commit()
    db.refresh(task)
    return task
