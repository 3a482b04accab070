"""Dashboard service - headline counts and recent activity."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from ward_api.db.enums import CallingStatus
from ward_api.db.models import Calling, FollowUpTask, Member, SurveyResponse
from ward_api.schemas.dashboard import DashboardStats, RecentActivity
from ward_api.services import task_service

RECENT_PER_SOURCE = 3
RECENT_LIMIT = 4


def recent_activity(db: Session) -> list[RecentActivity]:
    """Latest survey submissions and follow-up tasks merged newest first."""
    surveys = (
        db.query(SurveyResponse)
        .order_by(SurveyResponse.submitted_at.desc())
        .limit(RECENT_PER_SOURCE)
        .all()
    )
    tasks = (
        db.query(FollowUpTask)
        .order_by(FollowUpTask.created_at.desc())
        .limit(RECENT_PER_SOURCE)
        .all()
    )
    items = [
        RecentActivity(
            id=s.id,
            kind="survey",
            description=f"New member survey from {s.full_name}",
            occurred_at=s.submitted_at,
        )
        for s in surveys
    ] + [
        RecentActivity(
            id=t.id,
            kind="task",
            description=t.description,
            occurred_at=t.created_at,
        )
        for t in tasks
    ]
    items.sort(key=lambda item: item.occurred_at.replace(tzinfo=None), reverse=True)
    return items[:RECENT_LIMIT]


def get_stats(db: Session) -> DashboardStats:
    total_members = db.query(func.count(Member.id)).scalar() or 0
    open_callings = (
        db.query(func.count(Calling.id))
        .filter(Calling.status == CallingStatus.VACANT.value)
        .scalar()
        or 0
    )
    members_with_callings = (
        db.query(func.count(func.distinct(Calling.member_id)))
        .filter(Calling.member_id.is_not(None))
        .scalar()
        or 0
    )
    return DashboardStats(
        total_members=total_members,
        open_callings=open_callings,
        members_needing_callings=max(total_members - members_with_callings, 0),
        pending_tasks=task_service.count_pending(db),
        recent_activity=recent_activity(db),
    )
