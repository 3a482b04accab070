"""Survey service - new member intake and conversion into directory records."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from ward_api.db.enums import MemberStatus
from ward_api.db.models import FollowUpTask, Member, SurveyResponse
from ward_api.schemas.auth import UserSession
from ward_api.schemas.survey import SurveySubmission
from ward_api.services import followup_rules, task_service

logger = logging.getLogger(__name__)


def submit_response(db: Session, data: SurveySubmission) -> SurveyResponse:
    response = SurveyResponse(**data.model_dump(), processed=False)
    response.full_name = response.full_name.strip()
    db.add(response)
    db.commit()
    db.refresh(response)
    logger.info("Survey response submitted response_id=%s", response.id)
    return response


def list_responses(db: Session, processed: bool | None = None) -> list[SurveyResponse]:
    """Newest submissions first."""
    query = db.query(SurveyResponse)
    if processed is not None:
        query = query.filter(SurveyResponse.processed.is_(processed))
    return query.order_by(SurveyResponse.submitted_at.desc()).all()


def get_response(db: Session, response_id: UUID) -> SurveyResponse | None:
    return db.query(SurveyResponse).filter(SurveyResponse.id == response_id).first()


def set_processed(db: Session, response: SurveyResponse, processed: bool) -> SurveyResponse:
    """Operator toggle; no member is created or removed."""
    response.processed = processed
    db.commit()
    db.refresh(response)
    return response


def split_skills(raw: str | None) -> list[str]:
    """Comma separated survey answer -> trimmed non-empty list."""
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


def create_member_from_response(
    db: Session,
    response: SurveyResponse,
    identity: UserSession,
) -> tuple[Member, FollowUpTask]:
    """
    Create a directory member from a survey response.

    Copies name/email/phone/address, marks the response processed and
    enqueues a new member task, all in one transaction. The response is kept.
    A response already marked processed by hand can still be converted.
    """
    member = Member(
        name=response.full_name,
        email=response.email,
        phone=response.phone,
        address=response.address,
        status=MemberStatus.ACTIVE.value,
        skills=split_skills(response.skills),
        notes=response.additional_info,
    )
    try:
        db.add(member)
        response.processed = True
        db.flush()
        task = followup_rules.new_member_task(member, response, identity, date.today())
        task_service.enqueue(db, [task])
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(member)
    db.refresh(response)
    logger.info(
        "Member created from survey member_id=%s response_id=%s", member.id, response.id
    )
    return member, task
