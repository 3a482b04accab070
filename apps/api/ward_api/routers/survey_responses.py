"""Survey responses router - review submissions and create members from them."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.auth import UserSession
from ward_api.schemas.member import MemberRead
from ward_api.schemas.survey import (
    MemberFromSurveyResponse,
    SurveyResponseList,
    SurveyResponseRead,
)
from ward_api.schemas.task import FollowUpTaskRead
from ward_api.services import survey_service

router = APIRouter()

can_view = require_permission(Resource.SURVEY_RESPONSES, Action.VIEW)
can_edit = require_permission(Resource.SURVEY_RESPONSES, Action.EDIT)


def _get_or_404(db: Session, response_id: UUID):
    response = survey_service.get_response(db, response_id)
    if not response:
        raise HTTPException(status_code=404, detail="Survey response not found")
    return response


@router.get("", response_model=SurveyResponseList, dependencies=[Depends(can_view)])
def list_responses(
    processed: bool | None = Query(None, description="Filter by processed flag"),
    db: Session = Depends(get_db),
):
    responses = survey_service.list_responses(db, processed)
    return SurveyResponseList(
        items=[SurveyResponseRead.model_validate(r) for r in responses],
        total=len(responses),
    )


@router.get("/{response_id}", response_model=SurveyResponseRead, dependencies=[Depends(can_view)])
def get_response(response_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, response_id)


@router.post(
    "/{response_id}/process",
    response_model=SurveyResponseRead,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def mark_processed(response_id: UUID, db: Session = Depends(get_db)):
    return survey_service.set_processed(db, _get_or_404(db, response_id), True)


@router.post(
    "/{response_id}/unprocess",
    response_model=SurveyResponseRead,
    dependencies=[Depends(require_csrf_header), Depends(can_edit)],
)
def mark_unprocessed(response_id: UUID, db: Session = Depends(get_db)):
    return survey_service.set_processed(db, _get_or_404(db, response_id), False)


@router.post(
    "/{response_id}/create-member",
    response_model=MemberFromSurveyResponse,
    status_code=201,
    dependencies=[Depends(require_csrf_header)],
)
def create_member(
    response_id: UUID,
    session: UserSession = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """
    Create a directory member from a response.

    Marks the response processed and enqueues a new member LCR task.
    Works whether or not the response was already marked processed.
    """
    response = _get_or_404(db, response_id)
    member, task = survey_service.create_member_from_response(db, response, session)
    return MemberFromSurveyResponse(
        member=MemberRead.model_validate(member),
        response=SurveyResponseRead.model_validate(response),
        task=FollowUpTaskRead.model_validate(task),
    )
