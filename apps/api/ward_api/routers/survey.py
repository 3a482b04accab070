"""Survey router - new member intake form."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.survey import SurveyResponseRead, SurveySubmission
from ward_api.services import survey_service

router = APIRouter()


@router.post(
    "",
    response_model=SurveyResponseRead,
    status_code=201,
    dependencies=[
        Depends(require_csrf_header),
        Depends(require_permission(Resource.SURVEY, Action.EDIT)),
    ],
)
def submit_survey(data: SurveySubmission, db: Session = Depends(get_db)):
    """Submit the intake survey. The response starts unprocessed."""
    return survey_service.submit_response(db, data)
