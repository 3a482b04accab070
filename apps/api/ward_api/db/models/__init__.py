"""SQLAlchemy ORM models."""

from ward_api.db.models.auth import User
from ward_api.db.models.calendar import Event
from ward_api.db.models.directory import Calling, FheGroup, Member
from ward_api.db.models.survey import SurveyResponse
from ward_api.db.models.tasks import FollowUpTask

__all__ = [
    "Calling",
    "Event",
    "FheGroup",
    "FollowUpTask",
    "Member",
    "SurveyResponse",
    "User",
]
