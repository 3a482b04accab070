"""
Workflow side-effect rules.

Certain record transitions must be replicated by hand into the external
membership records system (LCR). Each rule here builds the FollowUpTask that
reminds a clerk to do so. Builders are pure: they return unsaved tasks and the
calling service adds them in the same transaction as the record change.
"""

from datetime import date
from typing import Any

from ward_api.db.enums import FollowUpTaskType
from ward_api.db.models import Calling, FollowUpTask, Member, SurveyResponse
from ward_api.schemas.auth import UserSession

SUSTAINED_NOTES = "Sustained in Sacrament Meeting"
RELEASED_NOTES = "Released in Sacrament Meeting"
NEW_MEMBER_NOTES = "Record created from new member survey"


def _set_apart_notes(identity: UserSession) -> str:
    return f"Set apart by {identity.display_name}"


def _calling_details(
    calling: Calling,
    member: Member,
    on_date: date,
    notes: str,
) -> dict[str, Any]:
    return {
        "memberId": str(member.id),
        "memberName": member.name,
        "callingId": str(calling.id),
        "callingTitle": calling.title,
        "date": on_date.isoformat(),
        "notes": notes,
    }


def _task(
    task_type: FollowUpTaskType,
    description: str,
    details: dict[str, Any],
    identity: UserSession,
) -> FollowUpTask:
    return FollowUpTask(
        type=task_type.value,
        description=description,
        details=details,
        created_by=identity.display_name,
        completed=False,
    )


# =============================================================================
# Calling rules
# =============================================================================

def sustained_task(
    calling: Calling,
    member: Member,
    identity: UserSession,
    sustained_on: date,
) -> FollowUpTask:
    """Sustaining (edit form with a new date, or assignment)."""
    return _task(
        FollowUpTaskType.CALLING_SUSTAINED,
        f"{member.name} was sustained as {calling.title}",
        _calling_details(calling, member, sustained_on, SUSTAINED_NOTES),
        identity,
    )


def set_apart_task(
    calling: Calling,
    member: Member,
    identity: UserSession,
    today: date,
) -> FollowUpTask:
    return _task(
        FollowUpTaskType.CALLING_SET_APART,
        f"{member.name} was set apart as {calling.title}",
        _calling_details(calling, member, today, _set_apart_notes(identity)),
        identity,
    )


def released_task(
    calling: Calling,
    member: Member,
    identity: UserSession,
    today: date,
) -> FollowUpTask:
    return _task(
        FollowUpTaskType.RELEASED_FROM_CALLING,
        f"{member.name} was released from {calling.title}",
        _calling_details(calling, member, today, RELEASED_NOTES),
        identity,
    )


def edit_transition_tasks(
    calling: Calling,
    member: Member | None,
    identity: UserSession,
    changes: dict[str, Any],
    previous_sustained_date: date | None,
    previous_set_apart: bool,
    today: date,
) -> list[FollowUpTask]:
    """
    Tasks produced by an edit-form submission.

    changes holds only the submitted fields (exclude_unset). The calling has
    already been updated; previous_* are the values stored before the edit.

    - sustained: submitted date is non-empty and differs from the stored one
    - set apart: flag goes false -> true
    Nothing fires unless the calling ends up filled.
    """
    if member is None or not calling.is_filled:
        return []

    tasks = []
    new_date = changes.get("sustained_date")
    if new_date is not None and new_date != previous_sustained_date:
        tasks.append(sustained_task(calling, member, identity, new_date))
    if changes.get("is_set_apart") is True and not previous_set_apart:
        tasks.append(set_apart_task(calling, member, identity, today))
    return tasks


# =============================================================================
# Membership rules
# =============================================================================

def new_member_task(
    member: Member,
    response: SurveyResponse,
    identity: UserSession,
    today: date,
) -> FollowUpTask:
    """A member record created from an intake survey must be requested in LCR."""
    return _task(
        FollowUpTaskType.NEW_MEMBER,
        f"{member.name} was added to the ward",
        {
            "memberId": str(member.id),
            "memberName": member.name,
            "surveyResponseId": str(response.id),
            "date": (response.move_in_date or today).isoformat(),
            "notes": NEW_MEMBER_NOTES,
        },
        identity,
    )
