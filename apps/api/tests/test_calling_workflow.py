"""
Calling workflow tests.

Tests cover:
- Sustained date set/changed -> one calling_sustained task
- Set apart false -> true -> one calling_set_apart task
- Unrelated edits produce no task
- Assign/release flows and their preconditions
- Record change and task insert commit together
"""

from datetime import date

import pytest

from ward_api.db.enums import CallingStatus, FollowUpTaskType
from ward_api.db.models import Calling, FollowUpTask
from ward_api.schemas.calling import CallingCreate, CallingUpdate
from ward_api.services import calling_service, followup_rules, task_service


def task_count(db) -> int:
    return db.query(FollowUpTask).count()


# =============================================================================
# Edit form
# =============================================================================

def test_sustained_date_from_empty_creates_one_task(db, member, clerk_identity):
    calling = Calling(
        title="Ward Librarian",
        organization="Ward",
        status=CallingStatus.FILLED.value,
        member_id=member.id,
    )
    db.add(calling)
    db.commit()

    calling, tasks = calling_service.update_calling(
        db, calling, CallingUpdate(sustained_date=date(2026, 3, 1)), clerk_identity
    )

    assert len(tasks) == 1
    task = tasks[0]
    assert task.type == FollowUpTaskType.CALLING_SUSTAINED.value
    assert task.description == "Alice Example was sustained as Ward Librarian"
    assert task.details["date"] == "2026-03-01"
    assert task.details["memberId"] == str(member.id)
    assert task.details["callingId"] == str(calling.id)
    assert task.details["notes"] == followup_rules.SUSTAINED_NOTES
    assert task.created_by == "Clerk Operator"
    assert task.completed is False
    assert task_count(db) == 1


def test_same_sustained_date_creates_no_task(db, filled_calling, clerk_identity):
    _, tasks = calling_service.update_calling(
        db,
        filled_calling,
        CallingUpdate(sustained_date=filled_calling.sustained_date),
        clerk_identity,
    )
    assert tasks == []
    assert task_count(db) == 0


def test_changed_sustained_date_creates_task(db, filled_calling, clerk_identity):
    _, tasks = calling_service.update_calling(
        db, filled_calling, CallingUpdate(sustained_date=date(2026, 2, 1)), clerk_identity
    )
    assert [t.type for t in tasks] == [FollowUpTaskType.CALLING_SUSTAINED.value]


def test_notes_only_edit_creates_no_task(db, filled_calling, clerk_identity):
    calling, tasks = calling_service.update_calling(
        db, filled_calling, CallingUpdate(notes="Meets Tuesdays"), clerk_identity
    )
    assert tasks == []
    assert calling.notes == "Meets Tuesdays"
    assert task_count(db) == 0


def test_set_apart_false_to_true_creates_one_task(db, filled_calling, clerk_identity):
    _, tasks = calling_service.update_calling(
        db, filled_calling, CallingUpdate(is_set_apart=True), clerk_identity
    )
    assert len(tasks) == 1
    assert tasks[0].type == FollowUpTaskType.CALLING_SET_APART.value
    assert tasks[0].details["notes"] == "Set apart by Clerk Operator"
    assert tasks[0].details["date"] == date.today().isoformat()


def test_set_apart_true_to_true_creates_no_task(db, filled_calling, clerk_identity):
    filled_calling.is_set_apart = True
    db.commit()

    _, tasks = calling_service.update_calling(
        db, filled_calling, CallingUpdate(is_set_apart=True), clerk_identity
    )
    assert tasks == []
    assert task_count(db) == 0


def test_both_rules_fire_in_one_edit(db, filled_calling, clerk_identity):
    _, tasks = calling_service.update_calling(
        db,
        filled_calling,
        CallingUpdate(sustained_date=date(2026, 5, 3), is_set_apart=True),
        clerk_identity,
    )
    assert sorted(t.type for t in tasks) == [
        FollowUpTaskType.CALLING_SET_APART.value,
        FollowUpTaskType.CALLING_SUSTAINED.value,
    ]
    assert task_count(db) == 2


def test_vacant_submission_clears_fields_and_fires_nothing(db, filled_calling, clerk_identity):
    calling, tasks = calling_service.update_calling(
        db,
        filled_calling,
        CallingUpdate(status=CallingStatus.VACANT, sustained_date=date(2026, 6, 1)),
        clerk_identity,
    )
    assert tasks == []
    assert calling.member_id is None
    assert calling.sustained_date is None
    assert calling.is_set_apart is False


def test_filled_without_member_is_rejected(db, vacant_calling, clerk_identity):
    with pytest.raises(ValueError):
        calling_service.update_calling(
            db, vacant_calling, CallingUpdate(status=CallingStatus.FILLED), clerk_identity
        )
    db.refresh(vacant_calling)
    assert vacant_calling.status == CallingStatus.VACANT.value


def test_create_produces_no_task(db, member):
    calling = calling_service.create_calling(
        db,
        CallingCreate(
            title="Choir Director",
            organization="Music",
            member_id=member.id,
            sustained_date=date(2026, 1, 11),
        ),
    )
    assert calling.status == CallingStatus.FILLED.value
    assert task_count(db) == 0


def test_create_vacant_drops_sustained_date(db):
    calling = calling_service.create_calling(
        db,
        CallingCreate(
            title="Organist", organization="Music", sustained_date=date(2026, 1, 11), is_set_apart=True
        ),
    )
    assert calling.status == CallingStatus.VACANT.value
    assert calling.sustained_date is None
    assert calling.is_set_apart is False


# =============================================================================
# Assign / Release
# =============================================================================

def test_assign_fills_and_sustains_today(db, vacant_calling, member, clerk_identity):
    calling, task = calling_service.assign_member(db, vacant_calling, member, clerk_identity)

    assert calling.status == CallingStatus.FILLED.value
    assert calling.member_id == member.id
    assert calling.sustained_date == date.today()
    assert task.type == FollowUpTaskType.CALLING_SUSTAINED.value
    assert task.details["date"] == date.today().isoformat()
    assert task_count(db) == 1


def test_assign_to_filled_calling_rejected(db, filled_calling, member, clerk_identity):
    with pytest.raises(ValueError):
        calling_service.assign_member(db, filled_calling, member, clerk_identity)
    assert task_count(db) == 0


def test_release_resets_calling(db, filled_calling, member, clerk_identity):
    filled_calling.is_set_apart = True
    db.commit()

    calling, task = calling_service.release_member(db, filled_calling, clerk_identity)

    assert calling.status == CallingStatus.VACANT.value
    assert calling.member_id is None
    assert calling.sustained_date is None
    assert calling.is_set_apart is False
    assert task.type == FollowUpTaskType.RELEASED_FROM_CALLING.value
    assert task.details["memberId"] == str(member.id)
    assert task.description == "Alice Example was released from Sunday School Teacher"
    assert task_count(db) == 1


def test_release_vacant_calling_rejected(db, vacant_calling, clerk_identity):
    with pytest.raises(ValueError):
        calling_service.release_member(db, vacant_calling, clerk_identity)
    assert task_count(db) == 0


def test_task_insert_failure_rolls_back_record_change(
    db, vacant_calling, member, clerk_identity, monkeypatch
):
    def failing_enqueue(db, tasks):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(task_service, "enqueue", failing_enqueue)

    with pytest.raises(RuntimeError):
        calling_service.assign_member(db, vacant_calling, member, clerk_identity)

    db.refresh(vacant_calling)
    assert vacant_calling.status == CallingStatus.VACANT.value
    assert vacant_calling.member_id is None
    assert task_count(db) == 0
