"""Tests for the LCR follow-up task queue endpoints."""

from datetime import date

import pytest
from httpx import AsyncClient

from ward_api.db.enums import FollowUpTaskType
from ward_api.db.models import FollowUpTask


@pytest.fixture
def pending_task(db) -> FollowUpTask:
    task = FollowUpTask(
        type=FollowUpTaskType.CALLING_SUSTAINED.value,
        description="Alice Example was sustained as Primary Teacher",
        details={"memberId": "m", "date": "2026-01-04", "notes": "Sustained in Sacrament Meeting"},
        created_by="Clerk Operator",
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


@pytest.mark.asyncio
async def test_complete_then_uncomplete(clerk_client: AsyncClient, pending_task):
    response = await clerk_client.post(f"/lcr-updates/{pending_task.id}/complete")
    assert response.status_code == 200
    data = response.json()
    assert data["completed"] is True
    assert data["completed_by"] == "Clerk Operator"
    assert data["completed_at"] is not None

    response = await clerk_client.post(f"/lcr-updates/{pending_task.id}/uncomplete")
    assert response.status_code == 200
    data = response.json()
    assert data["completed"] is False
    assert data["completed_by"] is None
    assert data["completed_at"] is None


@pytest.mark.asyncio
async def test_completing_twice_keeps_original_stamp(
    clerk_client: AsyncClient, client_for, make_user, pending_task
):
    first = (await clerk_client.post(f"/lcr-updates/{pending_task.id}/complete")).json()

    other = client_for(make_user("bishopric", name="Bishop Operator"))
    second = (await other.post(f"/lcr-updates/{pending_task.id}/complete")).json()

    assert second["completed_by"] == first["completed_by"] == "Clerk Operator"
    assert second["completed_at"] == first["completed_at"]


@pytest.mark.asyncio
async def test_status_filter(clerk_client: AsyncClient, pending_task):
    assert (await clerk_client.get("/lcr-updates")).json()["total"] == 1

    await clerk_client.post(f"/lcr-updates/{pending_task.id}/complete")

    pending = (await clerk_client.get("/lcr-updates", params={"status": "pending"})).json()
    completed = (await clerk_client.get("/lcr-updates", params={"status": "completed"})).json()
    everything = (await clerk_client.get("/lcr-updates", params={"status": "all"})).json()
    assert (pending["total"], completed["total"], everything["total"]) == (0, 1, 1)
    assert everything["pending"] == 0


@pytest.mark.asyncio
async def test_queue_requires_member_edit(client_for, make_user, pending_task):
    eq = client_for(make_user("elders_quorum"))
    assert (await eq.get("/lcr-updates")).status_code == 403
    assert (await eq.post(f"/lcr-updates/{pending_task.id}/complete")).status_code == 403


@pytest.mark.asyncio
async def test_unknown_task_404(clerk_client: AsyncClient):
    import uuid

    response = await clerk_client.post(f"/lcr-updates/{uuid.uuid4()}/complete")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_assign_via_api_enqueues_task(clerk_client: AsyncClient, vacant_calling, member):
    response = await clerk_client.post(
        f"/callings/{vacant_calling.id}/assign", json={"member_id": str(member.id)}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["calling"]["status"] == "filled"
    assert data["calling"]["sustained_date"] == date.today().isoformat()
    assert [t["type"] for t in data["tasks_created"]] == ["calling_sustained"]

    queue = (await clerk_client.get("/lcr-updates")).json()
    assert queue["total"] == 1


@pytest.mark.asyncio
async def test_assign_filled_calling_400(clerk_client: AsyncClient, db, filled_calling, member):
    response = await clerk_client.post(
        f"/callings/{filled_calling.id}/assign", json={"member_id": str(member.id)}
    )
    assert response.status_code == 400
    assert db.query(FollowUpTask).count() == 0


@pytest.mark.asyncio
async def test_assign_unknown_member_404(clerk_client: AsyncClient, vacant_calling):
    import uuid

    response = await clerk_client.post(
        f"/callings/{vacant_calling.id}/assign", json={"member_id": str(uuid.uuid4())}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_release_vacant_400(clerk_client: AsyncClient, db, vacant_calling):
    response = await clerk_client.post(f"/callings/{vacant_calling.id}/release")
    assert response.status_code == 400
    assert db.query(FollowUpTask).count() == 0


@pytest.mark.asyncio
async def test_edit_form_via_api(clerk_client: AsyncClient, filled_calling):
    response = await clerk_client.patch(
        f"/callings/{filled_calling.id}", json={"is_set_apart": True, "notes": "Set apart Sunday"}
    )
    assert response.status_code == 200
    assert [t["type"] for t in response.json()["tasks_created"]] == ["calling_set_apart"]

    response = await clerk_client.patch(f"/callings/{filled_calling.id}", json={"title": "Gospel Doctrine Teacher"})
    assert response.json()["tasks_created"] == []


@pytest.mark.asyncio
async def test_member_role_cannot_edit_callings(member_client: AsyncClient, vacant_calling):
    response = await member_client.patch(f"/callings/{vacant_calling.id}", json={"notes": "x"})
    assert response.status_code == 403
    assert (await member_client.get("/callings")).status_code == 403
