"""Tests for member directory endpoints and delete cascade."""

from datetime import date

import pytest
from httpx import AsyncClient

from ward_api.db.enums import CallingStatus
from ward_api.db.models import Calling, FheGroup, Member
from ward_api.services import member_service


def test_delete_member_vacates_every_calling(db, member):
    callings = [
        Calling(
            title=title,
            organization="Relief Society",
            status=CallingStatus.FILLED.value,
            member_id=member.id,
            sustained_date=date(2026, 1, 4),
            is_set_apart=True,
        )
        for title in ("Secretary", "Teacher")
    ]
    db.add_all(callings)
    db.commit()
    member_id = member.id

    vacated = member_service.delete_member(db, member)

    assert len(vacated) == 2
    assert db.get(Member, member_id) is None
    for calling in callings:
        db.refresh(calling)
        assert calling.status == CallingStatus.VACANT.value
        assert calling.member_id is None
        assert calling.sustained_date is None
        assert calling.is_set_apart is False


def test_delete_member_clears_group_leader(db, member):
    group = FheGroup(name="Group 1", leader_id=member.id)
    db.add(group)
    db.commit()

    member_service.delete_member(db, member)

    db.refresh(group)
    assert group.leader_id is None


def test_unknown_group_rejected(db, member):
    import uuid

    from ward_api.schemas.member import MemberUpdate

    with pytest.raises(ValueError):
        member_service.update_member(db, member, MemberUpdate(fhe_group_id=uuid.uuid4()))


@pytest.mark.asyncio
async def test_create_and_search_members(clerk_client: AsyncClient):
    for name, email in (("Bob Builder", "bob@example.org"), ("Carol Singer", "carol@example.org")):
        response = await clerk_client.post(
            "/members", json={"name": name, "email": email, "skills": [" piano ", ""]}
        )
        assert response.status_code == 201
    assert response.json()["skills"] == ["piano"]

    response = await clerk_client.get("/members", params={"q": "carol"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["name"] == "Carol Singer"


@pytest.mark.asyncio
async def test_member_read_embeds_callings(clerk_client: AsyncClient, filled_calling, member):
    response = await clerk_client.get(f"/members/{member.id}")
    assert response.status_code == 200
    assert [c["title"] for c in response.json()["callings"]] == ["Sunday School Teacher"]


@pytest.mark.asyncio
async def test_update_member_partial(clerk_client: AsyncClient, member):
    response = await clerk_client.patch(
        f"/members/{member.id}", json={"status": "less-active", "phone": None}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "less-active"
    assert data["phone"] is None
    assert data["email"] == "alice@example.org"


@pytest.mark.asyncio
async def test_delete_member_via_api(clerk_client: AsyncClient, db, filled_calling, member):
    response = await clerk_client.delete(f"/members/{member.id}")
    assert response.status_code == 204

    db.refresh(filled_calling)
    assert filled_calling.status == CallingStatus.VACANT.value
    assert (await clerk_client.get(f"/members/{member.id}")).status_code == 404


@pytest.mark.asyncio
async def test_unassigned_members(clerk_client: AsyncClient, db, member):
    group = FheGroup(name="North")
    db.add(group)
    db.add(Member(name="Zed Grouped", fhe_group=group))
    db.commit()

    response = await clerk_client.get("/members/unassigned")
    assert [m["name"] for m in response.json()] == ["Alice Example"]
