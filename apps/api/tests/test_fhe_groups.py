"""Tests for FHE group endpoints."""

import pytest
from httpx import AsyncClient

from ward_api.db.models import FheGroup, Member
from ward_api.services import storage_client


@pytest.fixture
def eq_client(client_for, make_user) -> AsyncClient:
    return client_for(make_user("elders_quorum"))


@pytest.mark.asyncio
async def test_create_group_with_leader_and_roster(eq_client: AsyncClient, member):
    response = await eq_client.post(
        "/fhe-groups",
        json={"name": "Oak Street", "leader_id": str(member.id), "meeting_time": "Mon 7pm"},
    )
    assert response.status_code == 201
    group = response.json()
    assert group["leader"]["name"] == "Alice Example"

    response = await eq_client.post(
        f"/fhe-groups/{group['id']}/members", json={"member_id": str(member.id)}
    )
    assert response.status_code == 200
    assert [m["name"] for m in response.json()["members"]] == ["Alice Example"]


@pytest.mark.asyncio
async def test_member_in_at_most_one_group(eq_client: AsyncClient, db, member):
    first = FheGroup(name="First")
    second = FheGroup(name="Second")
    db.add_all([first, second])
    db.commit()

    await eq_client.post(f"/fhe-groups/{first.id}/members", json={"member_id": str(member.id)})
    await eq_client.post(f"/fhe-groups/{second.id}/members", json={"member_id": str(member.id)})

    db.refresh(member)
    assert member.fhe_group_id == second.id
    first_members = (await eq_client.get(f"/fhe-groups/{first.id}")).json()["members"]
    assert first_members == []


@pytest.mark.asyncio
async def test_remove_member_not_in_group_400(eq_client: AsyncClient, db, member):
    group = FheGroup(name="Lonely")
    db.add(group)
    db.commit()

    response = await eq_client.delete(f"/fhe-groups/{group.id}/members/{member.id}")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_group_unassigns_members(eq_client: AsyncClient, db):
    group = FheGroup(name="Doomed")
    db.add(group)
    db.flush()
    people = [Member(name=n, fhe_group_id=group.id) for n in ("Gina", "Hank")]
    db.add_all(people)
    db.commit()

    response = await eq_client.delete(f"/fhe-groups/{group.id}")
    assert response.status_code == 204

    for person in people:
        db.refresh(person)
        assert person.fhe_group_id is None
    assert db.query(FheGroup).count() == 0


@pytest.mark.asyncio
async def test_clerk_can_view_but_not_edit_groups(clerk_client: AsyncClient):
    assert (await clerk_client.get("/fhe-groups")).status_code == 200
    assert (await clerk_client.post("/fhe-groups", json={"name": "Nope"})).status_code == 403


@pytest.mark.asyncio
async def test_upload_image_stores_public_url(eq_client: AsyncClient, db, monkeypatch):
    group = FheGroup(name="Pictured")
    db.add(group)
    db.commit()
    uploads = []

    def fake_upload(group_id, content, content_type, ext, client=None):
        uploads.append((group_id, content_type, ext, len(content)))
        return f"https://cdn.example.org/{storage_client.group_image_key(group_id, ext)}"

    monkeypatch.setattr(storage_client, "upload_group_image", fake_upload)

    response = await eq_client.post(
        f"/fhe-groups/{group.id}/image",
        files={"file": ("party.png", b"\x89PNG fake", "image/png")},
    )

    assert response.status_code == 200
    assert response.json()["activity_image"].startswith(
        f"https://cdn.example.org/fhe-groups/{group.id}-"
    )
    assert uploads == [(group.id, "image/png", "png", 9)]


@pytest.mark.asyncio
async def test_upload_rejects_non_image(eq_client: AsyncClient, db):
    group = FheGroup(name="Docs")
    db.add(group)
    db.commit()

    response = await eq_client.post(
        f"/fhe-groups/{group.id}/image",
        files={"file": ("notes.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert response.status_code == 400


def test_validate_image_extension_fallback():
    assert storage_client.validate_image("photo", "image/jpeg", 10) == "jpg"
    assert storage_client.validate_image("photo.JPEG", "image/jpeg", 10) == "jpeg"
    with pytest.raises(ValueError):
        storage_client.validate_image("empty.png", "image/png", 0)
