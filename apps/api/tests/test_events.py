"""Tests for calendar event endpoints."""

import pytest
from httpx import AsyncClient


async def _create(c: AsyncClient, title: str, day: str, at: str, **extra):
    response = await c.post("/events", json={"title": title, "date": day, "time": at, **extra})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_events_ordered_by_date_then_time(clerk_client: AsyncClient):
    await _create(clerk_client, "Late", "2026-11-02", "19:00:00")
    await _create(clerk_client, "Early", "2026-11-02", "09:30:00", type="meeting")
    await _create(clerk_client, "Previous day", "2026-11-01", "20:00:00")

    titles = [e["title"] for e in (await clerk_client.get("/events")).json()]
    assert titles == ["Previous day", "Early", "Late"]


@pytest.mark.asyncio
async def test_event_filters(clerk_client: AsyncClient):
    await _create(clerk_client, "Oct", "2026-10-31", "10:00:00")
    await _create(clerk_client, "Nov", "2026-11-15", "10:00:00")

    on_day = (await clerk_client.get("/events", params={"date": "2026-11-15"})).json()
    assert [e["title"] for e in on_day] == ["Nov"]

    ranged = (
        await clerk_client.get("/events", params={"start": "2026-11-01", "end": "2026-11-30"})
    ).json()
    assert [e["title"] for e in ranged] == ["Nov"]

    bad = await clerk_client.get("/events", params={"start": "2026-12-01", "end": "2026-11-01"})
    assert bad.status_code == 400


@pytest.mark.asyncio
async def test_update_and_delete_event(clerk_client: AsyncClient):
    event = await _create(
        clerk_client, "Service project", "2026-11-07", "08:00:00",
        type="service", attendees=["Alice", " "], location="Chapel",
    )
    assert event["attendees"] == ["Alice"]

    response = await clerk_client.patch(f"/events/{event['id']}", json={"location": None, "type": "activity"})
    assert response.status_code == 200
    assert response.json()["location"] is None
    assert response.json()["type"] == "activity"

    assert (await clerk_client.delete(f"/events/{event['id']}")).status_code == 204
    assert (await clerk_client.get(f"/events/{event['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_member_can_view_but_not_edit_calendar(member_client: AsyncClient):
    assert (await member_client.get("/events")).status_code == 200
    response = await member_client.post(
        "/events", json={"title": "Nope", "date": "2026-11-01", "time": "10:00:00"}
    )
    assert response.status_code == 403
