"""Event service - ward calendar."""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from ward_api.db.models import Event
from ward_api.schemas.event import EventCreate, EventUpdate


def list_events(
    db: Session,
    on_date: date | None = None,
    start: date | None = None,
    end: date | None = None,
) -> list[Event]:
    """List events by date then time. start/end are inclusive."""
    if start and end and start > end:
        raise ValueError("start must be on or before end")

    query = db.query(Event)
    if on_date:
        query = query.filter(Event.date == on_date)
    if start:
        query = query.filter(Event.date >= start)
    if end:
        query = query.filter(Event.date <= end)
    return query.order_by(Event.date, Event.time).all()


def get_event(db: Session, event_id: UUID) -> Event | None:
    return db.query(Event).filter(Event.id == event_id).first()


def _clean_attendees(attendees: list[str] | None) -> list[str]:
    return [a.strip() for a in attendees or [] if a and a.strip()]


def create_event(db: Session, data: EventCreate) -> Event:
    event = Event(
        title=data.title.strip(),
        date=data.date,
        time=data.time,
        location=data.location,
        description=data.description,
        attendees=_clean_attendees(data.attendees),
        type=data.type.value,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def update_event(db: Session, event: Event, data: EventUpdate) -> Event:
    update_data = data.model_dump(exclude_unset=True)

    clearable_fields = {"location", "description"}
    for field, value in update_data.items():
        if value is None and field not in clearable_fields:
            continue
        if field == "type":
            value = value.value
        elif field == "attendees":
            value = _clean_attendees(value)
        elif field == "title":
            value = value.strip()
        setattr(event, field, value)

    db.commit()
    db.refresh(event)
    return event


def delete_event(db: Session, event: Event) -> None:
    db.delete(event)
    db.commit()
