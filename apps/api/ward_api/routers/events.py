"""Events router - ward calendar."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ward_api.core.deps import get_db, require_csrf_header, require_permission
from ward_api.core.permissions import Action, Resource
from ward_api.schemas.event import EventCreate, EventRead, EventUpdate
from ward_api.services import event_service

router = APIRouter()

can_view = require_permission(Resource.CALENDAR, Action.VIEW)
can_edit = require_permission(Resource.CALENDAR, Action.EDIT)

write_deps = [Depends(require_csrf_header), Depends(can_edit)]


def _get_or_404(db: Session, event_id: UUID):
    event = event_service.get_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.get("", response_model=list[EventRead], dependencies=[Depends(can_view)])
def list_events(
    on_date: date | None = Query(None, alias="date", description="Events on this day"),
    start: date | None = Query(None, description="Inclusive lower bound"),
    end: date | None = Query(None, description="Inclusive upper bound"),
    db: Session = Depends(get_db),
):
    try:
        return event_service.list_events(db, on_date=on_date, start=start, end=end)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{event_id}", response_model=EventRead, dependencies=[Depends(can_view)])
def get_event(event_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, event_id)


@router.post("", response_model=EventRead, status_code=201, dependencies=write_deps)
def create_event(data: EventCreate, db: Session = Depends(get_db)):
    return event_service.create_event(db, data)


@router.patch("/{event_id}", response_model=EventRead, dependencies=write_deps)
def update_event(event_id: UUID, data: EventUpdate, db: Session = Depends(get_db)):
    return event_service.update_event(db, _get_or_404(db, event_id), data)


@router.delete("/{event_id}", status_code=204, dependencies=write_deps)
def delete_event(event_id: UUID, db: Session = Depends(get_db)):
    event_service.delete_event(db, _get_or_404(db, event_id))
    return None
