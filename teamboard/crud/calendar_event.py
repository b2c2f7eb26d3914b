# teamboard/crud/calendar_event.py
from sqlalchemy.orm import Session, selectinload
from datetime import datetime
from typing import List, Optional
import calendar
import logging

from teamboard.models.calendar import CalendarEvent, CalendarEventAttendee
from teamboard.core.constants import EVENT_TYPES
from teamboard.core.exceptions import CalendarEventNotFound, CalendarEventValidationError
from teamboard.crud.assignee import ensure_users_exist

logger = logging.getLogger("TeamBoard.Calendar")

EVENT_FIELDS = [
    "type", "title", "date", "start_time", "end_time",
    "location", "content", "purpose", "result",
]

def _month_window(year: int, month: int) -> tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise CalendarEventValidationError("Month must be between 1 and 12.")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end

def _validate_event(data: dict) -> None:
    if "title" in data and not (data["title"] or "").strip():
        raise CalendarEventValidationError("Event title is required.")
    if "type" in data and data["type"] not in EVENT_TYPES:
        raise CalendarEventValidationError(f"Unknown event type: {data['type']!r}")
    start, end = data.get("start_time"), data.get("end_time")
    if start and end and end < start:
        raise CalendarEventValidationError("End time cannot be before start time.")

def get_events(db: Session, year: Optional[int] = None, month: Optional[int] = None) -> List[CalendarEvent]:
    """
    События по дате. Если заданы year и month, только события этого месяца.
    """
    query = db.query(CalendarEvent).options(
        selectinload(CalendarEvent.attendees).joinedload(CalendarEventAttendee.user)
    )
    if year is not None and month is not None:
        start, end = _month_window(year, month)
        query = query.filter(CalendarEvent.date >= start, CalendarEvent.date <= end)
    return query.order_by(CalendarEvent.date.asc(), CalendarEvent.id.asc()).all()

def get_event(db: Session, event_id: int) -> CalendarEvent:
    event = (
        db.query(CalendarEvent)
        .options(selectinload(CalendarEvent.attendees).joinedload(CalendarEventAttendee.user))
        .filter(CalendarEvent.id == event_id)
        .first()
    )
    if not event:
        raise CalendarEventNotFound(f"Calendar event with id={event_id} not found.")
    return event

def create_event(db: Session, data: dict) -> CalendarEvent:
    """
    Создать событие вместе со списком участников.
    """
    _validate_event({**data, "title": data.get("title")})
    if data.get("date") is None:
        raise CalendarEventValidationError("Event date is required.")
    attendee_ids = list(dict.fromkeys(data.get("attendee_ids") or []))
    ensure_users_exist(db, attendee_ids)

    event = CalendarEvent(**{field: data.get(field) for field in EVENT_FIELDS})
    event.title = event.title.strip()
    event.attendees = [CalendarEventAttendee(user_id=user_id) for user_id in attendee_ids]
    db.add(event)
    try:
        db.commit()
        logger.info(f"Created {event.type} event '{event.title}' (ID: {event.id})")
        return get_event(db, event.id)
    except Exception as e:
        db.rollback()
        logger.error(f"Exception while creating calendar event: {e}")
        raise CalendarEventValidationError("Database error while creating calendar event.")

def update_event(db: Session, event_id: int, data: dict) -> CalendarEvent:
    """
    Частичное обновление. Переданный attendee_ids заменяет участников целиком.
    """
    event = get_event(db, event_id)
    _validate_event({"start_time": event.start_time, "end_time": event.end_time, **data})

    attendee_ids = data.get("attendee_ids")
    if attendee_ids is not None:
        attendee_ids = list(dict.fromkeys(attendee_ids))
        ensure_users_exist(db, attendee_ids)

    for field in EVENT_FIELDS:
        if field in data and not (data[field] is None and field in ("type", "title", "date")):
            setattr(event, field, data[field])

    try:
        if attendee_ids is not None:
            event.attendees.clear()
            db.flush()
            event.attendees.extend(CalendarEventAttendee(user_id=user_id) for user_id in attendee_ids)
        db.commit()
        logger.info(f"Updated calendar event {event.id}")
        db.expire_all()
        return get_event(db, event_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update calendar event {event_id}: {e}")
        raise CalendarEventValidationError("Database error while updating calendar event.")

def delete_event(db: Session, event_id: int) -> bool:
    event = get_event(db, event_id)
    try:
        db.delete(event)
        db.commit()
        db.expire_all()
        logger.info(f"Deleted calendar event {event_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete calendar event {event_id}: {e}")
        raise CalendarEventValidationError("Database error while deleting calendar event.")
