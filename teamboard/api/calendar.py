#teamboard/api/calendar.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from teamboard.schemas.calendar import CalendarEventCreate, CalendarEventRead, CalendarEventUpdate
from teamboard.schemas.response import SuccessResponse
from teamboard.crud.calendar_event import (
    get_events,
    get_event,
    create_event,
    update_event,
    delete_event,
)
from teamboard.dependencies import get_db, require_admin
from teamboard.core.exceptions import CalendarEventNotFound, NotFoundError, ValidationError
import logging

router = APIRouter(prefix="/calendar", tags=["Calendar"])
logger = logging.getLogger("TeamBoard.CalendarAPI")

@router.get("/", response_model=List[CalendarEventRead])
def list_events(
    year: Optional[int] = Query(None),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    События календаря; year + month ограничивают выборку месяцем.
    """
    try:
        return get_events(db, year=year, month=month)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to list calendar events: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch calendar events.")

@router.post("/", response_model=CalendarEventRead, status_code=status.HTTP_201_CREATED)
def create_new_event(
    data: CalendarEventCreate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        return create_event(db, data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in create_new_event: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred while creating the event.")

@router.get("/{event_id}", response_model=CalendarEventRead)
def get_one_event(event_id: int, db: Session = Depends(get_db)):
    try:
        return get_event(db, event_id)
    except CalendarEventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.patch("/{event_id}", response_model=CalendarEventRead)
def update_one_event(
    event_id: int,
    data: CalendarEventUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Обновить событие; attendee_ids заменяет список участников.
    """
    try:
        return update_event(db, event_id, data.model_dump(exclude_unset=True))
    except CalendarEventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update calendar event {event_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during event update.")

@router.delete("/{event_id}", response_model=SuccessResponse)
def delete_one_event(
    event_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        delete_event(db, event_id)
        return SuccessResponse(result=event_id, detail="Event deleted")
    except CalendarEventNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete calendar event {event_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during event deletion.")
