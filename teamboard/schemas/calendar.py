#teamboard/schemas/calendar.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import datetime

from teamboard.schemas.user import UserShort

EventType = Literal["schedule", "meeting"]
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

class CalendarEventBase(BaseModel):
    """
    CalendarEventBase — общие поля события календаря.
    """
    type: EventType = Field(..., description="Тип: schedule, meeting")
    title: str = Field(..., examples=["Sprint review"], description="Заголовок")
    date: datetime = Field(..., examples=["2026-10-20T00:00:00Z"], description="Дата события")
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN, examples=["10:00"], description="Начало (HH:MM)")
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN, examples=["11:30"], description="Окончание (HH:MM)")
    location: Optional[str] = Field(None, description="Место")
    content: Optional[str] = Field(None, description="Содержание (schedule)")
    purpose: Optional[str] = Field(None, description="Цель встречи (meeting)")
    result: Optional[str] = Field(None, description="Итоги встречи (meeting)")

class CalendarEventCreate(CalendarEventBase):
    attendee_ids: List[int] = Field(default_factory=list, description="Участники (ID пользователей)")

class CalendarEventUpdate(BaseModel):
    """
    CalendarEventUpdate — частичное обновление; attendee_ids заменяет список участников целиком.
    """
    type: Optional[EventType] = None
    title: Optional[str] = None
    date: Optional[datetime] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    location: Optional[str] = None
    content: Optional[str] = None
    purpose: Optional[str] = None
    result: Optional[str] = None
    attendee_ids: Optional[List[int]] = None

class CalendarAttendeeRead(BaseModel):
    id: int
    user_id: int
    user: Optional[UserShort] = None

    model_config = ConfigDict(from_attributes=True)

class CalendarEventRead(CalendarEventBase):
    id: int
    attendees: List[CalendarAttendeeRead] = Field(default_factory=list)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
