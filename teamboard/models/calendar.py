# teamboard/models/calendar.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from teamboard.models.base import Base

class CalendarEvent(Base):
    """
    CalendarEvent — событие календаря: расписание (schedule) или встреча (meeting).
    Для расписания используются location/content, для встречи — purpose/result.
    """
    __tablename__ = "calendar_events"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    type: str = Column(String(16), nullable=False, doc="Тип: schedule, meeting")
    title: str = Column(String(200), nullable=False, doc="Заголовок")
    date: datetime = Column(DateTime(timezone=True), nullable=False, doc="Дата события")
    start_time: str = Column(String(5), nullable=True, doc="Начало (HH:MM)")
    end_time: str = Column(String(5), nullable=True, doc="Окончание (HH:MM)")
    location: str = Column(String(255), nullable=True, doc="Место")
    content: str = Column(Text, nullable=True, doc="Содержание (schedule)")
    purpose: str = Column(Text, nullable=True, doc="Цель встречи (meeting)")
    result: str = Column(Text, nullable=True, doc="Итоги встречи (meeting)")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    attendees = relationship(
        "CalendarEventAttendee",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="CalendarEventAttendee.id",
    )

    __table_args__ = (
        Index("ix_calendar_events_date", "date"),
    )

    def __repr__(self):
        return f"<CalendarEvent(id={self.id}, type='{self.type}', title='{self.title}', date={self.date})>"

class CalendarEventAttendee(Base):
    __tablename__ = "calendar_event_attendees"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    event_id: int = Column(Integer, ForeignKey("calendar_events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    event = relationship("CalendarEvent", back_populates="attendees")
    user = relationship("User", back_populates="event_attendances")
