# teamboard/models/user.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from teamboard.models.base import Base

class User(Base):
    """
    User — участник команды. Роль admin/member, email уникален.
    """
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)
    name: str = Column(String(128), nullable=False, doc="Имя")
    email: str = Column(String(255), unique=True, nullable=False, index=True, doc="Email")
    avatar: str = Column(String(255), nullable=True, doc="URL аватара")
    role: str = Column(String(16), nullable=False, default="member", doc="Роль: admin, member")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, doc="Дата обновления")

    # --- Связи ---
    assignments = relationship("ProjectAssignee", back_populates="user", cascade="all, delete")
    comments = relationship("Comment", back_populates="user", cascade="all, delete")
    event_attendances = relationship("CalendarEventAttendee", back_populates="user", cascade="all, delete")

    @property
    def assignment_count(self) -> int:
        return len(self.assignments)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', email='{self.email}', role='{self.role}')>"
