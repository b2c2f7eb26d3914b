# teamboard/models/milestone.py
from datetime import datetime, date
from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from teamboard.models.base import Base

class Milestone(Base):
    """
    Milestone — контрольная точка проекта.
    """
    __tablename__ = "milestones"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID проекта")
    name: str = Column(String(200), nullable=False, doc="Название")
    description: str = Column(Text, nullable=True, doc="Описание")
    due_date: date = Column(Date, nullable=True, doc="Срок")
    completed: bool = Column(Boolean, default=False, nullable=False, doc="Достигнута")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    project = relationship("Project", back_populates="milestones")

    def __repr__(self):
        return f"<Milestone(id={self.id}, name='{self.name}', due_date={self.due_date}, completed={self.completed})>"
