# teamboard/models/assignee.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import relationship
from teamboard.models.base import Base

class ProjectAssignee(Base):
    """
    ProjectAssignee — связь пользователь ↔ проект с ролью и собственным списком задач.
    """
    __tablename__ = "project_assignees"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID проекта")
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID пользователя")
    role: str = Column(String(16), nullable=False, default="support", doc="Роль: lead, main, support")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата назначения")

    project = relationship("Project", back_populates="assignees")
    user = relationship("User", back_populates="assignments")
    tasks = relationship(
        "AssigneeTask",
        back_populates="assignee",
        cascade="all, delete-orphan",
        order_by="AssigneeTask.id",
    )

    __table_args__ = (
        Index("ix_project_assignees_project_user", "project_id", "user_id"),
    )

    def __repr__(self):
        return f"<ProjectAssignee(id={self.id}, project_id={self.project_id}, user_id={self.user_id}, role='{self.role}')>"

class AssigneeTask(Base):
    """
    AssigneeTask — пункт чек-листа исполнителя. Живёт и умирает вместе с назначением.
    """
    __tablename__ = "assignee_tasks"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    assignee_id: int = Column(Integer, ForeignKey("project_assignees.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID назначения")
    title: str = Column(String(300), nullable=False, doc="Название задачи")
    completed: bool = Column(Boolean, default=False, nullable=False, doc="Выполнена")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, doc="Дата изменения")

    assignee = relationship("ProjectAssignee", back_populates="tasks")

    def __repr__(self):
        return f"<AssigneeTask(id={self.id}, title='{self.title}', completed={self.completed})>"
