# teamboard/models/project.py
from datetime import datetime, date
from teamboard.models.base import Base
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Text, ForeignKey, Index, func
)
from sqlalchemy.orm import relationship

class Project(Base):
    """
    Project — узел дерева проектов. Уровень (0/1/2) не хранится, а вычисляется по цепочке родителей.
    """
    __tablename__ = "projects"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    name: str = Column(String(200), nullable=False, index=True, doc="Название проекта")
    description: str = Column(Text, nullable=True, doc="Описание")
    goal: str = Column(Text, nullable=True, doc="Цель")
    key_results: str = Column(Text, nullable=True, doc="Ключевые результаты")
    status: str = Column(String(32), nullable=False, default="NOT_STARTED", doc="Статус: NOT_STARTED, IN_PROGRESS, COMPLETED")
    priority: str = Column(String(16), nullable=False, default="MEDIUM", doc="Приоритет: LOW, MEDIUM, HIGH, URGENT")
    start_date: date = Column(Date, nullable=True, doc="Дата начала")
    end_date: date = Column(Date, nullable=True, doc="Дата окончания")
    progress: int = Column(Integer, nullable=False, default=0, doc="Прогресс 0-100")
    parent_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True, doc="ID родительского проекта")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, doc="Дата изменения")

    # --- Связи ---
    parent = relationship("Project", remote_side=[id], back_populates="sub_projects")
    sub_projects = relationship(
        "Project",
        back_populates="parent",
        cascade="all, delete",
        order_by="Project.id",
    )
    assignees = relationship(
        "ProjectAssignee",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectAssignee.id",
    )
    milestones = relationship(
        "Milestone",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Milestone.due_date",
    )
    comments = relationship(
        "Comment",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.desc()",
    )

    __table_args__ = (
        Index("ix_projects_status", "status"),
        Index("ix_projects_end_date", "end_date"),
    )

    @property
    def sub_project_count(self) -> int:
        return len(self.sub_projects)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def __repr__(self):
        return (
            f"<Project(id={self.id}, name='{self.name}', status='{self.status}', "
            f"priority='{self.priority}', parent_id={self.parent_id})>"
        )
