#teamboard/schemas/project.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Literal
from datetime import date, datetime

from teamboard.schemas.assignee import AssigneeInput, ProjectAssigneeRead
from teamboard.schemas.milestone import MilestoneRead
from teamboard.schemas.comment import CommentRead

ProjectStatus = Literal["NOT_STARTED", "IN_PROGRESS", "COMPLETED"]
ProjectPriority = Literal["LOW", "MEDIUM", "HIGH", "URGENT"]

def _blank_date_to_none(value):
    # формы присылают "" для пустой даты
    if isinstance(value, str) and not value.strip():
        return None
    return value

class ProjectBase(BaseModel):
    """
    ProjectBase — базовая схема проекта.
    """
    name: str = Field(..., examples=["2026 Platform roadmap"], description="Название проекта")
    description: Optional[str] = Field(None, description="Описание")
    goal: Optional[str] = Field(None, description="Цель")
    key_results: Optional[str] = Field(None, description="Ключевые результаты")
    status: ProjectStatus = Field("NOT_STARTED", description="Статус (уровень 2+)")
    priority: ProjectPriority = Field("MEDIUM", description="Приоритет (уровень 1+)")
    start_date: Optional[date] = Field(None, examples=["2026-01-01"], description="Дата начала (уровень 2+)")
    end_date: Optional[date] = Field(None, examples=["2026-03-31"], description="Дата окончания (уровень 2+)")
    progress: int = Field(0, description="Прогресс 0-100 (уровень 2+)")
    parent_id: Optional[int] = Field(None, description="ID родительского проекта")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_dates(cls, v):
        return _blank_date_to_none(v)

class ProjectCreate(ProjectBase):
    """
    ProjectCreate — создание проекта. Исполнители задаются через assignees_with_tasks
    (приоритетно) или assignee_ids (первый — lead, остальные — support).
    """
    assignee_ids: Optional[List[int]] = Field(None, description="ID исполнителей")
    assignees_with_tasks: Optional[List[AssigneeInput]] = Field(None, description="Исполнители с ролями и задачами")

class ProjectUpdate(BaseModel):
    """
    ProjectUpdate — частичное обновление проекта (меняются только переданные поля).
    """
    name: Optional[str] = None
    description: Optional[str] = None
    goal: Optional[str] = None
    key_results: Optional[str] = None
    status: Optional[ProjectStatus] = None
    priority: Optional[ProjectPriority] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: Optional[int] = None
    parent_id: Optional[int] = None
    assignee_ids: Optional[List[int]] = None
    assignees_with_tasks: Optional[List[AssigneeInput]] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_dates(cls, v):
        return _blank_date_to_none(v)

class ProjectMove(BaseModel):
    """
    ProjectMove — перенос проекта под другой проект (None — на верхний уровень).
    """
    parent_id: Optional[int] = Field(None, description="ID нового родителя")

class ProjectShort(BaseModel):
    """
    ProjectShort — сокращённая схема проекта.
    """
    id: int
    name: str
    parent_id: Optional[int] = None
    status: str
    progress: int

    model_config = ConfigDict(from_attributes=True)

class ProjectTree(BaseModel):
    """
    ProjectTree — узел дерева проектов с исполнителями и вложенными подпроектами.
    """
    id: int
    name: str = ""
    description: Optional[str] = None
    goal: Optional[str] = None
    key_results: Optional[str] = None
    status: str = "NOT_STARTED"
    priority: str = "MEDIUM"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = 0
    parent_id: Optional[int] = None
    assignees: List[ProjectAssigneeRead] = Field(default_factory=list)
    sub_projects: List["ProjectTree"] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

ProjectTree.model_rebuild()

class ProjectRead(ProjectTree):
    """
    ProjectRead — проект в списке: поддерево, исполнители, вехи.
    """
    parent: Optional[ProjectShort] = None
    milestones: List[MilestoneRead] = Field(default_factory=list)
    sub_project_count: int = 0
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime

class ProjectDetail(ProjectRead):
    """
    ProjectDetail — полная карточка проекта (response).
    """
    comments: List[CommentRead] = Field(default_factory=list)
    level: int = Field(0, description="Вычисленный уровень: 0, 1, 2")

class MoveCheck(BaseModel):
    project_id: int
    target_id: Optional[int] = None
    allowed: bool
