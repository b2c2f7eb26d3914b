#teamboard/schemas/assignee.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Literal
from datetime import datetime

from teamboard.schemas.user import UserShort

AssigneeRole = Literal["lead", "main", "support", "member"]

class AssigneeInput(BaseModel):
    """
    AssigneeInput — исполнитель проекта с ролью и списком задач (названия).
    """
    user_id: int = Field(..., examples=[17], description="ID пользователя")
    role: AssigneeRole = Field("support", description="Роль: lead, main, support")
    tasks: List[str] = Field(default_factory=list, examples=[["Draft plan", "Review PR"]], description="Задачи исполнителя")

class AssigneeTaskRead(BaseModel):
    id: int
    title: str
    completed: bool
    assignee_id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class AssigneeTaskUpdate(BaseModel):
    """
    AssigneeTaskUpdate — переименование задачи или отметка о выполнении.
    """
    title: Optional[str] = None
    completed: Optional[bool] = None

class ProjectAssigneeRead(BaseModel):
    """
    ProjectAssigneeRead — назначение пользователя на проект (response).
    """
    id: int
    project_id: int
    user_id: int
    role: str
    user: Optional[UserShort] = None
    tasks: List[AssigneeTaskRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
