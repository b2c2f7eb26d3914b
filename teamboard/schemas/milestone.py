#teamboard/schemas/milestone.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import date, datetime

class MilestoneBase(BaseModel):
    name: str = Field(..., examples=["Beta release"], description="Название вехи")
    description: Optional[str] = Field(None, description="Описание")
    due_date: Optional[date] = Field(None, examples=["2026-12-31"], description="Срок")
    completed: bool = Field(False, description="Достигнута")

class MilestoneCreate(MilestoneBase):
    pass

class MilestoneUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    completed: Optional[bool] = None

class MilestoneRead(MilestoneBase):
    id: int
    project_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
