#teamboard/schemas/analytics.py
from pydantic import BaseModel, Field
from typing import Dict, List

class MemberStats(BaseModel):
    """
    MemberStats — нагрузка участника по всем назначениям.
    """
    user_id: int
    name: str
    total_tasks: int = 0
    completed_tasks: int = 0
    project_count: int = 0
    completion_rate: int = 0

class ProjectStats(BaseModel):
    """
    ProjectStats — сводная статистика по лесу проектов.
    """
    total: int = 0
    top_level: int = 0
    sub_projects: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    avg_progress: int = 0
    overdue: int = 0
    project_completion_rate: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    task_completion_rate: int = 0
    members: List[MemberStats] = Field(default_factory=list)

class ProjectRollup(BaseModel):
    """
    ProjectRollup — итог по одному проекту верхнего уровня и его поддереву.
    """
    project_id: int
    name: str
    total_sub_projects: int = 0
    completed_projects: int = 0
    completion_rate: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    task_completion_rate: int = 0

class AnalyticsOverview(BaseModel):
    stats: ProjectStats
    rollups: List[ProjectRollup] = Field(default_factory=list)
