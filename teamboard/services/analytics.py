# teamboard/services/analytics.py
"""
Сводная статистика по лесу проектов: статусы, приоритеты, просрочки,
задачи исполнителей, нагрузка участников и итоги по проектам верхнего уровня.
"""
import logging
import math
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional

from teamboard.core.constants import PROJECT_PRIORITIES, PROJECT_STATUSES, STATUS_COMPLETED
from teamboard.schemas.analytics import MemberStats, ProjectRollup, ProjectStats
from teamboard.services.hierarchy import ForestInput, as_forest, flatten_assignees

logger = logging.getLogger("TeamBoard.Analytics")

UNASSIGNED_NAME = "Unassigned"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part * 100 / whole)


def _as_utc_datetime(value: Any) -> Optional[datetime]:
    # дата окончания считается наступившей в полночь UTC
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return None


def is_overdue(project: Any, now: datetime) -> bool:
    if project.status == STATUS_COMPLETED:
        return False
    end = _as_utc_datetime(getattr(project, "end_date", None))
    return end is not None and end < _as_utc_datetime(now)


def count_tasks(assignees: Iterable[Any]) -> tuple[int, int]:
    total = completed = 0
    for assignee in assignees:
        tasks = getattr(assignee, "tasks", None) or []
        total += len(tasks)
        completed += sum(1 for t in tasks if t.completed)
    return total, completed


def _bucket_counts(projects: List[Any], attr: str, buckets: Iterable[str]) -> Dict[str, int]:
    counts = {b: 0 for b in buckets}
    for project in projects:
        value = getattr(project, attr, None)
        if value in counts:
            counts[value] += 1
        else:
            logger.warning(f"Project id={project.id} has unknown {attr} {value!r}, not counted")
    return counts


def compute_member_stats(assignees: Iterable[Any]) -> List[MemberStats]:
    """
    Статистика по участникам. Сортировка по числу назначений (по убыванию),
    при равенстве сохраняется порядок первого появления.
    """
    members: Dict[int, MemberStats] = {}
    for assignee in assignees:
        entry = members.get(assignee.user_id)
        if entry is None:
            user = getattr(assignee, "user", None)
            name = getattr(user, "name", None) or UNASSIGNED_NAME
            entry = members[assignee.user_id] = MemberStats(user_id=assignee.user_id, name=name)
        total, completed = count_tasks([assignee])
        entry.project_count += 1
        entry.total_tasks += total
        entry.completed_tasks += completed

    result = sorted(members.values(), key=lambda m: m.project_count, reverse=True)
    for member in result:
        member.completion_rate = percent(member.completed_tasks, member.total_tasks)
    return result


def compute_stats(forest: ForestInput, now: Optional[datetime] = None) -> ProjectStats:
    """
    Считает сводную статистику по всему лесу. Вход не изменяется,
    пустой лес даёт нулевую статистику.
    """
    snapshot = as_forest(forest)
    now = _as_utc_datetime(now) if now else datetime.now(timezone.utc)

    projects = list(snapshot.walk())
    total = len(projects)
    top_level = len(snapshot.roots)

    progress_values = []
    for project in projects:
        progress = project.progress or 0
        if not 0 <= progress <= 100:
            logger.warning(f"Project id={project.id} has out-of-range progress {progress}")
        progress_values.append(progress)

    by_status = _bucket_counts(projects, "status", PROJECT_STATUSES)
    by_priority = _bucket_counts(projects, "priority", PROJECT_PRIORITIES)

    assignees = flatten_assignees(snapshot)
    total_tasks, completed_tasks = count_tasks(assignees)

    return ProjectStats(
        total=total,
        top_level=top_level,
        sub_projects=total - top_level,
        by_status=by_status,
        by_priority=by_priority,
        avg_progress=round_half_up(sum(progress_values) / total) if total else 0,
        overdue=sum(1 for p in projects if is_overdue(p, now)),
        project_completion_rate=percent(by_status[STATUS_COMPLETED], total),
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        task_completion_rate=percent(completed_tasks, total_tasks),
        members=compute_member_stats(assignees),
    )


def compute_rollups(forest: ForestInput) -> List[ProjectRollup]:
    """
    Итоги по каждому проекту верхнего уровня: доля завершённых проектов
    в поддереве (включая сам проект) и задачи только этого поддерева.
    """
    snapshot = as_forest(forest)
    rollups = []
    for root in snapshot.roots:
        subtree = list(snapshot.walk(root.id))
        completed = sum(1 for p in subtree if p.status == STATUS_COMPLETED)
        assignees = [a for p in subtree for a in (getattr(p, "assignees", None) or [])]
        total_tasks, completed_tasks = count_tasks(assignees)
        rollups.append(ProjectRollup(
            project_id=root.id,
            name=root.name,
            total_sub_projects=len(subtree) - 1,
            completed_projects=completed,
            completion_rate=percent(completed, len(subtree)),
            total_tasks=total_tasks,
            completed_tasks=completed_tasks,
            task_completion_rate=percent(completed_tasks, total_tasks),
        ))
    return rollups
