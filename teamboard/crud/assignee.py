# teamboard/crud/assignee.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional
from teamboard.models.assignee import ProjectAssignee, AssigneeTask
from teamboard.models.project import Project
from teamboard.models.user import User
from teamboard.core.constants import ASSIGNEE_ROLES, DEFAULT_ASSIGNEE_ROLE
from teamboard.core.exceptions import AssigneeTaskNotFound, UserNotFound, ProjectValidationError
import logging

logger = logging.getLogger("TeamBoard.Assignees")

def build_assignees(data: Dict[str, Any]) -> Optional[List[ProjectAssignee]]:
    """
    Собирает новые назначения из payload: assignees_with_tasks имеет приоритет,
    иначе assignee_ids (первый — lead, остальные — support).
    None — исполнители в запросе не передавались.
    """
    with_tasks = data.get("assignees_with_tasks")
    if with_tasks is not None:
        assignees = []
        for item in with_tasks:
            role = item.get("role") or DEFAULT_ASSIGNEE_ROLE
            if role not in ASSIGNEE_ROLES:
                raise ProjectValidationError(f"Unknown assignee role: {role!r}")
            titles = [t.strip() for t in (item.get("tasks") or []) if t and t.strip()]
            assignees.append(ProjectAssignee(
                user_id=item["user_id"],
                role=role,
                tasks=[AssigneeTask(title=title) for title in titles],
            ))
        return assignees

    assignee_ids = data.get("assignee_ids")
    if assignee_ids is not None:
        return [
            ProjectAssignee(user_id=user_id, role="lead" if index == 0 else DEFAULT_ASSIGNEE_ROLE)
            for index, user_id in enumerate(assignee_ids)
        ]
    return None

def ensure_users_exist(db: Session, user_ids: List[int]) -> None:
    """
    Проверяет, что все пользователи существуют.
    """
    wanted = set(user_ids)
    if not wanted:
        return
    found = {row[0] for row in db.query(User.id).filter(User.id.in_(wanted)).all()}
    missing = sorted(wanted - found)
    if missing:
        raise UserNotFound(f"Users not found: {missing}")

def replace_project_assignees(db: Session, project: Project, assignees: List[ProjectAssignee]) -> None:
    """
    Заменяет назначения проекта целиком: старые (вместе с задачами) удаляются,
    новые создаются. Проверку пользователей и коммит выполняет вызывающий код.
    """
    removed = len(project.assignees)
    project.assignees.clear()
    db.flush()
    project.assignees.extend(assignees)
    logger.info(f"Replaced assignees of project {project.id}: removed {removed}, added {len(assignees)}")

def get_assignee_task(db: Session, task_id: int) -> AssigneeTask:
    task = db.get(AssigneeTask, task_id)
    if not task:
        raise AssigneeTaskNotFound(f"Assignee task with id={task_id} not found.")
    return task

def update_assignee_task(db: Session, task_id: int, data: dict) -> AssigneeTask:
    """
    Переименовать задачу исполнителя или отметить её выполнение.
    """
    task = get_assignee_task(db, task_id)
    if "title" in data and data["title"] is not None:
        title = data["title"].strip()
        if not title:
            raise ProjectValidationError("Task title is required.")
        task.title = title
    if "completed" in data and data["completed"] is not None:
        task.completed = bool(data["completed"])
    try:
        db.commit()
        db.refresh(task)
        logger.info(f"Updated assignee task {task.id} (completed={task.completed})")
        return task
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update assignee task {task_id}: {e}")
        raise ProjectValidationError("Database error while updating task.")
