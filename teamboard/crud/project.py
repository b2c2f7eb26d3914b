# teamboard/crud/project.py
from sqlalchemy.orm import Session, selectinload, joinedload
from datetime import datetime, timezone
from teamboard.models.project import Project
from teamboard.models.assignee import ProjectAssignee
from teamboard.core.constants import DEFAULT_PRIORITY, DEFAULT_STATUS
from teamboard.core.exceptions import (
    InvalidMove,
    ProjectNotFound,
    ProjectValidationError,
)
from teamboard.crud.assignee import build_assignees, ensure_users_exist, replace_project_assignees
from teamboard.services.hierarchy import (
    ProjectForest,
    apply_status_rules,
    can_reparent,
    filter_fields_for_level,
    level_for_parent,
)
import logging
from typing import Optional, List, Dict, Any

logger = logging.getLogger("TeamBoard.Projects")

SCALAR_FIELDS = [
    "name", "description", "goal", "key_results", "status", "priority",
    "start_date", "end_date", "progress",
]

# NOT NULL в БД: явный null в PATCH игнорируется
NON_NULLABLE_FIELDS = {"name", "status", "priority", "progress"}

def _with_assignees(query):
    return query.options(
        selectinload(Project.assignees).selectinload(ProjectAssignee.tasks),
        selectinload(Project.assignees).joinedload(ProjectAssignee.user),
    )

def validate_project_payload(data: dict) -> None:
    """
    Проверяет имя, прогресс и порядок дат в payload проекта.
    """
    if "name" in data and not (data["name"] or "").strip():
        raise ProjectValidationError("Project name is required.")
    progress = data.get("progress")
    if progress is not None and not 0 <= int(progress) <= 100:
        raise ProjectValidationError("Progress must be between 0 and 100.")
    start, end = data.get("start_date"), data.get("end_date")
    if start and end and end < start:
        raise ProjectValidationError("End date cannot be before start date.")

def _get_parent(db: Session, parent_id: Optional[int]) -> Optional[Project]:
    if parent_id is None:
        return None
    parent = db.get(Project, parent_id)
    if not parent:
        raise ProjectNotFound(f"Parent project with id={parent_id} not found.")
    return parent

def create_project(db: Session, data: dict) -> Project:
    """
    Создаёт проект. Набор сохраняемых полей зависит от уровня, который
    определяется родителем.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ProjectValidationError("Project name is required.")

    parent = _get_parent(db, data.get("parent_id"))
    level = level_for_parent(parent)
    data = apply_status_rules(filter_fields_for_level({**data, "name": name}, level))
    validate_project_payload(data)

    project = Project(
        name=name,
        description=data.get("description"),
        goal=data.get("goal"),
        key_results=data.get("key_results"),
        status=data.get("status") or DEFAULT_STATUS,
        priority=data.get("priority") or DEFAULT_PRIORITY,
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
        progress=data.get("progress") or 0,
        parent_id=parent.id if parent else None,
    )
    assignees = build_assignees(data)
    if assignees:
        ensure_users_exist(db, [a.user_id for a in assignees])
        project.assignees = assignees

    db.add(project)
    try:
        db.commit()
        logger.info(f"Created project '{project.name}' (ID: {project.id}, level {level})")
        db.expire_all()
        return get_project(db, project.id)
    except Exception as e:
        db.rollback()
        logger.error(f"Exception during save: {e}")
        raise ProjectValidationError("Database error while creating project.")

def get_all_projects(
    db: Session,
    filters: Optional[Dict[str, Any]] = None,
) -> List[Project]:
    """
    Список проектов с фильтрами: status, parent_id (None — только верхний уровень),
    user_id (проекты, где пользователь исполнитель), all_flat (игнорировать parent_id).
    """
    query = _with_assignees(db.query(Project)).options(selectinload(Project.milestones))
    filters = filters or {}

    if "status" in filters:
        query = query.filter(Project.status == filters["status"])
    if not filters.get("all_flat", False) and "parent_id" in filters:
        parent_id = filters["parent_id"]
        if parent_id is None:
            query = query.filter(Project.parent_id.is_(None))
        else:
            query = query.filter(Project.parent_id == parent_id)
    if "user_id" in filters:
        query = query.filter(Project.assignees.any(ProjectAssignee.user_id == filters["user_id"]))

    return query.order_by(Project.created_at.desc(), Project.id.desc()).all()

def get_project(db: Session, project_id: int) -> Project:
    """
    Возвращает проект по ID.
    """
    project = _with_assignees(db.query(Project)).filter(Project.id == project_id).first()
    if not project:
        raise ProjectNotFound(f"Project with id={project_id} not found.")
    return project

def get_project_forest(db: Session) -> ProjectForest:
    """
    Свежий снимок всего дерева проектов из БД (корни — по дате создания, новые первыми).
    """
    roots = (
        _with_assignees(db.query(Project))
        .filter(Project.parent_id.is_(None))
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )
    return ProjectForest(roots)

def check_move(db: Session, project_id: int, new_parent_id: Optional[int]) -> bool:
    return can_reparent(project_id, new_parent_id, get_project_forest(db))

def _ensure_move_allowed(db: Session, project_id: int, new_parent_id: Optional[int]) -> None:
    if not check_move(db, project_id, new_parent_id):
        logger.warning(f"Rejected move of project {project_id} under {new_parent_id}")
        raise InvalidMove(
            f"Project {project_id} cannot be moved under project {new_parent_id}: "
            f"target is the project itself or one of its descendants."
        )

def reparent_project(db: Session, project_id: int, new_parent_id: Optional[int]) -> Project:
    """
    Переносит проект (вместе с поддеревом) под new_parent_id.
    Меняется только parent_id; проверка идёт по текущему состоянию БД.
    """
    project = get_project(db, project_id)
    _ensure_move_allowed(db, project_id, new_parent_id)
    old_parent_id = project.parent_id
    project.parent_id = new_parent_id
    try:
        db.commit()
        db.expire_all()
        logger.info(f"Moved project {project_id}: parent {old_parent_id} -> {new_parent_id}")
        return get_project(db, project_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to move project {project_id}: {e}")
        raise ProjectValidationError("Database error while moving project.")

def update_project(db: Session, project_id: int, data: dict) -> Project:
    """
    Частичное обновление: меняются только переданные поля, доступные на уровне проекта.
    Переданные исполнители заменяют текущих целиком.
    """
    project = get_project(db, project_id)

    parent_id = project.parent_id
    if "parent_id" in data and data["parent_id"] != project.parent_id:
        parent_id = data["parent_id"]
        _ensure_move_allowed(db, project_id, parent_id)
    level = level_for_parent(_get_parent(db, parent_id))

    data = apply_status_rules(filter_fields_for_level(data, level))
    validate_project_payload({
        "start_date": project.start_date,
        "end_date": project.end_date,
        **data,
    })

    assignees = build_assignees(data)
    if assignees is not None:
        ensure_users_exist(db, [a.user_id for a in assignees])

    changes = {}
    for field in SCALAR_FIELDS:
        if field in data and not (data[field] is None and field in NON_NULLABLE_FIELDS):
            value = data[field].strip() if field == "name" else data[field]
            if getattr(project, field) != value:
                changes[field] = (getattr(project, field), value)
            setattr(project, field, value)
    if parent_id != project.parent_id:
        changes["parent_id"] = (project.parent_id, parent_id)
        project.parent_id = parent_id

    project.updated_at = datetime.now(timezone.utc)

    try:
        if assignees is not None:
            replace_project_assignees(db, project, assignees)
        db.commit()
        if changes:
            logger.info(f"Updated project {project.id} fields: {changes}")
        else:
            logger.info(f"Update called but no field changes for project {project.id}")
        db.expire_all()
        return get_project(db, project_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update project: {e}")
        raise ProjectValidationError("Database error while updating project.")

def delete_project(db: Session, project_id: int) -> List[int]:
    """
    Удаляет проект вместе со всем поддеревом, вехами, комментариями,
    исполнителями и их задачами. Возвращает ID удалённых проектов.
    """
    project = get_project(db, project_id)
    deleted_ids = ProjectForest([project]).subtree_ids(project_id)
    try:
        db.delete(project)
        db.commit()
        db.expire_all()
        logger.info(f"Deleted project {project_id} with subtree {deleted_ids}")
        return deleted_ids
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete project {project_id}: {e}")
        raise ProjectValidationError("Database error while deleting project.")
