#teamboard/api/project.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from teamboard.schemas.project import (
    ProjectCreate, ProjectRead, ProjectUpdate, ProjectDetail, ProjectMove, MoveCheck
)
from teamboard.schemas.milestone import MilestoneCreate, MilestoneRead
from teamboard.schemas.comment import CommentCreate, CommentRead
from teamboard.crud.project import (
    create_project,
    get_all_projects,
    update_project,
    reparent_project,
    check_move,
    delete_project,
)
from teamboard.crud.milestone import create_milestone
from teamboard.crud.comment import create_comment, get_project_comments
from teamboard.dependencies import get_db, require_admin, get_project_or_404
from teamboard.schemas.response import SuccessResponse
from teamboard.core.exceptions import (
    InvalidMove, NotFoundError, ProjectNotFound, ProjectValidationError, ValidationError
)
from teamboard.models.project import Project as ProjectModel
from teamboard.services.hierarchy import compute_level

import logging

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = logging.getLogger("TeamBoard.ProjectsAPI")

def _parse_parent_filter(parent_id: Optional[str]):
    # "null": только проекты верхнего уровня
    if parent_id == "null":
        return None
    try:
        return int(parent_id)
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="parent_id must be an integer or 'null'")

@router.get("/", response_model=List[ProjectRead])
def list_projects(
    project_status: Optional[str] = Query(None, alias="status"),
    parent_id: Optional[str] = Query(None),
    user_id: Optional[int] = Query(None),
    all_flat: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    Получить список проектов с фильтрацией.
    """
    filters = {"all_flat": all_flat}
    if project_status is not None:
        filters["status"] = project_status
    if parent_id is not None:
        filters["parent_id"] = _parse_parent_filter(parent_id)
    if user_id is not None:
        filters["user_id"] = user_id
    try:
        return get_all_projects(db, filters=filters)
    except Exception as e:
        logger.error(f"Failed to list projects: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch projects.")

@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_new_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Создать новый проект (поля зависят от уровня родителя).
    """
    try:
        return create_project(db, data.model_dump(exclude_unset=True))
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in create_new_project: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred while creating the project.")

@router.get("/{project_id}", response_model=ProjectDetail)
def get_one_project(
    project: ProjectModel = Depends(get_project_or_404),
):
    """
    Получить проект по ID вместе с вычисленным уровнем.
    """
    detail = ProjectDetail.model_validate(project)
    detail.level = compute_level(project)
    return detail

@router.patch("/{project_id}", response_model=ProjectRead)
def update_one_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Обновить проект. Переданные исполнители заменяют текущих.
    """
    try:
        return update_project(db, project_id, data.model_dump(exclude_unset=True))
    except InvalidMove as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update project {project_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during project update.")

@router.post("/{project_id}/move", response_model=ProjectRead)
def move_project(
    project_id: int,
    data: ProjectMove,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Перенести проект (drag-and-drop) под другой проект или на верхний уровень.
    """
    try:
        return reparent_project(db, project_id, data.parent_id)
    except InvalidMove as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to move project {project_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred while moving the project.")

@router.get("/{project_id}/can-move", response_model=MoveCheck)
def can_move_project(
    project_id: int,
    target_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Проверить, можно ли бросить проект на target_id (без target_id — на верхний уровень).
    """
    try:
        allowed = check_move(db, project_id, target_id)
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MoveCheck(project_id=project_id, target_id=target_id, allowed=allowed)

@router.delete("/{project_id}", response_model=SuccessResponse)
def delete_one_project(
    project_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Удалить проект вместе со всеми подпроектами.
    """
    try:
        deleted_ids = delete_project(db, project_id)
        return SuccessResponse(result=deleted_ids, detail="Project deleted")
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ProjectValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete project {project_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during project deletion.")

# --- Вехи и комментарии проекта ---

@router.post("/{project_id}/milestones", response_model=MilestoneRead, status_code=status.HTTP_201_CREATED)
def add_milestone(
    project_id: int,
    data: MilestoneCreate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        return create_milestone(db, project_id, data.model_dump())
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to add milestone to project {project_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred while creating the milestone.")

@router.get("/{project_id}/comments", response_model=List[CommentRead])
def list_comments(project_id: int, db: Session = Depends(get_db)):
    try:
        return get_project_comments(db, project_id)
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.post("/{project_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def add_comment(
    project_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
):
    """
    Оставить комментарий. Доступно без admin-токена.
    """
    try:
        return create_comment(db, project_id, data.model_dump())
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to add comment to project {project_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred while creating the comment.")
