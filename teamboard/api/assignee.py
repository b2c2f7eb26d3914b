#teamboard/api/assignee.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from teamboard.schemas.assignee import AssigneeTaskRead, AssigneeTaskUpdate
from teamboard.crud.assignee import update_assignee_task
from teamboard.dependencies import get_db
from teamboard.core.exceptions import AssigneeTaskNotFound, ValidationError
import logging

router = APIRouter(prefix="/assignee-tasks", tags=["Assignee tasks"])
logger = logging.getLogger("TeamBoard.AssigneesAPI")

@router.patch("/{task_id}", response_model=AssigneeTaskRead)
def update_task(
    task_id: int,
    data: AssigneeTaskUpdate,
    db: Session = Depends(get_db),
):
    """
    Отметить задачу исполнителя выполненной или переименовать её.
    """
    try:
        return update_assignee_task(db, task_id, data.model_dump(exclude_unset=True))
    except AssigneeTaskNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update assignee task {task_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during task update.")
