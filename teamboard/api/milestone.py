#teamboard/api/milestone.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from teamboard.schemas.milestone import MilestoneRead, MilestoneUpdate
from teamboard.schemas.response import SuccessResponse
from teamboard.crud.milestone import update_milestone, delete_milestone
from teamboard.dependencies import get_db, require_admin
from teamboard.core.exceptions import MilestoneNotFound, ValidationError
import logging

router = APIRouter(prefix="/milestones", tags=["Milestones"])
logger = logging.getLogger("TeamBoard.MilestonesAPI")

@router.patch("/{milestone_id}", response_model=MilestoneRead)
def update_one_milestone(
    milestone_id: int,
    data: MilestoneUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        return update_milestone(db, milestone_id, data.model_dump(exclude_unset=True))
    except MilestoneNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update milestone {milestone_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during milestone update.")

@router.delete("/{milestone_id}", response_model=SuccessResponse)
def delete_one_milestone(
    milestone_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        delete_milestone(db, milestone_id)
        return SuccessResponse(result=milestone_id, detail="Milestone deleted")
    except MilestoneNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete milestone {milestone_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during milestone deletion.")
