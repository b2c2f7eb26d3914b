#teamboard/api/analytics.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from teamboard.schemas.analytics import AnalyticsOverview, ProjectRollup, ProjectStats
from teamboard.crud.project import get_project_forest
from teamboard.services.analytics import compute_rollups, compute_stats
from teamboard.dependencies import get_db
import logging

router = APIRouter(prefix="/analytics", tags=["Analytics"])
logger = logging.getLogger("TeamBoard.AnalyticsAPI")

@router.get("/", response_model=AnalyticsOverview)
def get_overview(db: Session = Depends(get_db)):
    """
    Сводная статистика и итоги по проектам верхнего уровня за один запрос.
    """
    try:
        forest = get_project_forest(db)
        return AnalyticsOverview(stats=compute_stats(forest), rollups=compute_rollups(forest))
    except Exception as e:
        logger.error(f"Failed to compute analytics: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to compute analytics.")

@router.get("/stats", response_model=ProjectStats)
def get_stats(db: Session = Depends(get_db)):
    try:
        return compute_stats(get_project_forest(db))
    except Exception as e:
        logger.error(f"Failed to compute project stats: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to compute project stats.")

@router.get("/rollups", response_model=List[ProjectRollup])
def get_rollups(db: Session = Depends(get_db)):
    try:
        return compute_rollups(get_project_forest(db))
    except Exception as e:
        logger.error(f"Failed to compute project rollups: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to compute project rollups.")
