# teamboard/crud/milestone.py
from sqlalchemy.orm import Session
from teamboard.models.milestone import Milestone
from teamboard.core.exceptions import MilestoneNotFound, ProjectValidationError
from teamboard.crud.project import get_project
import logging

logger = logging.getLogger("TeamBoard.Milestones")

def create_milestone(db: Session, project_id: int, data: dict) -> Milestone:
    """
    Добавить веху к проекту.
    """
    project = get_project(db, project_id)
    name = (data.get("name") or "").strip()
    if not name:
        raise ProjectValidationError("Milestone name is required.")
    milestone = Milestone(
        project=project,
        name=name,
        description=data.get("description"),
        due_date=data.get("due_date"),
        completed=bool(data.get("completed", False)),
    )
    db.add(milestone)
    try:
        db.commit()
        db.refresh(milestone)
        logger.info(f"Created milestone '{milestone.name}' for project {project.id}")
        return milestone
    except Exception as e:
        db.rollback()
        logger.error(f"Exception while creating milestone: {e}")
        raise ProjectValidationError("Database error while creating milestone.")

def get_milestone(db: Session, milestone_id: int) -> Milestone:
    milestone = db.get(Milestone, milestone_id)
    if not milestone:
        raise MilestoneNotFound(f"Milestone with id={milestone_id} not found.")
    return milestone

def update_milestone(db: Session, milestone_id: int, data: dict) -> Milestone:
    milestone = get_milestone(db, milestone_id)
    if "name" in data:
        name = (data["name"] or "").strip()
        if not name:
            raise ProjectValidationError("Milestone name is required.")
        milestone.name = name
    for field in ("description", "due_date"):
        if field in data:
            setattr(milestone, field, data[field])
    if data.get("completed") is not None:
        milestone.completed = bool(data["completed"])
    try:
        db.commit()
        db.refresh(milestone)
        logger.info(f"Updated milestone {milestone.id}")
        return milestone
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update milestone {milestone_id}: {e}")
        raise ProjectValidationError("Database error while updating milestone.")

def delete_milestone(db: Session, milestone_id: int) -> bool:
    milestone = get_milestone(db, milestone_id)
    try:
        db.delete(milestone)
        db.commit()
        db.expire_all()
        logger.info(f"Deleted milestone {milestone_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete milestone {milestone_id}: {e}")
        raise ProjectValidationError("Database error while deleting milestone.")
