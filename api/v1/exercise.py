"""
Exercise log API endpoints.

Weekly exercise minutes, one entry per week. Submitting a week that is
already logged overwrites it.
"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_caretaker, require_patient
from api.v1.users import get_linked_patient_or_404
from core.database import get_db
from core.security import get_current_user
from models.user import User
from repositories.exercise import ExerciseLogRepository
from schemas.exercise import ExerciseLogListResponse, ExerciseResponse, ExerciseSubmit

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/me/exercise",
    response_model=ExerciseResponse,
    summary="Submit a week's exercise minutes",
)
async def submit_exercise(
    body: ExerciseSubmit,
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    # Rollback expires current_user, so read the id up front
    user_id = current_user.id
    try:
        log = await ExerciseLogRepository(db).upsert(user_id, body.week_start, body.minutes)
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Concurrent exercise submission for user {user_id} week {body.week_start}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Exercise for this week was submitted concurrently. Please retry."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Error submitting exercise for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while submitting exercise."
        )
    return {"exercise": log}


@router.get(
    "/me/exercise",
    response_model=ExerciseLogListResponse,
    summary="The current user's exercise logs",
)
async def list_exercise(
    week_start: Optional[date] = Query(default=None, alias="weekStart"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        logs = await ExerciseLogRepository(db).get_by_user_id(current_user.id, week_start=week_start)
    except Exception as e:
        logger.error(f"Error fetching exercise logs for user {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching exercise logs."
        )
    return {"exercise_logs": logs}


@router.get(
    "/me/patients/{patient_id}/exercise",
    response_model=ExerciseLogListResponse,
    summary="A linked patient's exercise logs",
)
async def list_patient_exercise(
    patient_id: int,
    current_user: User = Depends(require_caretaker),
    db: AsyncSession = Depends(get_db)
):
    patient = await get_linked_patient_or_404(db, current_user, patient_id)
    try:
        logs = await ExerciseLogRepository(db).get_by_user_id(patient.id)
    except Exception as e:
        logger.error(f"Error fetching exercise logs for patient {patient_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching patient exercise logs."
        )
    return {"exercise_logs": logs}
