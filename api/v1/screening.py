"""
Screening API endpoints.

Submitting and listing STEADI fall-risk questionnaires.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user
from models.user import User
from repositories.screening import ScreeningRepository
from schemas.screening import ScreeningCreate, ScreeningCreatedResponse, ScreeningListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ScreeningCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a screening",
)
async def submit_screening(
    answers: ScreeningCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user_id = current_user.id
    try:
        screening = await ScreeningRepository(db).create_for_user(user_id, answers)
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Integrity error saving screening for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Screening could not be saved."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Error saving screening for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )

    logger.info(f"User {user_id} submitted screening {screening.id}")
    return {"message": "Screening submitted", "screening": screening}


@router.get(
    "",
    response_model=ScreeningListResponse,
    summary="List the current user's screenings",
)
async def list_screenings(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        screenings = await ScreeningRepository(db).get_by_user_id(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching screenings for user {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching screenings."
        )
    return {"screenings": screenings}
