"""
Fall log API endpoints.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_patient
from core.database import get_db
from models.user import User
from repositories.fall import FallRepository
from schemas.fall import FallCreate, FallRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=FallRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log a fall",
)
async def log_fall(
    fall: FallCreate,
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    if fall.fall_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Fall date is required."
        )

    user_id = current_user.id
    try:
        created = await FallRepository(db).create_for_user(user_id, fall)
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Integrity error logging fall for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Fall could not be saved."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Error logging fall for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while logging fall."
        )

    logger.info(f"User {user_id} logged fall {created.id} on {created.fall_date}")
    return created


@router.get(
    "",
    response_model=List[FallRead],
    summary="The current patient's fall log",
)
async def list_falls(
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await FallRepository(db).get_by_user_id(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching fall log for user {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching fall log."
        )
