"""
Development-only endpoint that fills a patient's account with demo history.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_patient
from core.config import settings
from core.database import get_db
from models.user import User
from schemas.analytics import DemoDataSummary
from services.demo_data import DemoDataService

logger = logging.getLogger(__name__)

router = APIRouter()


async def demo_data_enabled() -> None:
    """Hide the endpoint entirely unless demo data is switched on."""
    if not settings.ENABLE_DEMO_DATA:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


@router.post(
    "/generate-fake-data",
    response_model=DemoDataSummary,
    summary="Generate demo data",
    dependencies=[Depends(demo_data_enabled)],
)
async def generate_fake_data(
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    user_id = current_user.id
    try:
        return await DemoDataService(db).regenerate(current_user)
    except Exception as e:
        logger.error(f"Demo data generation failed for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate fake data"
        )
