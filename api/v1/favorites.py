"""
Tai-Chi class locations and per-user favorites.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import get_current_user
from models.user import User
from repositories.favorite import FavoriteRepository
from schemas.common import MessageResponse
from schemas.favorite import FavoriteIdsResponse, LocationListResponse
from services.locations import TAI_CHI_LOCATIONS, get_location

logger = logging.getLogger(__name__)

router = APIRouter()


def ensure_location_exists(location_id: int) -> None:
    if get_location(location_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Location not found"
        )


@router.get("/locations", response_model=LocationListResponse, summary="Tai-Chi class locations")
async def list_locations(current_user: User = Depends(get_current_user)):
    return LocationListResponse(locations=TAI_CHI_LOCATIONS)


@router.get("/favorites", response_model=FavoriteIdsResponse, summary="Favorite location ids")
async def list_favorites(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        ids = await FavoriteRepository(db).get_location_ids(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching favorites for user {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch favorites"
        )
    return FavoriteIdsResponse(favorite_ids=ids)


@router.post("/favorites/{location_id}", response_model=MessageResponse, summary="Add a favorite")
async def add_favorite(
    location_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    ensure_location_exists(location_id)
    user_id = current_user.id
    try:
        await FavoriteRepository(db).add(user_id, location_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error adding favorite {location_id} for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add favorite"
        )
    return MessageResponse(message="Location added to favorites")


@router.delete("/favorites/{location_id}", response_model=MessageResponse, summary="Remove a favorite")
async def remove_favorite(
    location_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    user_id = current_user.id
    try:
        await FavoriteRepository(db).remove(user_id, location_id)
    except Exception as e:
        await db.rollback()
        logger.error(f"Error removing favorite {location_id} for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove favorite"
        )
    return MessageResponse(message="Location removed from favorites")
