from typing import List
from pydantic import BaseModel, Field


class TaiChiLocation(BaseModel):
    id: int
    title: str
    description: str
    latitude: float
    longitude: float


class LocationListResponse(BaseModel):
    locations: List[TaiChiLocation]


class FavoriteIdsResponse(BaseModel):
    favorite_ids: List[int] = Field(..., alias="favoriteIds")

    model_config = {"populate_by_name": True}
