from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CategoryOut(BaseModel):
    id: int
    name: str

    model_config = {
        "from_attributes": True
    }


class BrandSummaryOut(BaseModel):
    id: int
    name: str
    url: str
    image_url: str

    model_config = {
        "from_attributes": True
    }


class BrandOut(BrandSummaryOut):
    warpcast_url: str
    description: str
    profile: str
    channel: str
    follower_count: int
    score: int
    state_score: int
    score_week: int
    state_score_week: int
    ranking: str
    ranking_week: int
    bonus_points: int
    category: Optional[CategoryOut] = None
    created_at: Optional[datetime] = None


class BrandPageOut(BaseModel):
    page_id: int
    count: int
    brands: List[BrandOut]


class RankedBrandOut(BaseModel):
    brand: BrandSummaryOut
    points: int

    model_config = {
        "from_attributes": True
    }


class LeaderboardEntryOut(RankedBrandOut):
    rank: int
