from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_async_session
from app.deps.scoring import get_scoring_engine
from app.models.user_model import User
from app.schemas.ballot_schemas import BallotIn, BallotOut
from app.schemas.brand_schemas import BrandOut, BrandPageOut, LeaderboardEntryOut
from app.services import brand_service, leaderboard
from app.services.brand_service import BrandOrder
from app.services.scoring_engine import ScoringEngine
from app.utils.day_buckets import days_ago_bucket
from app.utils.token_utils import get_current_user

router = APIRouter(prefix="/brand-service", tags=["brand-service"])


@router.get("/all", response_model=BrandPageOut)
async def list_brands(
    order: BrandOrder = Query(BrandOrder.ALL),
    search: str = Query(""),
    page_id: int = Query(1, ge=1),
    limit: int = Query(15, ge=1, le=100),
    db: AsyncSession = Depends(get_async_session),
):
    brands, count = await brand_service.list_brands(db, order, search, page_id, limit)
    return {"page_id": page_id, "count": count, "brands": brands}


@router.get("/leaderboard", response_model=List[LeaderboardEntryOut])
async def global_leaderboard(
    period: str = Query("all", pattern="^(all|week)$"),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
):
    # "week" covers today and the six local days before it
    since = days_ago_bucket(6, settings.day_timezone) if period == "week" else None
    ranked = await leaderboard.get_global_leaderboard(db, since=since, limit=limit)
    return [
        {"rank": idx + 1, "brand": row.brand, "points": row.points}
        for idx, row in enumerate(ranked)
    ]


@router.get("/brand/{brand_id}", response_model=BrandOut)
async def get_brand(brand_id: int, db: AsyncSession = Depends(get_async_session)):
    return await brand_service.get_brand(db, brand_id)


@router.post("/vote", response_model=BallotOut, status_code=201)
async def vote_brands(
    payload: BallotIn,
    user: User = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    return await engine.submit_ballot(user.id, payload.brand_ids)
