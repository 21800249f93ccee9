from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.deps.admin import require_admin
from app.deps.scoring import get_scoring_engine
from app.models.user_model import User
from app.schemas.ballot_schemas import BallotOut, VoteHistoryOut
from app.schemas.brand_schemas import RankedBrandOut
from app.schemas.user_schemas import (
    PointsBalanceOut, PublicUserOut, RemovePointsIn, ShareBonusOut, UserOut, UserUpdate,
)
from app.services import points, user_service
from app.services.scoring_engine import ScoringEngine
from app.utils.day_buckets import from_unix
from app.utils.token_utils import get_current_user

router = APIRouter(prefix="/user-service", tags=["user-service"])


@router.get("/user/{user_id}", response_model=PublicUserOut)
async def get_user(user_id: int, db: AsyncSession = Depends(get_async_session)):
    return await user_service.get_user(db, user_id)


@router.patch("/user/{user_id}", response_model=UserOut)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
):
    data = payload.model_dump(exclude_unset=True)
    if "role" in data and data["role"] is not None:
        data["role"] = data["role"].value
    return await user_service.update_user(db, user_id, data)


@router.delete("/user/{user_id}", status_code=204)
async def delete_user(
    user_id: int,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
):
    await user_service.delete_user(db, user_id)
    return Response(status_code=204)


@router.post("/user/{user_id}/remove-points", response_model=PointsBalanceOut)
async def remove_points(
    user_id: int,
    payload: RemovePointsIn,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
):
    balance = await points.remove_points(db, user_id, payload.points)
    return {"user_id": user_id, "points": balance}


@router.get("/user/{user_id}/vote-history", response_model=VoteHistoryOut)
async def get_vote_history(
    user_id: int,
    page_id: int = Query(1, ge=1),
    limit: int = Query(60, ge=1, le=365),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    count, by_day = await engine.get_vote_history(user_id, page_id, limit)
    return {"count": count, "data": by_day}


@router.get("/votes/{unix_date}", response_model=Optional[BallotOut])
async def get_votes_for_day(
    unix_date: int,
    user: User = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    try:
        reference = from_unix(unix_date)
    except (OverflowError, OSError, ValueError):
        raise HTTPException(status_code=400, detail="Invalid unix date")
    return await engine.get_todays_ballot(user.id, reference)


@router.get("/brands", response_model=List[RankedBrandOut])
async def get_personal_top_brands(
    user: User = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    ranked = await engine.get_personal_top_brands(user.id)
    return [{"brand": row.brand, "points": row.points} for row in ranked]


@router.post("/share-frame", response_model=ShareBonusOut)
async def share_frame(
    user: User = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    granted = await engine.grant_share_bonus_once(user.id)
    return {"granted": granted, "points": engine.settings.share_bonus_points if granted else 0}
