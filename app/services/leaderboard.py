"""
Read-side aggregation over the ballot history.

A ballot contributes 60/30/10 weighted points to its 1st/2nd/3rd brand. The
personal and global leaderboards are the same grouped sum, computed in one
query over a UNION ALL of the three rank slots; ties are broken by brand id
ascending so the ordering is stable.
"""
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import select, func, literal_column, union_all
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.ballot_model import Ballot, RANK_WEIGHTS
from app.models.brand_model import Brand
from app.models.user_model import User
from app.services.errors import UserNotFound

PERSONAL_TOP_LIMIT = 10


@dataclass
class BrandPoints:
    brand: Brand
    points: int


def _weighted_slots(*criteria):
    slot_columns = (Ballot.brand1_id, Ballot.brand2_id, Ballot.brand3_id)
    selects = [
        select(
            column.label("brand_id"),
            literal_column(str(weight)).label("points"),
        ).where(*criteria)
        for column, weight in zip(slot_columns, RANK_WEIGHTS)
    ]
    return union_all(*selects).subquery("weighted_slots")


async def _ranked_brands(session: AsyncSession, limit: int, *criteria) -> List[BrandPoints]:
    slots = _weighted_slots(*criteria)
    total = func.sum(slots.c.points).label("total_points")
    stmt = (
        select(Brand, total)
        .join(slots, slots.c.brand_id == Brand.id)
        .group_by(Brand.id)
        .order_by(total.desc(), Brand.id.asc())
        .limit(limit)
    )
    rows = (await session.execute(stmt)).all()
    return [BrandPoints(brand=brand, points=int(points)) for brand, points in rows]


async def get_personal_top_brands(session: AsyncSession, user_id: int) -> List[BrandPoints]:
    return await _ranked_brands(session, PERSONAL_TOP_LIMIT, Ballot.user_id == user_id)


async def get_global_leaderboard(
    session: AsyncSession,
    since: Optional[date] = None,
    limit: int = 50,
) -> List[BrandPoints]:
    criteria = [Ballot.day >= since] if since is not None else []
    return await _ranked_brands(session, limit, *criteria)


async def get_vote_history(
    session: AsyncSession,
    user_id: int,
    page: int = 1,
    limit: int = 60,
) -> Tuple[int, Dict[str, Ballot]]:
    """
    Return (total ballot count, {YYYY-MM-DD: ballot}) for one page of the
    user's history, newest day first. At most one ballot exists per day.
    """
    if await session.get(User, user_id) is None:
        raise UserNotFound(f"User with ID {user_id} not found.")

    page = max(page, 1)
    count = await session.scalar(select(func.count(Ballot.id)).where(Ballot.user_id == user_id))

    stmt = (
        select(Ballot)
        .where(Ballot.user_id == user_id)
        .options(
            selectinload(Ballot.brand1),
            selectinload(Ballot.brand2),
            selectinload(Ballot.brand3),
        )
        .order_by(Ballot.day.desc(), Ballot.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    ballots = (await session.execute(stmt)).scalars().all()

    by_day: Dict[str, Ballot] = OrderedDict()
    for ballot in ballots:
        by_day[ballot.day.isoformat()] = ballot
    return int(count or 0), by_day
