from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.ballot_model import Ballot
from app.services.errors import AlreadyVoted
from app.utils.day_buckets import day_bucket


async def find_ballot_for_day(
    session: AsyncSession,
    user_id: int,
    reference: datetime,
    tz_name: str = "UTC",
) -> Optional[Ballot]:
    stmt = (
        select(Ballot)
        .where(Ballot.user_id == user_id, Ballot.day == day_bucket(reference, tz_name))
        .options(
            selectinload(Ballot.brand1),
            selectinload(Ballot.brand2),
            selectinload(Ballot.brand3),
        )
    )
    return (await session.execute(stmt)).scalars().first()


async def ensure_not_voted(
    session: AsyncSession,
    user_id: int,
    reference: datetime,
    tz_name: str = "UTC",
) -> None:
    """
    Fast-path rejection for a user who already has a ballot in the day.
    This read alone is racy; the (user_id, day) unique constraint on the
    ballots table is the real guard and is handled at insert time.
    """
    existing = await session.scalar(
        select(Ballot.id).where(
            Ballot.user_id == user_id,
            Ballot.day == day_bucket(reference, tz_name),
        )
    )
    if existing is not None:
        raise AlreadyVoted("You have already voted today.")
