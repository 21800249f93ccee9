import logging
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import Settings
from app.models.ballot_model import Ballot
from app.models.user_model import User
from app.services import leaderboard, points
from app.services.ballot_validator import validate_ballot
from app.services.daily_guard import ensure_not_voted, find_ballot_for_day
from app.services.errors import AlreadyVoted, BallotNotFound, ScoringError, UserNotFound
from app.utils.day_buckets import day_bucket, utcnow

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Daily voting and scoring: admits ballots and credits points for them."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def submit_ballot(
        self,
        user_id: int,
        brand_ids: Sequence[int],
        now: Optional[datetime] = None,
    ) -> Ballot:
        """
        Validate, check the day, persist the ballot and credit the vote reward.
        The insert and the points increment commit in one transaction, so a
        stored ballot always has its reward. A duplicate (user, day) insert
        that slips past the read-check surfaces as AlreadyVoted.
        """
        now = now or utcnow()
        tz_name = self.settings.day_timezone

        try:
            ids = await validate_ballot(self.db, brand_ids)
            await ensure_not_voted(self.db, user_id, now, tz_name)
            if await self.db.get(User, user_id) is None:
                raise UserNotFound(f"User with ID {user_id} not found.")
        except ScoringError as e:
            logger.info("Rejected ballot from user %s: %s", user_id, e.reason)
            raise

        ballot = Ballot(
            user_id=user_id,
            brand1_id=ids[0],
            brand2_id=ids[1],
            brand3_id=ids[2],
            date=now,
            day=day_bucket(now, tz_name),
        )
        self.db.add(ballot)

        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            if await self._has_ballot_on(user_id, now):
                logger.info("Rejected ballot from user %s: already_voted (constraint)", user_id)
                raise AlreadyVoted("You have already voted today.")
            raise

        try:
            balance = await points.increment_points(self.db, user_id, self.settings.vote_reward_points)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Admitted ballot %s from user %s for %s (balance %s)",
            ballot.id, user_id, ballot.day.isoformat(), balance,
        )
        await self.db.refresh(ballot, attribute_names=["brand1", "brand2", "brand3"])
        return ballot

    async def _has_ballot_on(self, user_id: int, reference: datetime) -> bool:
        existing = await self.db.scalar(
            select(Ballot.id).where(
                Ballot.user_id == user_id,
                Ballot.day == day_bucket(reference, self.settings.day_timezone),
            )
        )
        return existing is not None

    async def get_todays_ballot(self, user_id: int, reference: Optional[datetime] = None) -> Optional[Ballot]:
        return await find_ballot_for_day(
            self.db, user_id, reference or utcnow(), self.settings.day_timezone
        )

    async def get_ballot(self, ballot_id: int) -> Ballot:
        stmt = (
            select(Ballot)
            .where(Ballot.id == ballot_id)
            .options(
                selectinload(Ballot.brand1),
                selectinload(Ballot.brand2),
                selectinload(Ballot.brand3),
            )
        )
        ballot = (await self.db.execute(stmt)).scalars().first()
        if ballot is None:
            raise BallotNotFound(f"Ballot with ID {ballot_id} not found.")
        return ballot

    async def get_vote_history(self, user_id: int, page: int = 1, limit: int = 60):
        return await leaderboard.get_vote_history(self.db, user_id, page, limit)

    async def get_personal_top_brands(self, user_id: int) -> List[leaderboard.BrandPoints]:
        return await leaderboard.get_personal_top_brands(self.db, user_id)

    async def grant_share_bonus_once(self, user_id: int) -> bool:
        return await points.grant_share_bonus_once(
            self.db, user_id, self.settings.share_bonus_points
        )
