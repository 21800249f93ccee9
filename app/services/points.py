import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from app.models.daily_action_model import DailyActionKind, UserDailyAction
from app.models.user_model import User
from app.services.errors import UserNotFound

logger = logging.getLogger(__name__)


async def increment_points(session: AsyncSession, user_id: int, delta: int) -> int:
    """
    Add ``delta`` (may be negative) to the user's balance inside the current
    transaction and return the new balance. The addition is done by the
    database (points = points + delta), never read-modify-write in Python.
    Does not commit.
    """
    result = await session.execute(
        update(User)
        .where(User.id == user_id)
        .values(points=User.points + delta)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise UserNotFound(f"User with ID {user_id} not found.")

    balance = int(await session.scalar(select(User.points).where(User.id == user_id)))

    # keep an already-loaded User instance in sync without another round-trip
    loaded = session.identity_map.get(session.identity_key(User, user_id))
    if loaded is not None:
        set_committed_value(loaded, "points", balance)
    return balance


async def remove_points(session: AsyncSession, user_id: int, points: int) -> int:
    """Administrative decrement. The balance is allowed to go negative."""
    try:
        balance = await increment_points(session, user_id, -abs(points))
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    logger.info("Removed %s points from user %s (balance %s)", abs(points), user_id, balance)
    return balance


async def grant_action_bonus_once(
    session: AsyncSession,
    user_id: int,
    action: DailyActionKind,
    points: int,
) -> bool:
    """
    Credit ``points`` the first time ``action`` is recorded for the user.
    Returns False (and credits nothing) if it was already granted.
    """
    already = await session.scalar(
        select(UserDailyAction.id).where(
            UserDailyAction.user_id == user_id,
            UserDailyAction.action == action.value,
        )
    )
    if already is not None:
        return False

    if await session.get(User, user_id) is None:
        raise UserNotFound(f"User with ID {user_id} not found.")

    session.add(UserDailyAction(user_id=user_id, action=action.value, points_granted=points))
    try:
        await session.flush()
    except IntegrityError:
        # a concurrent request recorded the action first
        await session.rollback()
        return False

    try:
        await increment_points(session, user_id, points)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info("Granted %s bonus (%s points) to user %s", action.value, points, user_id)
    return True


async def grant_share_bonus_once(session: AsyncSession, user_id: int, points: int) -> bool:
    return await grant_action_bonus_once(session, user_id, DailyActionKind.SHARE_FIRST_TIME, points)
