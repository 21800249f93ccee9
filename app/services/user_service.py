from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_model import User, UserRole
from app.services.errors import UserNotFound


async def get_user(session: AsyncSession, user_id: int) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise UserNotFound(f"User with ID {user_id} not found.")
    return user


async def get_by_fid(session: AsyncSession, fid: int) -> Optional[User]:
    return (await session.execute(select(User).where(User.fid == fid))).scalars().first()


async def upsert_by_fid(session: AsyncSession, fid: int, **data) -> Tuple[bool, User]:
    """
    Update the user keyed by ``fid`` with ``data``, or create it with the
    default role. Returns (is_created, user).
    """
    user = await get_by_fid(session, fid)
    is_created = user is None

    if is_created:
        user = User(fid=fid, role=UserRole.USER.value, points=0, **data)
        session.add(user)
    else:
        for field, value in data.items():
            setattr(user, field, value)

    await session.commit()
    await session.refresh(user)
    return is_created, user


async def update_user(session: AsyncSession, user_id: int, data: dict) -> User:
    user = await get_user(session, user_id)
    for field, value in data.items():
        setattr(user, field, value)
    await session.commit()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user_id: int) -> bool:
    user = await get_user(session, user_id)
    await session.delete(user)
    await session.commit()
    return True
