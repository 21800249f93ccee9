from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_async_session
from app.services.scoring_engine import ScoringEngine


async def get_scoring_engine(
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> ScoringEngine:
    return ScoringEngine(session, settings)
