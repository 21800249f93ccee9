from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.config import DB_SCHEMA, get_settings


def make_engine(database_url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=echo, future=True, **kwargs)
    if engine.dialect.name != "postgresql":
        # no schemas outside postgres, keep the tables in the main database
        engine = engine.execution_options(schema_translate_map={DB_SCHEMA: None})
    return engine


settings = get_settings()

engine = make_engine(settings.database_url, echo=settings.sql_echo)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


# Dependency for FastAPI routes
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
