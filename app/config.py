import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DB_SCHEMA = "brnd"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _async_database_url(url: str) -> str:
    # Hosting providers hand out plain postgres URLs
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


@dataclass(frozen=True)
class Settings:
    database_url: str
    sql_echo: bool
    secret_key: Optional[str]
    algorithm: str
    access_token_expire_minutes: int

    vote_reward_points: int
    share_bonus_points: int
    day_timezone: str

    identity_verify_url: str
    identity_timeout_seconds: float

    cors_origins: Tuple[str, ...]
    login_rate_limit: str
    rate_limit_enabled: bool
    log_level: str


def load_settings() -> Settings:
    """Read the process environment (and .env) into an immutable Settings value."""
    origins = tuple(
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "*").split(",")
        if o.strip()
    )
    return Settings(
        database_url=_async_database_url(
            os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./brnd.db")
        ),
        sql_echo=_env_bool("SQL_ECHO", False),
        secret_key=os.getenv("SECRET_KEY"),
        algorithm=os.getenv("ALGORITHM", "HS256"),
        access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "4320")),  # 3 days
        vote_reward_points=int(os.getenv("VOTE_REWARD_POINTS", "3")),
        share_bonus_points=int(os.getenv("SHARE_BONUS_POINTS", "3")),
        day_timezone=os.getenv("DAY_TIMEZONE", "UTC"),
        identity_verify_url=os.getenv(
            "IDENTITY_VERIFY_URL", "https://relay.farcaster.xyz/v1/verify"
        ),
        identity_timeout_seconds=float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "5")),
        cors_origins=origins or ("*",),
        login_rate_limit=os.getenv("LOGIN_RATE_LIMIT", "10/minute"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", True),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
