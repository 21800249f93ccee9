"""
Shared fixtures: a fresh SQLite database per test, factories for users and
brands, and an HTTP client wired to the app with overridden dependencies.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789abcdefghijklmnop")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import get_settings
from app.database import Base, get_async_session, make_engine
from app.main import app
from app.models.brand_model import Brand
from app.models.user_model import User, UserRole
from app.services.errors import IdentityVerificationError
from app.utils.identity import get_identity_verifier
from app.utils.token_utils import create_access_token

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return replace(
        get_settings(),
        secret_key="test-secret-key-0123456789abcdefghijklmnop",
        vote_reward_points=3,
        share_bonus_points=3,
        day_timezone="UTC",
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'brnd_test.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def make_user(session):
    counter = {"fid": 1000}

    async def _make_user(username="alice", role=UserRole.USER.value, points=0):
        counter["fid"] += 1
        user = User(fid=counter["fid"], username=username, photo_url="", role=role, points=points)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_brands(session):
    async def _make_brands(count, start=None, **fields):
        start = start or BASE_TIME
        brands = [
            Brand(
                name=f"Brand {i:02d}",
                url=f"https://brand{i}.example",
                image_url=f"https://img.example/{i}.png",
                follower_count=fields.get("follower_count", i * 10),
                created_at=start + timedelta(hours=i),
            )
            for i in range(1, count + 1)
        ]
        session.add_all(brands)
        await session.commit()
        return brands

    return _make_brands


class FakeVerifier:
    def __init__(self, fid=None, fail=False):
        self.fid = fid
        self.fail = fail
        self.calls = []

    async def verify(self, message, signature, nonce, domain):
        self.calls.append((message, signature, nonce, domain))
        if self.fail:
            raise IdentityVerificationError("Sign-in message could not be verified")
        return self.fid


@pytest.fixture
def verifier():
    return FakeVerifier(fid=4242)


@pytest_asyncio.fixture
async def client(session_factory, settings, verifier):
    async def override_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_async_session] = override_session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_identity_verifier] = lambda: verifier

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(settings):
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user, settings)}"}

    return _headers
