from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_async_session
from app.models.user_model import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def _get_secret_key(settings: Settings) -> str:
    secret = settings.secret_key
    if not secret:
        # Fail fast with a clear message instead of a generic 500
        raise RuntimeError("SECRET_KEY is not configured in the backend environment")
    if len(secret) < 32:
        raise RuntimeError("SECRET_KEY is too short; use at least 32 characters")
    return secret


def create_access_token(user: User, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {
        "id": user.id,        # what get_current_user expects
        "fid": user.fid,      # external identity, for auditing/logs
        "role": user.role,
        "exp": expire,
    }
    try:
        return jwt.encode(to_encode, _get_secret_key(settings), algorithm=settings.algorithm)
    except JWTError as e:
        raise RuntimeError(f"JWT encode failed: {e}")


def decode_access_token(token: str, settings: Settings) -> dict:
    return jwt.decode(token, _get_secret_key(settings), algorithms=[settings.algorithm])


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token, settings)
        user_id = payload.get("id")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = await session.get(User, int(user_id))
    if not user:
        raise credentials_exception

    return user  # Returns SQLAlchemy user model
