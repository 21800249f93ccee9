import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_async_session
from app.limiter import limiter
from app.models.user_model import User
from app.deps.scoring import get_scoring_engine
from app.schemas.user_schemas import LoginResponse, MeOut, UserLogin, UserOut
from app.services import user_service
from app.services.errors import IdentityVerificationError
from app.services.scoring_engine import ScoringEngine
from app.utils.identity import IdentityVerifier, get_identity_verifier
from app.utils.token_utils import create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(get_settings().login_rate_limit)
async def login(
    request: Request,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
):
    fid = await verifier.verify(
        message=credentials.message,
        signature=credentials.signature,
        nonce=credentials.nonce,
        domain=credentials.domain,
    )
    if fid != credentials.fid:
        raise IdentityVerificationError("The signed message belongs to a different user.")

    is_created, user = await user_service.upsert_by_fid(
        db,
        fid,
        username=credentials.username.strip(),
        photo_url=credentials.photo_url,
    )

    try:
        access_token = create_access_token(user, settings)
    except RuntimeError as e:
        logger.error("Token creation failed for user %s: %s", user.id, e)
        raise HTTPException(status_code=500, detail="Token creation failed")

    if is_created:
        logger.info("Registered user %s (fid %s)", user.id, fid)

    return {
        "access_token": access_token,
        "is_created": is_created,
        "user": UserOut.model_validate(user),
    }


@router.get("/me", response_model=MeOut)
async def me(
    user: User = Depends(get_current_user),
    engine: ScoringEngine = Depends(get_scoring_engine),
):
    todays_ballot = await engine.get_todays_ballot(user.id)
    return MeOut(
        **UserOut.model_validate(user).model_dump(),
        has_voted_today=todays_ballot is not None,
    )
