import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

from app.config import DB_SCHEMA, get_settings
from app.database import Base, engine
from app.limiter import limiter
# register every model with Base.metadata before create_all
from app.models import ballot_model, brand_model, category_model, daily_action_model, user_model  # noqa: F401
from app.routes import auth, brand_routes, user_routes, vote_routes
from app.services.errors import ScoringError
from app.utils.logging_utils import setup_logging

settings = get_settings()
setup_logging(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="BRND API", version="1.0")

# 🔒 Rate limiting setup
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


@app.exception_handler(ScoringError)
async def scoring_error_handler(request: Request, exc: ScoringError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "reason": exc.reason},
    )


# ✅ Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ Include routers
app.include_router(auth.router, prefix="/auth")
app.include_router(brand_routes.router)
app.include_router(user_routes.router)
app.include_router(vote_routes.router)


# ✅ Run DB init on startup
@app.on_event("startup")
async def on_startup():
    # Tiny retry so a momentary DB disconnect doesn't crash the app.
    for attempt in range(2):
        try:
            async with engine.begin() as conn:
                if conn.dialect.name == "postgresql":
                    await conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{DB_SCHEMA}";'))
                await conn.run_sync(Base.metadata.create_all)
            break  # success
        except Exception as e:
            if attempt == 0:
                logger.warning("DB init failed, retrying once: %r", e)
                await asyncio.sleep(0.5)
            else:
                # Tables should already exist from previous runs.
                logger.error("Skipping DB init due to error: %r", e)
    logger.info("BRND API %s started", app.version)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
