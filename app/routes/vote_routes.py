from fastapi import APIRouter, Depends

from app.deps.scoring import get_scoring_engine
from app.schemas.ballot_schemas import BallotOut
from app.services.scoring_engine import ScoringEngine

router = APIRouter(prefix="/vote-service", tags=["vote-service"])


@router.get("/{ballot_id}", response_model=BallotOut)
async def get_ballot(ballot_id: int, engine: ScoringEngine = Depends(get_scoring_engine)):
    return await engine.get_ballot(ballot_id)
