from datetime import date, datetime
from typing import Dict, List

from pydantic import BaseModel, Field


class BallotIn(BaseModel):
    # shape is checked by the scoring core so it can answer with a reason code
    brand_ids: List[int] = Field(default_factory=list)


class BallotBrandOut(BaseModel):
    id: int
    name: str
    image_url: str
    score: int
    state_score: int

    model_config = {
        "from_attributes": True
    }


class BallotOut(BaseModel):
    id: int
    user_id: int
    date: datetime
    day: date
    brand1: BallotBrandOut
    brand2: BallotBrandOut
    brand3: BallotBrandOut

    model_config = {
        "from_attributes": True
    }


class VoteHistoryOut(BaseModel):
    count: int
    data: Dict[str, BallotOut]
