from typing import List, Sequence

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.brand_model import Brand
from app.services.errors import InvalidBallotShape, DuplicateSelection, UnknownBrand

BALLOT_SIZE = 3


def check_ballot_shape(brand_ids: Sequence[int]) -> List[int]:
    """Return the ballot as a list of ints, or raise if it isn't 3 distinct ids."""
    if isinstance(brand_ids, (str, bytes)) or not isinstance(brand_ids, (list, tuple)):
        raise InvalidBallotShape("A ballot must be a list of brand ids.")
    if len(brand_ids) != BALLOT_SIZE:
        raise InvalidBallotShape(f"A ballot must contain exactly {BALLOT_SIZE} brand ids.")

    # no coercion: floats would truncate and bool is an int subclass
    if any(isinstance(b, bool) or not isinstance(b, int) for b in brand_ids):
        raise InvalidBallotShape("Brand ids must be integers.")

    ids = list(brand_ids)
    if len(set(ids)) != BALLOT_SIZE:
        raise DuplicateSelection("The same brand can't be picked twice in one ballot.")
    return ids


async def do_all_brands_exist(session: AsyncSession, brand_ids: Sequence[int]) -> bool:
    # One count over the set instead of a lookup per id
    count = await session.scalar(
        select(func.count(Brand.id)).where(Brand.id.in_(list(brand_ids)))
    )
    return int(count or 0) == len(set(brand_ids))


async def validate_ballot(session: AsyncSession, brand_ids: Sequence[int]) -> List[int]:
    ids = check_ballot_shape(brand_ids)
    if not await do_all_brands_exist(session, ids):
        raise UnknownBrand("One or more of the selected brands do not exist.")
    return ids
