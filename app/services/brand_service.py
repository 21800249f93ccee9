import enum
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.brand_model import Brand
from app.services.errors import BrandNotFound


class BrandOrder(str, enum.Enum):
    ALL = "all"
    NEW = "new"
    TRENDING = "trending"


async def get_brand(session: AsyncSession, brand_id: int) -> Brand:
    stmt = select(Brand).where(Brand.id == brand_id).options(selectinload(Brand.category))
    brand = (await session.execute(stmt)).scalars().first()
    if brand is None:
        raise BrandNotFound(f"Brand with ID {brand_id} not found.")
    return brand


async def list_brands(
    session: AsyncSession,
    order: BrandOrder = BrandOrder.ALL,
    search: str = "",
    page: int = 1,
    limit: int = 15,
) -> Tuple[List[Brand], int]:
    """Return one page of brands and the total number matching ``search``."""
    filters = []
    search = (search or "").strip()
    if search:
        filters.append(Brand.name.ilike(f"%{search}%"))

    total = await session.scalar(select(func.count(Brand.id)).where(*filters))

    stmt = select(Brand).where(*filters).options(selectinload(Brand.category))
    if order == BrandOrder.NEW:
        stmt = stmt.order_by(Brand.created_at.desc(), Brand.id.desc())
    elif order == BrandOrder.TRENDING:
        stmt = stmt.order_by(Brand.follower_count.desc(), Brand.id.asc())
    else:
        stmt = stmt.order_by(Brand.id.asc())

    page = max(page, 1)
    stmt = stmt.offset((page - 1) * limit).limit(limit)
    brands = (await session.execute(stmt)).scalars().all()
    return list(brands), int(total or 0)
