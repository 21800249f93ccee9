from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.config import DB_SCHEMA
from app.database import Base


class Brand(Base):
    __tablename__ = "brands"
    __table_args__ = {"schema": DB_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    url = Column(String, nullable=False, default="")
    warpcast_url = Column(String, nullable=False, default="")
    description = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    profile = Column(String, nullable=False, default="")
    channel = Column(String, nullable=False, default="")

    category_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    follower_count = Column(Integer, nullable=False, default=0)

    # Score fields, refreshed by the scoring batch
    score = Column(Integer, nullable=False, default=0)
    state_score = Column(Integer, nullable=False, default=0)
    score_week = Column(Integer, nullable=False, default=0)
    state_score_week = Column(Integer, nullable=False, default=0)
    ranking = Column(String, nullable=False, default="")
    ranking_week = Column(Integer, nullable=False, default=0, server_default="0")
    bonus_points = Column(Integer, nullable=False, default=0, server_default="0")
    banned = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    category = relationship("Category", back_populates="brands")
