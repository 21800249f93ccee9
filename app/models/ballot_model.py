from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from app.config import DB_SCHEMA
from app.database import Base

# Weighted points per rank slot: 1st, 2nd, 3rd
RANK_WEIGHTS = (60, 30, 10)


class Ballot(Base):
    """A user's ranked pick of three brands for one calendar day.

    ``day`` is the local-day bucket of ``date``; the (user_id, day) constraint
    is what actually guarantees one ballot per user per day.
    """

    __tablename__ = "ballots"
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_ballots_user_day"),
        CheckConstraint(
            "brand1_id <> brand2_id AND brand1_id <> brand3_id AND brand2_id <> brand3_id",
            name="ck_ballots_distinct_brands",
        ),
        {"schema": DB_SCHEMA},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    brand1_id = Column(Integer, ForeignKey(f"{DB_SCHEMA}.brands.id"), nullable=False, index=True)
    brand2_id = Column(Integer, ForeignKey(f"{DB_SCHEMA}.brands.id"), nullable=False, index=True)
    brand3_id = Column(Integer, ForeignKey(f"{DB_SCHEMA}.brands.id"), nullable=False, index=True)

    date = Column(DateTime(timezone=True), nullable=False)
    day = Column(Date, nullable=False, index=True)

    user = relationship("User", back_populates="ballots")
    brand1 = relationship("Brand", foreign_keys=[brand1_id])
    brand2 = relationship("Brand", foreign_keys=[brand2_id])
    brand3 = relationship("Brand", foreign_keys=[brand3_id])

    @property
    def brand_ids(self):
        return [self.brand1_id, self.brand2_id, self.brand3_id]
