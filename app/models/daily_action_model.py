import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from app.config import DB_SCHEMA
from app.database import Base


class DailyActionKind(str, enum.Enum):
    SHARE_FIRST_TIME = "SHARE_FIRST_TIME"


class UserDailyAction(Base):
    __tablename__ = "user_daily_actions"
    __table_args__ = (
        # one record per user per action kind; the bonus is granted with the insert
        UniqueConstraint("user_id", "action", name="uq_user_daily_actions_user_action"),
        {"schema": DB_SCHEMA},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey(f"{DB_SCHEMA}.users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action = Column(String, nullable=False)
    points_granted = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
