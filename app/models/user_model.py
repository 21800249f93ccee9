import enum

from sqlalchemy import Column, Integer, String, DateTime, BigInteger
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.config import DB_SCHEMA
from app.database import Base


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"schema": DB_SCHEMA}

    id = Column(Integer, primary_key=True, index=True)
    fid = Column(BigInteger, unique=True, index=True, nullable=False)  # external identity
    username = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)
    points = Column(Integer, nullable=False, default=0, server_default="0")
    role = Column(String, nullable=False, default=UserRole.USER.value)  # user or admin

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    ballots = relationship("Ballot", cascade="all, delete-orphan", back_populates="user")
    daily_actions = relationship("UserDailyAction", cascade="all, delete-orphan", backref="user")
