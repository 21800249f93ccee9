from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.user_model import UserRole


class UserLogin(BaseModel):
    fid: int
    message: str
    signature: str = Field(pattern=r"^0x[0-9a-fA-F]+$")
    nonce: str
    domain: str
    username: str
    photo_url: Optional[str] = None


class UserOut(BaseModel):
    id: int
    fid: int
    username: str
    photo_url: Optional[str] = None
    points: int
    role: str
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class MeOut(UserOut):
    has_voted_today: bool = False


class PublicUserOut(BaseModel):
    id: int
    username: str
    photo_url: Optional[str] = None
    points: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class LoginResponse(BaseModel):
    access_token: str
    is_created: bool
    user: UserOut


class UserUpdate(BaseModel):
    username: Optional[str] = None
    photo_url: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("username can't be blank")
        return v.strip() if v else v


class RemovePointsIn(BaseModel):
    points: int = Field(gt=0)


class PointsBalanceOut(BaseModel):
    user_id: int
    points: int


class ShareBonusOut(BaseModel):
    granted: bool
    points: int
