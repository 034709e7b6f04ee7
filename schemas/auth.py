from typing import Optional
from pydantic import EmailStr, Field, field_validator

from models.user import UserType
from schemas.common import BaseSchema, RequestSchema, blank_to_none


class UserRegister(RequestSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)
    user_type: UserType = Field(..., alias="userType")
    full_name: Optional[str] = Field(default=None, alias="fullName", max_length=255)
    referral_code: Optional[str] = Field(default=None, alias="referralCode")

    @field_validator("full_name", "referral_code", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        return blank_to_none(value)


class UserLogin(RequestSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseSchema):
    token: str
    user_type: UserType = Field(..., alias="userType")
