from datetime import datetime
from typing import List, Optional
from pydantic import Field

from models.user import UserType
from schemas.common import BaseSchema, RequestSchema
from schemas.fall import FallRead
from schemas.screening import ScreeningRead


class UserMe(BaseSchema):
    id: int
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")
    user_type: UserType = Field(..., alias="userType")
    caretaker_id: Optional[int] = Field(default=None, alias="caretakerId")
    referral_code: Optional[str] = Field(default=None, alias="referralCode")


class PatientSummary(BaseSchema):
    id: int
    email: str
    full_name: Optional[str] = None
    created_at: Optional[datetime] = None


class PatientListResponse(BaseSchema):
    patients: List[PatientSummary]


class PatientDetailResponse(BaseSchema):
    patient: PatientSummary
    screenings: List[ScreeningRead]
    falls: List[FallRead]


class ReferralCodeRequest(RequestSchema):
    referral_code: Optional[str] = Field(default=None, alias="referralCode")


class ReferralCodeResponse(BaseSchema):
    referral_code: Optional[str] = Field(default=None, alias="referralCode")
