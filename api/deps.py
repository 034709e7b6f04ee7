"""
Dependency injection utilities for API endpoints.
"""

from fastapi import Depends, HTTPException, status

from core.security import get_current_user
from models.user import User, UserType


def _require_user_type(user_type: UserType, detail: str):
    async def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.user_type != user_type:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return current_user
    return dependency


require_patient = _require_user_type(
    UserType.PATIENT, "Only patients can perform this action."
)
require_caretaker = _require_user_type(
    UserType.CARETAKER, "Only caretakers can access this resource."
)
