"""
Authentication API endpoints.

Handles registration and login. Both return a bearer token.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import create_access_token
from schemas.auth import UserLogin, UserRegister, TokenResponse
from services.authentication_service import (
    EmailAlreadyRegistered,
    UnknownReferralCode,
    authenticate_user,
    register_user,
)
from services.referral import ReferralCodeError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a patient or caretaker",
)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    try:
        user = await register_user(db, user_data)
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists"
        )
    except UnknownReferralCode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid or non-existent referral code."
        )
    except IntegrityError:
        logger.warning("Registration rejected by a database constraint")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Registration conflicts with existing data."
        )
    except ReferralCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Registration failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )

    return TokenResponse(token=create_access_token(user), user_type=user.user_type)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in with email and password",
)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    try:
        user = await authenticate_user(db, credentials.email, credentials.password)
    except Exception as e:
        logger.error(f"Login failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error"
        )

    if not user:
        logger.info("Rejected login with invalid credentials")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid credentials"
        )

    return TokenResponse(token=create_access_token(user), user_type=user.user_type)
