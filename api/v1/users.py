"""
User API endpoints.

Profile, referral codes, patient/caretaker linking and the caretaker's view
of linked patients.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_caretaker, require_patient
from core.database import get_db
from core.security import get_current_user
from models.user import User
from repositories.fall import FallRepository
from repositories.screening import ScreeningRepository
from repositories.user import UserRepository
from schemas.analytics import AnalyticsResponse, PatientAnalyticsResponse
from schemas.common import MessageResponse
from schemas.user import (
    PatientDetailResponse,
    PatientListResponse,
    ReferralCodeRequest,
    ReferralCodeResponse,
    UserMe,
)
from services.analytics import AnalyticsService
from services.referral import is_valid_referral_code, normalize_referral_code

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_linked_patient_or_404(db: AsyncSession, caretaker: User, patient_id: int) -> User:
    patient = await UserRepository(db).get_linked_patient(caretaker.id, patient_id)
    if not patient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Patient not found or not linked to you."
        )
    return patient


@router.get("/me", response_model=UserMe, summary="Get the current user")
async def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get(
    "/me/referral-code",
    response_model=ReferralCodeResponse,
    summary="Get the caretaker's referral code",
)
async def get_referral_code(current_user: User = Depends(require_caretaker)):
    return ReferralCodeResponse(referral_code=current_user.referral_code)


@router.put(
    "/me/referral-code",
    response_model=ReferralCodeResponse,
    summary="Change the caretaker's referral code",
)
async def update_referral_code(
    body: ReferralCodeRequest,
    current_user: User = Depends(require_caretaker),
    db: AsyncSession = Depends(get_db)
):
    code = normalize_referral_code(body.referral_code)
    if not is_valid_referral_code(code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Referral code must be 4 to 12 letters or digits."
        )

    if code == current_user.referral_code:
        return ReferralCodeResponse(referral_code=code)

    user_repo = UserRepository(db)
    if await user_repo.referral_code_exists(code):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Referral code is already in use."
        )

    user_id = current_user.id
    try:
        current_user.referral_code = code
        await user_repo.update_user(current_user)
    except IntegrityError:
        await db.rollback()
        logger.warning(f"Referral code {code} was taken concurrently for user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Referral code is already in use."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Error updating referral code for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while updating referral code."
        )

    logger.info(f"Caretaker {user_id} changed referral code")
    return ReferralCodeResponse(referral_code=code)


@router.put(
    "/me/link-caretaker",
    response_model=MessageResponse,
    summary="Link the patient to a caretaker by referral code",
)
async def link_caretaker(
    body: ReferralCodeRequest,
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    code = normalize_referral_code(body.referral_code)
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Referral code is required."
        )

    user_id = current_user.id
    user_repo = UserRepository(db)
    caretaker = await user_repo.get_caretaker_by_referral_code(code)
    if not caretaker:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid or non-existent referral code."
        )
    caretaker_id = caretaker.id

    try:
        current_user.caretaker_id = caretaker_id
        await user_repo.update_user(current_user)
    except IntegrityError:
        # Caretaker was removed in the meantime
        await db.rollback()
        logger.warning(f"Integrity error linking patient {user_id} to caretaker {caretaker_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not link to this caretaker."
        )
    except Exception as e:
        await db.rollback()
        logger.error(f"Error linking patient {user_id} to caretaker: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while linking account."
        )

    logger.info(f"Patient {user_id} linked to caretaker {caretaker_id}")
    return MessageResponse(message="Successfully linked to caretaker.")


@router.get(
    "/me/patients",
    response_model=PatientListResponse,
    summary="List patients linked to the caretaker",
)
async def list_patients(
    current_user: User = Depends(require_caretaker),
    db: AsyncSession = Depends(get_db)
):
    try:
        patients = await UserRepository(db).get_patients_for_caretaker(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching patients for caretaker {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching patients."
        )
    return {"patients": patients}


@router.get(
    "/me/patients/{patient_id}",
    response_model=PatientDetailResponse,
    summary="A linked patient's screenings and falls",
)
async def get_patient_details(
    patient_id: int,
    current_user: User = Depends(require_caretaker),
    db: AsyncSession = Depends(get_db)
):
    patient = await get_linked_patient_or_404(db, current_user, patient_id)
    try:
        screenings = await ScreeningRepository(db).get_by_user_id(patient.id)
        falls = await FallRepository(db).get_by_user_id(patient.id)
    except Exception as e:
        logger.error(f"Error fetching details for patient {patient_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching patient details."
        )
    return {"patient": patient, "screenings": screenings, "falls": falls}


@router.get(
    "/me/patients/{patient_id}/analytics",
    response_model=PatientAnalyticsResponse,
    summary="Analytics and risk score for a linked patient",
)
async def get_patient_analytics(
    patient_id: int,
    current_user: User = Depends(require_caretaker),
    db: AsyncSession = Depends(get_db)
):
    patient = await get_linked_patient_or_404(db, current_user, patient_id)
    try:
        return await AnalyticsService(db).for_linked_patient(patient)
    except Exception as e:
        logger.error(f"Error fetching analytics for patient {patient_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching patient analytics."
        )


@router.get(
    "/me/analytics",
    response_model=AnalyticsResponse,
    summary="Analytics and risk score for the current patient",
)
async def get_my_analytics(
    current_user: User = Depends(require_patient),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await AnalyticsService(db).for_patient(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching analytics for user {current_user.id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching analytics."
        )
