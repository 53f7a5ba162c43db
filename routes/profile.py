import logging

from fastapi import APIRouter

from dependencies import Firestore, CurrentUser
from models.profile import EducationRequest, Profile, ProfileRequest
from services.errors import ProfileNotFound, ValidationFailed
from services.validation import validate_education_input, validate_profile_input
from utils.logging import EVENT_EDUCATION_ADDED, EVENT_EDUCATION_REMOVED, EVENT_PROFILE_SAVED, log_event

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(db: Firestore, current_user: CurrentUser):
    """Get the caller's profile"""
    profile = db.get_profile(current_user.user_id)
    if profile is None:
        raise ProfileNotFound()
    return profile


@router.post("", response_model=Profile)
async def save_profile(db: Firestore, profile_data: ProfileRequest, current_user: CurrentUser):
    """Create or update the caller's profile"""
    errors, is_valid = validate_profile_input(profile_data)
    if not is_valid:
        raise ValidationFailed(errors)

    profile = db.save_profile(current_user, profile_data)
    log_event(logger, "info", EVENT_PROFILE_SAVED, user_id=current_user.user_id)
    return profile


@router.post("/education", response_model=Profile)
async def add_education(db: Firestore, education: EducationRequest, current_user: CurrentUser):
    """
    Add an education entry to the caller's profile

    Args:
        education: school, degree, fieldofstudy and from are required.
            A ``current`` entry is stored without an end date.
    """
    errors, is_valid = validate_education_input(education)
    if not is_valid:
        raise ValidationFailed(errors)

    profile = db.add_education(current_user.user_id, education)
    log_event(logger, "info", EVENT_EDUCATION_ADDED,
              user_id=current_user.user_id, education_id=profile["education"][0]["id"])
    return profile


@router.delete("/education/{edu_id}", response_model=Profile)
async def remove_education(db: Firestore, edu_id: str, current_user: CurrentUser):
    """Remove one education entry from the caller's profile"""
    profile = db.remove_education(current_user.user_id, edu_id)
    log_event(logger, "info", EVENT_EDUCATION_REMOVED, user_id=current_user.user_id, education_id=edu_id)
    return profile
