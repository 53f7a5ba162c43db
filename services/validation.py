"""Input validation for post, comment and profile submissions.

Every validator returns ``(errors, is_valid)`` where ``errors`` maps a field
name to a human readable message, so the routes can send it back unchanged.
"""

import re
from typing import Dict, Optional, Tuple
from urllib.parse import urlparse

from models.post import PostRequest
from models.profile import EducationRequest, ProfileRequest

TEXT_MIN_LENGTH = 10
TEXT_MAX_LENGTH = 300
HANDLE_MIN_LENGTH = 2
HANDLE_MAX_LENGTH = 40
# handles double as Firestore document IDs
HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


def is_empty(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def is_url(value: str) -> bool:
    parsed = urlparse(value if "://" in value else f"http://{value}")
    return bool(parsed.netloc) and "." in parsed.netloc


def validate_post_input(data: PostRequest) -> Tuple[Dict[str, str], bool]:
    """Validate the text of a post or comment"""
    errors: Dict[str, str] = {}

    if is_empty(data.text):
        errors["text"] = "Text field is required"
    elif not TEXT_MIN_LENGTH <= len(data.text.strip()) <= TEXT_MAX_LENGTH:
        errors["text"] = f"Post must be between {TEXT_MIN_LENGTH} and {TEXT_MAX_LENGTH} characters"

    return errors, not errors


def validate_profile_input(data: ProfileRequest) -> Tuple[Dict[str, str], bool]:
    errors: Dict[str, str] = {}

    if is_empty(data.handle):
        errors["handle"] = "Profile handle is required"
    elif not HANDLE_MIN_LENGTH <= len(data.handle.strip()) <= HANDLE_MAX_LENGTH:
        errors["handle"] = f"Handle needs to be between {HANDLE_MIN_LENGTH} and {HANDLE_MAX_LENGTH} characters"
    elif not HANDLE_PATTERN.match(data.handle.strip()):
        errors["handle"] = "Handle may only contain letters, numbers, dashes and underscores"

    if is_empty(data.status):
        errors["status"] = "Status field is required"

    if is_empty(data.skills):
        errors["skills"] = "Skills field is required"

    if not is_empty(data.website) and not is_url(data.website.strip()):
        errors["website"] = "Not a valid URL"

    return errors, not errors


def validate_education_input(data: EducationRequest) -> Tuple[Dict[str, str], bool]:
    errors: Dict[str, str] = {}

    if is_empty(data.school):
        errors["school"] = "School field is required"

    if is_empty(data.degree):
        errors["degree"] = "Degree field is required"

    if is_empty(data.fieldofstudy):
        errors["fieldofstudy"] = "Field of study field is required"

    if is_empty(data.from_date):
        errors["from"] = "From date field is required"

    return errors, not errors
