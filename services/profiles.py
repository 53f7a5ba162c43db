"""In-memory mutations of a profile document, same contract as services.posts"""
import uuid
from typing import Any, Dict, List, Optional

from models.profile import EducationRequest, ProfileRequest
from models.user import User
from services.errors import EducationNotFound
from services.posts import utc_now


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def split_skills(skills: str) -> List[str]:
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


def profile_fields(user: User, data: ProfileRequest) -> Dict[str, Any]:
    """Fields written on create or update; education and date are left alone"""
    return {
        "user": user.user_id,
        "handle": data.handle.strip(),
        "status": data.status.strip(),
        "skills": split_skills(data.skills),
        "bio": _clean(data.bio),
        "location": _clean(data.location),
        "website": _clean(data.website),
    }


def add_education(profile: Dict[str, Any], data: EducationRequest) -> Dict[str, Any]:
    entry = {
        "id": uuid.uuid4().hex,
        "school": data.school.strip(),
        "degree": data.degree.strip(),
        "fieldofstudy": data.fieldofstudy.strip(),
        "from": data.from_date.strip(),
        # a current entry has no end date
        "to": None if data.current else _clean(data.to),
        "current": data.current,
        "description": _clean(data.description),
    }
    education = [entry] + list(profile.get("education", []))
    return {"education": education}


def remove_education(profile: Dict[str, Any], edu_id: str) -> Dict[str, Any]:
    education = list(profile.get("education", []))
    for index, entry in enumerate(education):
        if entry.get("id") == edu_id:
            education.pop(index)
            return {"education": education}
    raise EducationNotFound()


def new_profile(user: User, data: ProfileRequest) -> Dict[str, Any]:
    fields = profile_fields(user, data)
    fields["education"] = []
    fields["date"] = utc_now()
    return fields
