from typing import List, Optional

from pydantic import BaseModel, Field


class Education(BaseModel):
    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_date: str = Field(..., alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class Profile(BaseModel):
    id: Optional[str] = None
    user: str
    handle: str
    status: str
    skills: List[str] = Field(default_factory=list)
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    education: List[Education] = Field(default_factory=list)
    date: str


class ProfileRequest(BaseModel):
    handle: Optional[str] = None
    status: Optional[str] = None
    skills: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None


class EducationRequest(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_date: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {"populate_by_name": True}
