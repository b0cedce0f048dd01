from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Profile(BaseModel):
    """Row shape of ``profiles``; also the default shown before the first save"""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    full_name: str = ""
    role: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    school_name: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def missing_name(cls, value):
        return value or ""

    @field_validator("subjects", mode="before")
    @classmethod
    def missing_subjects(cls, value):
        return value or []


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=2)
    subjects: List[str] = Field(default_factory=list)
    school_name: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("subjects")
    @classmethod
    def drop_blank_subjects(cls, value: List[str]) -> List[str]:
        return [subject.strip() for subject in value if subject.strip()]

    @field_validator("school_name", "location", "bio")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None
