from __future__ import annotations

from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

class SocialIn(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

class ProfileIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    # All optional here; required fields are checked by the validation gate
    # so every missing field is reported at once.
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    skills: Optional[Union[str, List[str]]] = None
    bio: Optional[str] = None
    githubusername: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("githubusername", "githubUsername"),
    )
    social: Optional[SocialIn] = None

class _EntryIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    from_: Optional[str] = Field(
        default=None,
        validation_alias="from",
        serialization_alias="from",
    )
    to: Optional[str] = None
    current: Optional[bool] = None
    description: Optional[str] = None

class ExperienceIn(_EntryIn):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None

class EducationIn(_EntryIn):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("fieldofstudy", "fieldOfStudy"),
    )

class MessageOut(BaseModel):
    msg: str
