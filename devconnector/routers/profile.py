from __future__ import annotations

import anyio
from fastapi import APIRouter, Depends

from devconnector.auth.deps import get_authenticated_user_id
from devconnector.models import EducationIn, ExperienceIn, MessageOut, ProfileIn
from devconnector.services.account import delete_account
from devconnector.services.github import fetch_repositories
from devconnector.services.profile import get_own_profile, get_profile_by_id, list_profiles, upsert_profile
from devconnector.services.sanitize import build_profile_fields
from devconnector.services.subcollections import EDUCATION, EXPERIENCE, add_entry, remove_entry
from devconnector.services.validation import (
    EDUCATION_RULES,
    EXPERIENCE_RULES,
    PROFILE_RULES,
    check_required,
)

router = APIRouter(prefix="/api/profile", tags=["profile"])

@router.get("/me")
async def get_my_profile(user_id: str = Depends(get_authenticated_user_id)):
    return await anyio.to_thread.run_sync(get_own_profile, user_id)

@router.post("")
async def save_profile(body: ProfileIn, user_id: str = Depends(get_authenticated_user_id)):
    data = body.model_dump(by_alias=True, exclude_none=True)
    check_required(data, PROFILE_RULES)
    fields = build_profile_fields(data)
    return await anyio.to_thread.run_sync(upsert_profile, user_id, fields)

@router.get("")
async def get_all_profiles():
    return await anyio.to_thread.run_sync(list_profiles)

@router.get("/user/{user_id}")
async def get_profile_for_user(user_id: str):
    return await anyio.to_thread.run_sync(get_profile_by_id, user_id)

@router.delete("", response_model=MessageOut)
async def delete_my_account(user_id: str = Depends(get_authenticated_user_id)):
    # TODO remove the user's posts as well.
    await anyio.to_thread.run_sync(delete_account, user_id)
    return {"msg": "User deleted"}

@router.put("/experience")
async def add_experience(body: ExperienceIn, user_id: str = Depends(get_authenticated_user_id)):
    data = body.model_dump(by_alias=True, exclude_none=True)
    check_required(data, EXPERIENCE_RULES)
    return await anyio.to_thread.run_sync(add_entry, user_id, EXPERIENCE, data)

@router.delete("/experience/{exp_id}")
async def delete_experience(exp_id: str, user_id: str = Depends(get_authenticated_user_id)):
    return await anyio.to_thread.run_sync(remove_entry, user_id, EXPERIENCE, exp_id)

@router.put("/education")
async def add_education(body: EducationIn, user_id: str = Depends(get_authenticated_user_id)):
    data = body.model_dump(by_alias=True, exclude_none=True)
    check_required(data, EDUCATION_RULES)
    return await anyio.to_thread.run_sync(add_entry, user_id, EDUCATION, data)

@router.delete("/education/{edu_id}")
async def delete_education(edu_id: str, user_id: str = Depends(get_authenticated_user_id)):
    return await anyio.to_thread.run_sync(remove_entry, user_id, EDUCATION, edu_id)

@router.get("/github/{username}")
async def get_github_repos(username: str):
    return await fetch_repositories(username)
