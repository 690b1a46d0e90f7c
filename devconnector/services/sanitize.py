from __future__ import annotations

from typing import Any, Dict, List, Optional

PROFILE_FIELDS = (
    "company",
    "website",
    "location",
    "status",
    "bio",
    "githubusername",
)

SOCIAL_FIELDS = (
    "youtube",
    "twitter",
    "facebook",
    "linkedin",
    "instagram",
)


def clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        return str(value) if value else None
    trimmed = value.strip()
    if not trimmed:
        return None
    return trimmed


def split_skills(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = [p for p in value if isinstance(p, str)]
    return [p.strip() for p in parts if p.strip()]


def build_social(data: Any) -> Dict[str, str]:
    if not isinstance(data, dict):
        return {}
    out: Dict[str, str] = {}
    for field in SOCIAL_FIELDS:
        value = clean_str(data.get(field))
        if value:
            out[field] = value
    return out


def build_profile_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sparse update payload from a raw profile body.

    Only keys with a truthy value survive; an omitted key leaves the stored
    value untouched rather than clearing it.
    """
    out: Dict[str, Any] = {}
    for field in PROFILE_FIELDS:
        value = clean_str(data.get(field))
        if value:
            out[field] = value

    skills = split_skills(data.get("skills"))
    if skills:
        out["skills"] = skills

    social = build_social(data.get("social"))
    if social:
        out["social"] = social
    return out


def build_entry(data: Dict[str, Any], fields: tuple) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field in fields:
        value = clean_str(data.get(field))
        if value:
            out[field] = value
    out["current"] = bool(data.get("current"))
    return out
