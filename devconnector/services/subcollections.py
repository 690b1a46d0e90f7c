from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from botocore.exceptions import ClientError
from fastapi import HTTPException

from devconnector.core.normalize import new_id
from devconnector.metrics import PROFILE_WRITES
from devconnector.services.profile import (
    NO_PROFILE_MSG,
    get_profile_item,
    is_conditional_failure,
    set_profile_attrs,
    with_user,
)
from devconnector.services.sanitize import build_entry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubCollection:
    attr: str
    label: str
    fields: Tuple[str, ...]


EXPERIENCE = SubCollection(
    attr="experience",
    label="Experience",
    fields=("title", "company", "location", "from", "to", "description"),
)

EDUCATION = SubCollection(
    attr="education",
    label="Education",
    fields=("school", "degree", "fieldofstudy", "from", "to", "description"),
)


def _load_entries(user_id: str, kind: SubCollection) -> List[Dict[str, Any]]:
    item = get_profile_item(user_id)
    if not item:
        raise HTTPException(404, NO_PROFILE_MSG)
    return list(item.get(kind.attr) or [])


def _store_entries(user_id: str, kind: SubCollection, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
    try:
        return set_profile_attrs(user_id, {kind.attr: entries})
    except ClientError as exc:
        if is_conditional_failure(exc):
            raise HTTPException(404, NO_PROFILE_MSG) from exc
        raise


def add_entry(user_id: str, kind: SubCollection, data: Dict[str, Any]) -> Dict[str, Any]:
    """Prepend a new entry (newest first) and return the updated profile."""
    entries = _load_entries(user_id, kind)
    entry = {"id": new_id(), **build_entry(data, kind.fields)}
    updated = _store_entries(user_id, kind, [entry] + entries)
    PROFILE_WRITES.labels(op=f"{kind.attr}_add").inc()
    logger.info("%s entry added user_id=%s entry_id=%s", kind.attr, user_id, entry["id"])
    return with_user(updated)


def remove_entry(user_id: str, kind: SubCollection, entry_id: str) -> Dict[str, Any]:
    """Drop the entry with `entry_id`; an unknown id is a 404 and nothing is written."""
    entries = _load_entries(user_id, kind)
    idx = next((i for i, e in enumerate(entries) if e.get("id") == entry_id), None)
    if idx is None:
        raise HTTPException(404, f"{kind.label} not found")
    updated = _store_entries(user_id, kind, entries[:idx] + entries[idx + 1:])
    PROFILE_WRITES.labels(op=f"{kind.attr}_remove").inc()
    logger.info("%s entry removed user_id=%s entry_id=%s", kind.attr, user_id, entry_id)
    return with_user(updated)
