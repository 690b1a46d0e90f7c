from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError
from fastapi import HTTPException

from devconnector.core.aws import ddb
from devconnector.core.normalize import new_id, normalize_id
from devconnector.core.settings import S
from devconnector.core.tables import T
from devconnector.core.time import now_ts
from devconnector.metrics import PROFILE_WRITES

logger = logging.getLogger(__name__)

NO_PROFILE_MSG = "There is no profile for this user"
PROFILE_NOT_FOUND_MSG = "Profile not found"

_BATCH_GET_LIMIT = 100


def is_conditional_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


def empty_profile(user_id: str) -> Dict[str, Any]:
    ts = now_ts()
    return {
        "user_id": user_id,
        "profile_id": new_id(),
        "skills": [],
        "social": {},
        "experience": [],
        "education": [],
        "created_at": ts,
        "updated_at": ts,
    }


def get_profile_item(user_id: str) -> Optional[Dict[str, Any]]:
    return T.profiles.get_item(Key={"user_id": user_id}).get("Item")


def set_profile_attrs(user_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """SET each key of `changes` on an existing profile and return the new document.

    Keys not in `changes` are left as stored. Raises ClientError with
    ConditionalCheckFailedException if the profile does not exist.
    """
    sets: List[str] = []
    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}
    for i, (field, value) in enumerate({**changes, "updated_at": now_ts()}.items()):
        names[f"#f{i}"] = field
        values[f":v{i}"] = value
        sets.append(f"#f{i} = :v{i}")

    resp = T.profiles.update_item(
        Key={"user_id": user_id},
        UpdateExpression="SET " + ", ".join(sets),
        ConditionExpression="attribute_exists(user_id)",
        ExpressionAttributeNames=names,
        ExpressionAttributeValues=values,
        ReturnValues="ALL_NEW",
    )
    return resp["Attributes"]


def _fetch_users(user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
    ids = list(dict.fromkeys(uid for uid in user_ids if uid))
    found: Dict[str, Dict[str, Any]] = {}
    for start in range(0, len(ids), _BATCH_GET_LIMIT):
        request: Dict[str, Any] = {
            S.users_table_name: {
                "Keys": [{"user_id": uid} for uid in ids[start:start + _BATCH_GET_LIMIT]],
                "ProjectionExpression": "user_id, #n, avatar",
                "ExpressionAttributeNames": {"#n": "name"},
            }
        }
        while request:
            resp = ddb.batch_get_item(RequestItems=request)
            for it in resp.get("Responses", {}).get(S.users_table_name, []):
                found[it["user_id"]] = it
            request = resp.get("UnprocessedKeys") or {}
    return found


def _public(item: Dict[str, Any], users: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    out = dict(item)
    user_id = out.pop("user_id")
    user = users.get(user_id) or {}
    out["user"] = {"user_id": user_id, "name": user.get("name"), "avatar": user.get("avatar")}
    return out


def with_users(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    users = _fetch_users(it["user_id"] for it in items)
    return [_public(it, users) for it in items]


def with_user(item: Dict[str, Any]) -> Dict[str, Any]:
    return with_users([item])[0]


def upsert_profile(user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Create the owner's profile or merge `fields` into the existing one.

    Find and write are two separate storage calls; a concurrent upsert for the
    same owner can interleave, and the last write wins.
    """
    current = get_profile_item(user_id)
    if current is None:
        item = {**empty_profile(user_id), **fields}
        try:
            T.profiles.put_item(Item=item, ConditionExpression="attribute_not_exists(user_id)")
        except ClientError as exc:
            if not is_conditional_failure(exc):
                raise
            # Lost a create race; apply as an update instead.
            current = get_profile_item(user_id) or {}
        else:
            PROFILE_WRITES.labels(op="create").inc()
            logger.info("profile created user_id=%s", user_id)
            return with_user(item)

    changes = dict(fields)
    if "social" in changes:
        changes["social"] = {**(current.get("social") or {}), **changes["social"]}
    updated = set_profile_attrs(user_id, changes)
    PROFILE_WRITES.labels(op="update").inc()
    logger.info("profile updated user_id=%s fields=%s", user_id, sorted(fields))
    return with_user(updated)


def get_own_profile(user_id: str) -> Dict[str, Any]:
    item = get_profile_item(user_id)
    if not item:
        raise HTTPException(404, NO_PROFILE_MSG)
    return with_user(item)


def get_profile_by_id(identifier: str) -> Dict[str, Any]:
    """Look up a profile by owner id, falling back to the profile's own id."""
    ident = (identifier or "").strip()
    if not ident:
        raise HTTPException(404, PROFILE_NOT_FOUND_MSG)

    item = get_profile_item(ident)
    profile_id = normalize_id(ident)
    if not item and profile_id is not None:
        resp = T.profiles.query(
            IndexName=S.profiles_id_index,
            KeyConditionExpression=Key("profile_id").eq(profile_id),
            Limit=1,
        )
        items = resp.get("Items", [])
        item = items[0] if items else None
    if not item:
        raise HTTPException(404, PROFILE_NOT_FOUND_MSG)
    return with_user(item)


def list_profiles() -> List[Dict[str, Any]]:
    items: List[Dict[str, Any]] = []
    last_key = None
    while True:
        kwargs: Dict[str, Any] = {}
        if last_key:
            kwargs["ExclusiveStartKey"] = last_key
        resp = T.profiles.scan(**kwargs)
        items.extend(resp.get("Items", []))
        last_key = resp.get("LastEvaluatedKey")
        if not last_key:
            break
    return with_users(items)
