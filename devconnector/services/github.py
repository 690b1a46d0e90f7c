from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from fastapi import HTTPException

from devconnector.core.normalize import is_github_login
from devconnector.core.settings import S
from devconnector.metrics import GITHUB_LOOKUPS

logger = logging.getLogger(__name__)

NO_GITHUB_PROFILE_MSG = "No Github profile found"
GITHUB_UNAVAILABLE_MSG = "GitHub is not available"


def _repo_params() -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "per_page": S.github_repo_limit,
        "sort": "created:asc",
    }
    if S.github_client_id and S.github_client_secret:
        params["client_id"] = S.github_client_id
        params["client_secret"] = S.github_client_secret
    return params


async def fetch_repositories(username: str) -> Any:
    """Latest public repositories for a GitHub login, passed through as returned.

    A non-200 answer means the login has no GitHub profile (404); transport
    errors, timeouts and unreadable bodies mean GitHub itself is unavailable (503).
    """
    if not is_github_login(username):
        GITHUB_LOOKUPS.labels(outcome="not_found").inc()
        raise HTTPException(404, NO_GITHUB_PROFILE_MSG)

    url = f"{S.github_api_base}/users/{username}/repos"
    headers = {
        "User-Agent": S.github_user_agent,
        "Accept": "application/vnd.github+json",
    }
    try:
        async with httpx.AsyncClient(timeout=S.github_timeout_seconds) as client:
            r = await client.get(url, params=_repo_params(), headers=headers)
    except httpx.HTTPError as exc:
        logger.warning("github request failed username=%s error=%s", username, exc)
        GITHUB_LOOKUPS.labels(outcome="unavailable").inc()
        raise HTTPException(503, GITHUB_UNAVAILABLE_MSG) from exc

    if r.status_code != 200:
        logger.info("github returned status=%s username=%s", r.status_code, username)
        GITHUB_LOOKUPS.labels(outcome="not_found").inc()
        raise HTTPException(404, NO_GITHUB_PROFILE_MSG)

    try:
        data = r.json()
    except ValueError as exc:
        logger.warning("github returned a non-JSON body username=%s", username)
        GITHUB_LOOKUPS.labels(outcome="unavailable").inc()
        raise HTTPException(503, GITHUB_UNAVAILABLE_MSG) from exc

    GITHUB_LOOKUPS.labels(outcome="ok").inc()
    return data
