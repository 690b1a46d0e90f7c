from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Any, Dict

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from devconnector.auth import deps


def build_request(headers: Dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "scheme": "http",
        "server": ("testserver", 80),
    }

    async def receive() -> Dict[str, Any]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, receive)


def run_async(coro):
    return asyncio.run(coro)


@pytest.fixture
def cognito(monkeypatch: pytest.MonkeyPatch) -> None:
    settings = replace(
        deps.S,
        cognito_user_pool_id="pool",
        cognito_app_client_id="client",
        cognito_region="us-east-1",
    )
    monkeypatch.setattr(deps, "S", settings)


def test_issuer_uses_pool_and_region(cognito: None) -> None:
    assert deps._cognito_issuer() == "https://cognito-idp.us-east-1.amazonaws.com/pool"


def test_auth_requires_bearer_token_when_cognito_enabled(cognito: None) -> None:
    req = build_request(headers={"x-user-id": "spoofed"})
    with pytest.raises(HTTPException) as exc:
        run_async(deps.get_authenticated_user_id(req))
    assert exc.value.status_code == 401


def test_auth_uses_cognito_payload(cognito: None, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_decode(token: str) -> Dict[str, Any]:
        assert token == "token123"
        return {"sub": "user-abc"}

    monkeypatch.setattr(deps, "_decode_cognito_token", fake_decode)
    req = build_request(headers={"authorization": "Bearer token123"})
    assert run_async(deps.get_authenticated_user_id(req)) == "user-abc"


def test_auth_requires_subject(cognito: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "_decode_cognito_token", lambda token: {})
    req = build_request(headers={"authorization": "Bearer token123"})
    with pytest.raises(HTTPException) as exc:
        run_async(deps.get_authenticated_user_id(req))
    assert exc.value.status_code == 401


def test_unknown_key_id_rejected(cognito: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "_cognito_jwks", lambda: {"keys": [{"kid": "other"}]})
    with pytest.raises(HTTPException) as exc:
        deps._resolve_cognito_key("missing")
    assert exc.value.detail == "Unknown Cognito key id"


def test_subject_must_come_from_sub_claim(cognito: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(deps, "_decode_cognito_token", lambda token: {"cognito:username": "alias"})
    req = build_request(headers={"authorization": "Bearer token123"})
    with pytest.raises(HTTPException) as exc:
        run_async(deps.get_authenticated_user_id(req))
    assert exc.value.detail == "Token missing subject"
