from __future__ import annotations

import base64
import json
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt
import requests
from fastapi import HTTPException, Request

from devconnector.core.settings import S


def _cognito_enabled() -> bool:
    return bool(S.cognito_user_pool_id and S.cognito_app_client_id)


def _cognito_issuer() -> str:
    region = S.cognito_region or S.aws_region
    return f"https://cognito-idp.{region}.amazonaws.com/{S.cognito_user_pool_id}"


@lru_cache(maxsize=1)
def _cognito_jwks() -> Dict[str, Any]:
    resp = requests.get(f"{_cognito_issuer()}/.well-known/jwks.json", timeout=10)
    resp.raise_for_status()
    return resp.json()


def _resolve_cognito_key(kid: str) -> Dict[str, Any]:
    key = next((k for k in _cognito_jwks().get("keys", []) if k.get("kid") == kid), None)
    if key is None:
        raise HTTPException(401, "Unknown Cognito key id")
    return key


def _subject(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise HTTPException(401, "Token missing subject")
    return value


def _decode_cognito_token(token: str) -> Dict[str, Any]:
    try:
        kid = jwt.get_unverified_header(token).get("kid", "")
    except jwt.PyJWTError as exc:
        raise HTTPException(401, "Token is not valid") from exc

    public_key = jwt.algorithms.RSAAlgorithm.from_jwk(json.dumps(_resolve_cognito_key(kid)))
    try:
        payload = jwt.decode(
            token,
            public_key,
            algorithms=["RS256"],
            audience=S.cognito_app_client_id,
            issuer=_cognito_issuer(),
        )
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(401, "Token expired") from exc
    except jwt.PyJWTError as exc:
        raise HTTPException(401, "Token is not valid") from exc

    if S.cognito_expected_token_use and payload.get("token_use") != S.cognito_expected_token_use:
        raise HTTPException(401, "Unexpected token use")
    return payload


def _decode_local_token(token: str) -> str:
    try:
        payload = jwt.decode(token, S.jwt_secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(401, "Token expired") from exc
    except jwt.PyJWTError as exc:
        raise HTTPException(401, "Token is not valid") from exc

    # Tokens carry either {"user": {"id": ...}} or a standard "sub" claim.
    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    return _subject(user_id or payload.get("sub"))


def _decode_jwt_sub(token: str) -> Optional[str]:
    if token.count(".") != 2:
        return None
    _, payload, _ = token.split(".", 2)
    if not payload:
        return None
    padding = "=" * (-len(payload) % 4)
    try:
        data = json.loads(base64.urlsafe_b64decode(payload + padding).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    sub = data.get("sub") if isinstance(data, dict) else None
    return sub if isinstance(sub, str) and sub.strip() else None


def extract_bearer_token(auth_header: Optional[str]) -> str:
    if not auth_header:
        raise HTTPException(401, "No token, authorization denied")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(401, "Invalid Authorization header")
    return token.strip()


async def get_authenticated_user_id(request: Request) -> str:
    """
    Resolve the verified owner id for a request.

    Order: Cognito access token when a user pool is configured, otherwise a
    locally issued HS256 token (x-auth-token or bearer) when JWT_SECRET is
    set. With neither configured every request is rejected unless
    AUTH_DEV_FALLBACK is on, in which case the x-user-id header or the
    bearer token's unverified subject is trusted.
    """
    if _cognito_enabled():
        token = extract_bearer_token(request.headers.get("authorization"))
        return _subject(_decode_cognito_token(token).get("sub"))

    if S.jwt_secret:
        token = request.headers.get("x-auth-token") or extract_bearer_token(request.headers.get("authorization"))
        return _decode_local_token(token)

    if not S.auth_dev_fallback:
        raise HTTPException(401, "Authorization is not configured")

    fallback_user = request.headers.get("x-user-id")
    if fallback_user:
        return fallback_user
    token = extract_bearer_token(request.headers.get("authorization"))
    return _decode_jwt_sub(token) or token
