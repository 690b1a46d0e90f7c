from __future__ import annotations

import os
from dataclasses import dataclass

@dataclass(frozen=True)
class Settings:
    # AWS
    aws_region: str = os.environ.get("AWS_REGION", "us-east-1")

    # Cognito (optional wiring; auth is pluggable)
    cognito_user_pool_id: str = os.environ.get("COGNITO_USER_POOL_ID", "")
    cognito_region: str = os.environ.get("COGNITO_REGION", "")
    cognito_app_client_id: str = os.environ.get("COGNITO_APP_CLIENT_ID", "")
    cognito_expected_token_use: str = os.environ.get("COGNITO_EXPECTED_TOKEN_USE", "access")

    # Locally issued tokens (HS256)
    jwt_secret: str = os.environ.get("JWT_SECRET", "")

    # Trust x-user-id / unverified bearer subjects. Local development only.
    auth_dev_fallback: bool = os.environ.get("AUTH_DEV_FALLBACK", "0") not in ("0", "false", "False")

    # DynamoDB tables
    profiles_table_name: str = os.environ.get("PROFILES_TABLE_NAME", "profiles")
    profiles_id_index: str = os.environ.get("PROFILES_ID_INDEX", "profile_id-index")
    users_table_name: str = os.environ.get("USERS_TABLE_NAME", "users")

    # GitHub
    github_api_base: str = os.environ.get("GITHUB_API_BASE", "https://api.github.com").rstrip("/")
    github_client_id: str = os.environ.get("GITHUB_CLIENT_ID", "")
    github_client_secret: str = os.environ.get("GITHUB_CLIENT_SECRET", "")
    github_user_agent: str = os.environ.get("GITHUB_USER_AGENT", "devconnector")
    github_repo_limit: int = int(os.environ.get("GITHUB_REPO_LIMIT", "5"))
    github_timeout_seconds: float = float(os.environ.get("GITHUB_TIMEOUT_SECONDS", "10"))

    # Observability
    metrics_enabled: bool = os.environ.get("METRICS_ENABLED", "1") not in ("0", "false", "False")
    log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()


S = Settings()
