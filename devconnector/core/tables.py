from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .aws import ddb
from .settings import S

@dataclass(frozen=True)
class Tables:
    profiles: Any
    users: Any

T = Tables(
    profiles=ddb.Table(S.profiles_table_name),
    users=ddb.Table(S.users_table_name),
)
