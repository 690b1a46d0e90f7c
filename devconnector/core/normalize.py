from __future__ import annotations

import re
import uuid
from typing import Any, Optional

_HEX_ID_RE = re.compile(r"^[0-9a-f]{32}$")
_GITHUB_LOGIN_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")

def new_id() -> str:
    return uuid.uuid4().hex

def normalize_id(value: Any) -> Optional[str]:
    """Canonical 32-char hex form of an identifier, or None if it is malformed.

    Accepts both the bare hex form and the dashed uuid form.
    """
    if not isinstance(value, str):
        return None
    s = value.strip().lower()
    if len(s) == 36 and s.count("-") == 4:
        s = s.replace("-", "")
    return s if _HEX_ID_RE.match(s) else None

def is_github_login(s: str) -> bool:
    return bool(s) and bool(_GITHUB_LOGIN_RE.match(s))
