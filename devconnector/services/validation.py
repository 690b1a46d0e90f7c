from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


class RequestFieldsInvalid(Exception):
    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__("; ".join(e["message"] for e in errors))
        self.errors = errors


@dataclass(frozen=True)
class RequiredFields:
    rules: Tuple[Tuple[str, str], ...]


PROFILE_RULES = RequiredFields(rules=(
    ("status", "Status is required"),
    ("skills", "Skills is required"),
))

EXPERIENCE_RULES = RequiredFields(rules=(
    ("title", "Title is required"),
    ("company", "Company is required"),
    ("from", "From date is required"),
))

EDUCATION_RULES = RequiredFields(rules=(
    ("school", "School is required"),
    ("degree", "Degree is required"),
    ("fieldofstudy", "Field of Study is required"),
    ("from", "From date is required"),
))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return not value
    return False


def check_required(data: Dict[str, Any], rules: RequiredFields) -> None:
    errors = [
        {"field": field, "message": message}
        for field, message in rules.rules
        if _is_empty(data.get(field))
    ]
    if errors:
        raise RequestFieldsInvalid(errors)
