from __future__ import annotations

import logging
from typing import List

from devconnector.core.tables import T
from devconnector.metrics import PROFILE_WRITES

logger = logging.getLogger(__name__)


def delete_account(user_id: str) -> None:
    """Remove the user's profile, then the user record.

    The two deletes are not transactional. Both are always attempted, so a
    user without a profile is still removed; if either fails the other may
    already have happened.
    """
    errors: List[str] = []

    for name, table in (("profile", T.profiles), ("user", T.users)):
        try:
            table.delete_item(Key={"user_id": user_id})
        except Exception as exc:
            errors.append(f"{name}: {exc}")

    if errors:
        logger.error("account delete incomplete user_id=%s errors=%s", user_id, errors)
        raise RuntimeError("Failed to delete some user data: " + "; ".join(errors))

    PROFILE_WRITES.labels(op="delete").inc()
    logger.info("account deleted user_id=%s", user_id)
