"""Ownership checks shared by every state-changing operation."""

from typing import Any

from roomivo.errors import ForbiddenError


def is_party(user: Any, *owner_ids: int | None) -> bool:
    return user.id in {owner_id for owner_id in owner_ids if owner_id is not None}


def ensure_owner(user: Any, *owner_ids: int | None, action: str = "modify this resource") -> None:
    """Raise ForbiddenError unless ``user`` is one of ``owner_ids``."""
    if not is_party(user, *owner_ids):
        raise ForbiddenError(f"You are not allowed to {action}")
