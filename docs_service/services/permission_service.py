"""Ownership checks. All authorization rules live here.

Design:
    - Every directory and document carries an ``owner_id``.
    - Access is allowed only when the acting user's id equals it.
    - There is no shared ownership and no inheritance from parent to child.
    - A missing entity is not an authorization failure; callers report it as
      "not found" (writes) or as an empty result (reads).
    - List reads check only the first element. That is sound because writes
      keep every sibling under one parent owned by the parent's owner
      (see ``check_parent_owner``).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def check_owner(owner_id: Optional[int], acting_user_id: int) -> bool:
    """Return True when *acting_user_id* may access an entity owned by *owner_id*."""
    if owner_id is None:
        return True
    return owner_id == acting_user_id


def authorize(owner_id: Optional[int], acting_user_id: int, resource: str = "resource") -> None:
    """Raise ForbiddenError unless :func:`check_owner` allows access."""
    if not check_owner(owner_id, acting_user_id):
        logger.warning(
            "Ownership check failed",
            extra={"resource": resource, "owner_id": owner_id, "acting_user_id": acting_user_id},
        )
        raise ForbiddenError(f"You do not own this {resource}")


def authorize_representative(
    entities: Sequence[Any], acting_user_id: int, resource: str = "resource"
) -> None:
    """Authorize a sibling list by its first element's owner. Empty lists pass."""
    if entities:
        authorize(entities[0].owner_id, acting_user_id, resource)


def check_parent_owner(parent_owner_id: int, child_owner_id: int, resource: str = "resource") -> None:
    """Keep the sibling-ownership invariant: a child must share its parent's owner."""
    if parent_owner_id != child_owner_id:
        logger.warning(
            "Child owner differs from parent owner",
            extra={"resource": resource, "parent_owner_id": parent_owner_id, "owner_id": child_owner_id},
        )
        raise ForbiddenError(f"The parent directory of this {resource} belongs to another user")
