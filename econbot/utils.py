"""Helpers for identities and stored timestamps."""

from datetime import datetime, timezone
from typing import Any, Optional

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def entity_id(entity: Any) -> str:
    """Return the string id of a user or server.

    Accepts a plain id (str or int) or any framework object exposing ``.id``.
    Nothing else is read from the object.
    """
    if isinstance(entity, (str, int)):
        return str(entity)
    return str(entity.id)


def from_unix(seconds: Optional[int]) -> datetime:
    """Convert stored Unix seconds to an aware UTC datetime; falsy -> EPOCH."""
    if not seconds:
        return EPOCH
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
