from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, TypeVar

T = TypeVar("T")


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_date(value: datetime) -> str:
    """Render a datetime as ISO-8601 text; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def deep_clone(obj: T) -> T:
    return copy.deepcopy(obj)


def is_empty(value: Any) -> bool:
    """True for None, blank strings and empty collections. 0 and False are not empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False
