"""Pure validation predicates. No state, no side effects."""
from __future__ import annotations

import re
from urllib.parse import urlparse

PROJECT_NAME_MAX_LENGTH = 100
BYTES_PER_MB = 1024 * 1024

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_project_name(name: str) -> bool:
    if not isinstance(name, str):
        return False
    return 0 < len(name.strip()) <= PROJECT_NAME_MAX_LENGTH


def is_valid_email(email: str) -> bool:
    return bool(email) and _EMAIL_RE.match(email) is not None


def is_valid_url(url: str) -> bool:
    """Accept absolute URLs that carry both a scheme and a host."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_valid_connection_string(connection_string: str, kind: str) -> bool:
    """Shape check keyed by database kind; not a full grammar check."""
    if not connection_string:
        return False
    if kind == "mongodb":
        return connection_string.startswith(("mongodb://", "mongodb+srv://"))
    if kind == "postgresql":
        return connection_string.startswith(("postgres://", "postgresql://"))
    if kind == "mysql":
        return "mysql" in connection_string
    return False


def is_valid_file_size(size_in_bytes: int, max_size_mb: float) -> bool:
    return size_in_bytes <= max_size_mb * BYTES_PER_MB
