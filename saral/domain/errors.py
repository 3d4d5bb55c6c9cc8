"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class ValidationError(DomainError):
    """Invalid input or state."""


class StorageError(DomainError):
    """Underlying key-value medium failed (unavailable, corrupt, denied)."""
