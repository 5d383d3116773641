"""Sensitivity classification for Enveil."""

from .rules import (
    SENSITIVE_EXTENSIONS,
    SENSITIVE_NAMES,
    file_type,
    is_sensitive,
    risk_for_path,
    risk_level,
)

__all__ = [
    "SENSITIVE_EXTENSIONS",
    "SENSITIVE_NAMES",
    "file_type",
    "is_sensitive",
    "risk_for_path",
    "risk_level",
]
