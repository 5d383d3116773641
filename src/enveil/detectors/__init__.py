"""Pattern registry and secret detector for Enveil."""

from enveil.detectors.registry import (
    DEFAULT_PATTERNS,
    PatternRegistry,
    PatternRule,
    default_registry,
)
from enveil.detectors.secret_detector import BINARY_EXTS, SecretDetector

__all__ = [
    "BINARY_EXTS",
    "DEFAULT_PATTERNS",
    "PatternRegistry",
    "PatternRule",
    "SecretDetector",
    "default_registry",
]
