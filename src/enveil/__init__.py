"""Enveil package metadata and public API."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("enveil")
except PackageNotFoundError:
    __version__ = "0.1.0"

from enveil.classify.rules import is_sensitive
from enveil.protect.protector import protect
from enveil.scanner.report import scan

__all__ = ["__version__", "is_sensitive", "protect", "scan"]
