"""Public scanning API for Enveil.

    from enveil.scanner import scan, build_report
"""

from enveil.scanner.config import get_default_scanner_config, load_scanner_config
from enveil.scanner.report import build_report, classify_tree, scan

__all__ = [
    "build_report",
    "classify_tree",
    "get_default_scanner_config",
    "load_scanner_config",
    "scan",
]
