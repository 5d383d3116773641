"""Report building: merges file classification with content findings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from enveil.classify.rules import file_type, is_sensitive, risk_for_path
from enveil.core.exceptions import NotADirectory, PathNotFound
from enveil.core.findings import RiskLevel, ScanReport, ScanResult
from enveil.core.walker import DEFAULT_SKIP_DIRS, iter_files
from enveil.detectors.secret_detector import EventSink, SecretDetector
from enveil.scanner.config import load_scanner_config

logger = logging.getLogger(__name__)


def _validate_root(root: Path) -> None:
    if not root.exists():
        raise PathNotFound("Path not found", path=str(root))
    if not root.is_dir():
        raise NotADirectory("Path is not a directory", path=str(root))


def classify_tree(root: str | Path, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS) -> List[ScanResult]:
    """One result, with no secrets, for every sensitive file under *root*."""
    return [
        ScanResult(path=str(p), file_type=file_type(p), risk_level=risk_for_path(p))
        for p in iter_files(root, skip_dirs)
        if is_sensitive(p)
    ]


def build_report(
    root: str | Path,
    verbose: bool = False,
    detector: Optional[SecretDetector] = None,
    exclude_dirs: Iterable[str] = (),
) -> ScanReport:
    """
    Scan *root* and merge classification and content findings by path.

    Files found only by the content pass are reported as high risk. Files
    found by both keep their classified risk level with the findings
    attached.

    Args:
        root: Directory to scan
        verbose: Emit one event per file with findings
        detector: Detector to use (default rules when omitted)
        exclude_dirs: Directory names to skip on top of the defaults

    Returns:
        The merged report

    Raises:
        PathNotFound: If root does not exist
        NotADirectory: If root is not a directory
    """
    root_path = Path(root)
    _validate_root(root_path)
    detector = detector or SecretDetector()
    skip_dirs = DEFAULT_SKIP_DIRS | frozenset(exclude_dirs)

    results: List[ScanResult] = classify_tree(root_path, skip_dirs)
    index: Dict[str, int] = {r.path: i for i, r in enumerate(results)}
    logger.debug("Classified %d sensitive files under %s", len(results), root_path)

    for path, findings in detector.scan_directory(root_path, verbose=verbose, skip_dirs=skip_dirs):
        if path in index:
            i = index[path]
            results[i] = results[i].with_secrets(findings)
        else:
            index[path] = len(results)
            results.append(
                ScanResult(
                    path=path,
                    file_type=file_type(path),
                    risk_level=RiskLevel.HIGH,
                    secrets=tuple(findings),
                )
            )

    return ScanReport.from_results(results)


def scan(
    root: str | Path,
    verbose: bool = False,
    config: Optional[Dict[str, Any]] = None,
    on_match: Optional[EventSink] = None,
) -> ScanReport:
    """
    Scan entry point used by the CLI and hook scripts.

    ``config`` is a scanner configuration as returned by
    :func:`enveil.scanner.config.load_scanner_config`; when omitted the
    configuration is looked up at *root*.
    """
    _validate_root(Path(root))
    if config is None:
        config = load_scanner_config(repo_root=str(root))

    detector = SecretDetector(on_match=on_match)
    disabled = config.get("disabled_rules") or []
    if disabled:
        detector.registry = detector.registry.without(disabled)

    return build_report(
        root,
        verbose=verbose,
        detector=detector,
        exclude_dirs=config.get("exclude_dirs") or (),
    )
