# SPDX-License-Identifier: MIT
"""
Line-level secret detection.

Applies a :class:`PatternRegistry` to every line of a file and reports one
:class:`SecretFinding` per matching rule, with a masked preview of the line.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from enveil.core.findings import SecretFinding
from enveil.core.redaction import mask_line
from enveil.core.walker import DEFAULT_SKIP_DIRS, iter_files
from enveil.detectors.registry import PatternRegistry, default_registry

logger = logging.getLogger(__name__)

# Never read as text
BINARY_EXTS = {
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".bin",
    ".o",
    ".a",
    ".class",
    ".jar",
    ".zip",
    ".tar",
    ".gz",
    ".tgz",
    ".bz2",
    ".xz",
    ".7z",
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".ico",
    ".bmp",
    ".pdf",
    ".mp3",
    ".mp4",
    ".mov",
    ".webm",
    ".woff",
    ".woff2",
    ".ttf",
    ".eot",
}

EventSink = Callable[[str], None]


def _is_binary_path(path: Path) -> bool:
    return path.suffix.lower() in BINARY_EXTS


def _physical_lines(text: str) -> List[str]:
    # only "\n" ends a line; a "\r" before it is dropped
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class SecretDetector:
    """
    Scans files and directory trees for secrets.

    ``on_match`` receives one message per matching file when a directory is
    scanned verbosely; without it the message goes to the module logger.
    """

    def __init__(
        self,
        registry: Optional[PatternRegistry] = None,
        on_match: Optional[EventSink] = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self._on_match = on_match

    def scan_text(self, text: str) -> List[SecretFinding]:
        """Scan already-decoded text, one line at a time."""
        findings = []
        for line_number, line in enumerate(_physical_lines(text), start=1):
            masked = None
            for rule in self.registry.matching(line):
                if masked is None:
                    masked = mask_line(line)
                findings.append(
                    SecretFinding(
                        secret_type=rule.label,
                        line_number=line_number,
                        line_content=masked,
                        matched_pattern=rule.pattern.pattern,
                    )
                )
        return findings

    def scan_file(self, path: str | Path) -> List[SecretFinding]:
        """
        Scan a single file.

        Binary and media files are skipped by extension. Files that cannot be
        read or are not valid UTF-8 produce no findings.

        Args:
            path: File to scan

        Returns:
            Findings in line order, then registry order
        """
        file_path = Path(path)
        if _is_binary_path(file_path):
            return []

        try:
            with open(file_path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable file %s: %s", file_path, e)
            return []

        return self.scan_text(text)

    def scan_directory(
        self,
        root: str | Path,
        verbose: bool = False,
        skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    ) -> List[Tuple[str, List[SecretFinding]]]:
        """
        Scan a directory tree.

        Args:
            root: Directory to walk
            verbose: Emit one event per file with findings
            skip_dirs: Directory names not to enter

        Returns:
            ``(path, findings)`` pairs for files with at least one finding
        """
        results = []
        for file_path in iter_files(root, skip_dirs):
            findings = self.scan_file(file_path)
            if not findings:
                continue
            if verbose:
                self._emit(f"[SECRETS] Found {len(findings)} secrets in: {file_path}")
            results.append((str(file_path), findings))
        return results

    def _emit(self, message: str) -> None:
        if self._on_match is not None:
            self._on_match(message)
        else:
            logger.info(message)
