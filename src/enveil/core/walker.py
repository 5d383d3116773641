"""Recursive file tree traversal shared by detection and protection."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, FrozenSet

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS: FrozenSet[str] = frozenset(
    {".git", "node_modules", "target", "dist", "build", "vendor"}
)

DEFAULT_QUARANTINE_DIR = "enveil_secure"


def protect_skip_dirs(
    quarantine_dir: str | Path = DEFAULT_QUARANTINE_DIR,
    extra: Iterable[str] = (),
) -> FrozenSet[str]:
    """Deny-list for the protection walker: defaults plus the quarantine dir."""
    return DEFAULT_SKIP_DIRS | {Path(quarantine_dir).name} | frozenset(extra)


def _skip_dir(name: str, skip_dirs: FrozenSet[str]) -> bool:
    return name.startswith(".") or name in skip_dirs


def iter_files(
    root: str | Path, skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS
) -> Iterator[Path]:
    """
    Yield every regular file under *root*.

    Hidden directories and names in *skip_dirs* are not entered. Directory
    symlinks are never followed, so traversal always terminates. Order is
    whatever ``os.scandir`` returns.
    """
    skip = frozenset(skip_dirs)
    pending = [Path(root)]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                subdirs = []
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            if not _skip_dir(entry.name, skip):
                                subdirs.append(Path(entry.path))
                        elif entry.is_file():
                            yield Path(entry.path)
                    except OSError as e:
                        logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
            continue
        # depth-first, visiting subdirectories in entry order
        pending.extend(reversed(subdirs))


def walk_tree(
    root: str | Path,
    visit: Callable[[Path], None],
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
) -> None:
    """Invoke *visit* for every file :func:`iter_files` yields."""
    for path in iter_files(root, skip_dirs):
        visit(path)
