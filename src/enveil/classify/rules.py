# SPDX-License-Identifier: MIT
"""
Sensitivity classification rules.

Decides from a file's name and extension alone (no content is read) whether
the file is sensitive, and which risk tier it belongs to:

- key and credential formats, dotenv files: high
- structured config and database formats: medium
- everything else (backups, logs, unknown): low
"""
from __future__ import annotations

from pathlib import Path
from typing import FrozenSet

from enveil.core.findings import RiskLevel

DOTENV_PREFIX = ".env"
DOTENV_FILE_TYPE = ".env"

SENSITIVE_NAMES: FrozenSet[str] = frozenset(
    {
        ".env",
        ".env.local",
        ".env.production",
        ".env.development",
        "id_rsa",
        "id_ed25519",
        "id_dsa",
        "id_ecdsa",
        "known_hosts",
        "authorized_keys",
        "npmrc",
        ".npmrc",
        "pip.conf",
        ".netrc",
        ".git-credentials",
        "service-account.json",
        "credentials.json",
        "secrets.yaml",
        "secrets.yml",
    }
)

# Names holding private keys or stored credentials, high risk without an extension
CREDENTIAL_NAMES: FrozenSet[str] = frozenset(
    {
        "id_rsa",
        "id_ed25519",
        "id_dsa",
        "id_ecdsa",
        ".netrc",
        ".npmrc",
        "npmrc",
        ".git-credentials",
    }
)

ENV_CONFIG_EXTENSIONS: FrozenSet[str] = frozenset(
    {".env", ".json", ".yaml", ".yml", ".toml", ".ini", ".conf", ".config"}
)
KEY_EXTENSIONS: FrozenSet[str] = frozenset(
    {".pem", ".key", ".pub", ".p12", ".pfx", ".crt", ".cer"}
)
DATABASE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".sql", ".db", ".sqlite", ".sqlite3"}
)
BACKUP_EXTENSIONS: FrozenSet[str] = frozenset({".log", ".bak", ".backup", ".old"})

SENSITIVE_EXTENSIONS: FrozenSet[str] = (
    ENV_CONFIG_EXTENSIONS | KEY_EXTENSIONS | DATABASE_EXTENSIONS | BACKUP_EXTENSIONS
)

HIGH_RISK_EXTENSIONS: FrozenSet[str] = KEY_EXTENSIONS | {DOTENV_FILE_TYPE}
MEDIUM_RISK_EXTENSIONS: FrozenSet[str] = (
    ENV_CONFIG_EXTENSIONS - {DOTENV_FILE_TYPE}
) | DATABASE_EXTENSIONS


def is_dotenv_name(name: str) -> bool:
    return name.startswith(DOTENV_PREFIX)


def file_type(path: str | Path) -> str:
    """
    Normalized file type of *path*.

    Dotenv-style names (``.env``, ``.env.local``, ...) report ``.env``;
    other files report their lower-cased extension, or ``""`` when they
    have none.
    """
    p = Path(path)
    if is_dotenv_name(p.name):
        return DOTENV_FILE_TYPE
    return p.suffix.lower()


def is_sensitive(path: str | Path) -> bool:
    """
    Check whether a file is sensitive from its name alone.

    Args:
        path: File path; only the base name is inspected

    Returns:
        True for known sensitive names, dotenv names and sensitive extensions
    """
    name = Path(path).name
    if name in SENSITIVE_NAMES or is_dotenv_name(name):
        return True
    return file_type(path) in SENSITIVE_EXTENSIONS


def risk_level(extension: str) -> RiskLevel:
    """Risk tier for a normalized extension (see :func:`file_type`)."""
    ext = extension.lower()
    if ext in HIGH_RISK_EXTENSIONS:
        return RiskLevel.HIGH
    if ext in MEDIUM_RISK_EXTENSIONS:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def risk_for_path(path: str | Path) -> RiskLevel:
    """Risk tier for a file, counting credential-store names as high."""
    if Path(path).name in CREDENTIAL_NAMES:
        return RiskLevel.HIGH
    return risk_level(file_type(path))
