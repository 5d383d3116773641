"""Finding, scan and protection data structures for Enveil."""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Dict, Any, Iterable, Tuple


class RiskLevel(Enum):
    """Coarse sensitivity grade of a file."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank, lowest first (high before medium before low)."""
        return _RISK_RANK[self]


_RISK_RANK = {RiskLevel.HIGH: 0, RiskLevel.MEDIUM: 1, RiskLevel.LOW: 2}


@dataclass(frozen=True)
class SecretFinding:
    """A single line-level secret match."""

    secret_type: str  # registry label (e.g. 'API_KEY', 'GITHUB_TOKEN')
    line_number: int  # 1-based line number
    line_content: str  # masked preview of the line
    matched_pattern: str  # source of the rule that fired

    def to_dict(self) -> Dict[str, Any]:
        return {
            "secret_type": self.secret_type,
            "line_number": self.line_number,
            "line_content": self.line_content,
            "matched_pattern": self.matched_pattern,
        }


@dataclass(frozen=True)
class ScanResult:
    """Per-file scan outcome."""

    path: str
    file_type: str  # normalized extension, or '.env' for dotenv names
    risk_level: RiskLevel
    secrets: Tuple[SecretFinding, ...] = ()

    @property
    def has_secrets(self) -> bool:
        return bool(self.secrets)

    @property
    def is_risky(self) -> bool:
        return self.risk_level is RiskLevel.HIGH or self.has_secrets

    def with_secrets(self, findings: Iterable[SecretFinding]) -> "ScanResult":
        """Return a copy carrying *findings*; the risk level is kept as is."""
        return replace(self, secrets=self.secrets + tuple(findings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "file_type": self.file_type,
            "risk_level": self.risk_level.value,
            "secrets": [s.to_dict() for s in self.secrets],
        }


@dataclass(frozen=True)
class ScanReport:
    """Aggregate over all per-file results of one scan."""

    total_files: int
    risky_files: int
    files_with_secrets: int
    total_secrets_found: int
    results: Tuple[ScanResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[ScanResult]) -> "ScanReport":
        """Build a report, deriving every count from *results*."""
        rows = tuple(results)
        with_secrets = [r for r in rows if r.has_secrets]
        return cls(
            total_files=len(rows),
            risky_files=sum(1 for r in rows if r.is_risky),
            files_with_secrets=len(with_secrets),
            total_secrets_found=sum(len(r.secrets) for r in with_secrets),
            results=rows,
        )

    def sorted_results(self) -> Tuple[ScanResult, ...]:
        """Results ordered high, medium, low; discovery order within a tier."""
        return tuple(sorted(self.results, key=lambda r: r.risk_level.rank))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files": self.total_files,
            "risky_files": self.risky_files,
            "files_with_secrets": self.files_with_secrets,
            "total_secrets_found": self.total_secrets_found,
            "results": [r.to_dict() for r in self.results],
        }


class ProtectAction(Enum):
    """Action actually taken on a file."""

    MOVED = "Moved"
    ENCRYPTED = "Encrypted"
    SECURED = "Secured"


class ProtectOption(Enum):
    """Protection requested by the caller."""

    MOVE = "move"
    ENCRYPT = "encrypt"
    BOTH = "both"

    @classmethod
    def parse(cls, text: str) -> "ProtectOption":
        """Parse an option name case-insensitively; unknown names mean MOVE."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.MOVE


@dataclass(frozen=True)
class ProtectResult:
    """Outcome of protecting one file."""

    original_path: str
    protected_path: str
    action: ProtectAction
    success: bool
    message: str
    # base64 key generated for this file; the only copy that leaves the protector
    generated_key: Optional[str] = field(default=None, repr=False, compare=False)

    @classmethod
    def failure(
        cls, original_path: str, action: ProtectAction, message: str
    ) -> "ProtectResult":
        """Create a failed result with no destination."""
        return cls(
            original_path=original_path,
            protected_path="",
            action=action,
            success=False,
            message=message,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format. Never includes the generated key."""
        return {
            "original_path": self.original_path,
            "protected_path": self.protected_path,
            "action": self.action.value,
            "success": self.success,
            "message": self.message,
        }
