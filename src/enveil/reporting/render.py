"""Text and JSON rendering of scan reports and protection results."""

from __future__ import annotations

import json
from typing import Iterable, List

from enveil.core.findings import ProtectResult, RiskLevel, ScanReport

RISK_ICONS = {
    RiskLevel.HIGH: "🔴",
    RiskLevel.MEDIUM: "🟡",
    RiskLevel.LOW: "🟢",
}


def render_json(report: ScanReport) -> str:
    """Serialize every report field as indented JSON."""
    return json.dumps(report.to_dict(), indent=2)


def render_text(report: ScanReport) -> str:
    """Human-readable summary, most risky files first."""
    lines: List[str] = ["", "🔍 Enveil Scan Results", "=" * 50]
    lines.append(f"Sensitive files: {report.total_files}")
    lines.append(f"Risky files: {report.risky_files}")
    lines.append(f"Files with secrets: {report.files_with_secrets}")
    lines.append(f"Secrets found: {report.total_secrets_found}")

    if not report.results:
        lines.append("")
        lines.append("✅ No sensitive files or secrets found")
        return "\n".join(lines)

    lines.append("")
    for result in report.sorted_results():
        icon = RISK_ICONS[result.risk_level]
        file_type = result.file_type or "-"
        lines.append(f"{icon} [{result.risk_level.value.upper()}] {result.path} ({file_type})")
        for secret in result.secrets:
            lines.append(
                f"    line {secret.line_number}: {secret.secret_type}  {secret.line_content}"
            )
    return "\n".join(lines)


def render_protect_results(results: Iterable[ProtectResult]) -> str:
    """One line per protected file plus a summary line."""
    results = list(results)
    lines = []
    for r in results:
        if r.success:
            lines.append(f"✅ {r.action.value}: {r.original_path} -> {r.protected_path}")
        else:
            lines.append(f"❌ {r.original_path}: {r.message}")
    failed = sum(1 for r in results if not r.success)
    lines.append(f"Processed {len(results)} file(s), {failed} failed")
    return "\n".join(lines)
