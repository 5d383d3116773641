# SPDX-License-Identifier: MIT
"""
Tests for name/extension sensitivity classification.
"""
import pytest

from enveil.classify.rules import (
    SENSITIVE_NAMES,
    file_type,
    is_sensitive,
    risk_for_path,
    risk_level,
)
from enveil.core.findings import RiskLevel


class TestIsSensitive:
    """Test sensitive-file detection from names alone."""

    @pytest.mark.parametrize("name", sorted(SENSITIVE_NAMES))
    def test_sensitive_names(self, name):
        assert is_sensitive(f"/project/{name}")

    @pytest.mark.parametrize(
        "name", [".env", ".env.local", ".env.example", ".env.staging", ".envrc"]
    )
    def test_dotenv_prefix(self, name):
        assert is_sensitive(f"/project/{name}")

    @pytest.mark.parametrize(
        "name",
        [
            "config.json",
            "settings.yaml",
            "pyproject.toml",
            "server.PEM",
            "client.p12",
            "dump.sql",
            "app.sqlite3",
            "db.bak",
        ],
    )
    def test_sensitive_extensions(self, name):
        assert is_sensitive(name)

    @pytest.mark.parametrize("name", ["readme.txt", "main.py", "Makefile", "env.txt"])
    def test_not_sensitive(self, name):
        assert not is_sensitive(f"/project/{name}")

    def test_only_base_name_counts(self):
        assert not is_sensitive("/home/user/.ssh/notes.txt")
        assert is_sensitive("/tmp/backups/id_rsa")


class TestRiskLevel:
    """Test risk tiers."""

    @pytest.mark.parametrize("ext", [".env", ".pem", ".key", ".p12", ".pfx", ".crt"])
    def test_high(self, ext):
        assert risk_level(ext) is RiskLevel.HIGH

    @pytest.mark.parametrize("ext", [".json", ".yaml", ".yml", ".toml", ".ini", ".sql", ".db"])
    def test_medium(self, ext):
        assert risk_level(ext) is RiskLevel.MEDIUM

    @pytest.mark.parametrize("ext", [".txt", ".log", ".bak", ""])
    def test_low(self, ext):
        assert risk_level(ext) is RiskLevel.LOW

    def test_credential_names_are_high(self):
        assert risk_for_path("/home/u/.ssh/id_ed25519") is RiskLevel.HIGH
        assert risk_for_path(".git-credentials") is RiskLevel.HIGH

    def test_path_uses_file_type(self):
        assert risk_for_path(".env.production") is RiskLevel.HIGH
        assert risk_for_path("credentials.json") is RiskLevel.MEDIUM


class TestFileType:
    """Test normalized file types."""

    def test_dotenv_marker(self):
        assert file_type(".env.local") == ".env"
        assert file_type("/app/.env") == ".env"

    def test_extension_lowercased(self):
        assert file_type("Config.YAML") == ".yaml"

    def test_no_extension(self):
        assert file_type("Makefile") == ""
