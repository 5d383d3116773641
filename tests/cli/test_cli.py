#!/usr/bin/env python3
"""Test CLI commands and exit codes."""

import json
from pathlib import Path

import pytest

from enveil import __version__
from enveil.cli import main
from enveil.protect import decode_key, decrypt_file


@pytest.fixture
def clean_repo(tmp_path: Path):
    (tmp_path / "README.md").write_text("Nothing to see here.\n")
    return tmp_path


@pytest.fixture
def leaky_repo(tmp_path: Path):
    (tmp_path / ".env").write_text("API_KEY=abcd1234efgh5678ijkl\n")
    return tmp_path


class TestScanCommand:
    """Test `enveil scan`."""

    def test_clean_repo_exits_zero(self, clean_repo, capsys):
        assert main(["scan", str(clean_repo)]) == 0
        assert "No sensitive files or secrets found" in capsys.readouterr().out

    def test_risky_repo_exits_one(self, leaky_repo, capsys):
        assert main(["scan", str(leaky_repo), "--format", "json"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data["total_files"] == 1
        assert data["results"][0]["secrets"][0]["secret_type"] == "API_KEY"

    def test_output_never_contains_secret(self, leaky_repo, capsys):
        main(["scan", str(leaky_repo)])
        assert "abcd1234efgh5678ijkl" not in capsys.readouterr().out

    def test_missing_root_exits_two(self, tmp_path, capsys):
        assert main(["scan", str(tmp_path / "nope")]) == 2
        assert "Path not found" in capsys.readouterr().err

    def test_bad_config_exits_two(self, clean_repo, capsys):
        bad = clean_repo / "bad.yml"
        bad.write_text("exclude_dirs: [unterminated\n")

        assert main(["scan", str(clean_repo), "--config", str(bad)]) == 2

        err = capsys.readouterr().err
        assert "CONFIG ERROR:" in err
        assert "Traceback" not in err


class TestProtectCommand:
    """Test `enveil protect`."""

    def test_dry_run_keeps_files(self, leaky_repo, capsys):
        assert main(["protect", str(leaky_repo), "--dry-run"]) == 0
        assert (leaky_repo / ".env").exists()
        assert not (leaky_repo / "enveil_secure").exists()
        assert "Processed 1 file(s), 0 failed" in capsys.readouterr().out

    def test_move_into_default_quarantine(self, leaky_repo):
        assert main(["protect", str(leaky_repo)]) == 0
        assert not (leaky_repo / ".env").exists()
        assert (leaky_repo / "enveil_secure" / ".env").exists()

    def test_encrypt_without_key_prints_generated_key(self, leaky_repo, capsys):
        assert main(["protect", str(leaky_repo), "--action", "encrypt"]) == 0

        captured = capsys.readouterr()
        assert "Generated encryption key" in captured.err
        key_line = next(l for l in captured.err.splitlines() if "Generated encryption key" in l)
        encoded = key_line.rsplit(" ", 1)[-1]
        assert encoded not in captured.out
        artifact = leaky_repo / "enveil_secure" / ".env.enc"
        assert decrypt_file(artifact, decode_key(encoded)) == b"API_KEY=abcd1234efgh5678ijkl\n"

    def test_bad_key_exits_two(self, leaky_repo, capsys):
        assert main(["protect", str(leaky_repo), "--action", "encrypt", "--key", "short"]) == 2
        assert (leaky_repo / ".env").exists()
        assert "Error:" in capsys.readouterr().err

    def test_missing_file_exits_one(self, tmp_path, capsys):
        assert main(["protect", str(tmp_path / "missing.env")]) == 1
        assert "Source file does not exist" in capsys.readouterr().out


class TestVersion:
    """Test version output."""

    @pytest.mark.parametrize("argv", [["version"], ["--version"]])
    def test_prints_version(self, argv, capsys):
        assert main(argv) == 0
        assert capsys.readouterr().out.strip() == __version__
