"""Test `python -m enveil` entry point."""

import os
import subprocess
import sys
from pathlib import Path

SRC = str(Path(__file__).resolve().parents[1] / "src")


def test_main_module_importable():
    import enveil.__main__  # noqa: F401


def test_main_module_executable():
    """Test that the module can be executed with python -m."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [SRC, env.get("PYTHONPATH")]))
    result = subprocess.run(
        [sys.executable, "-m", "enveil", "--help"],
        capture_output=True,
        text=True,
        timeout=30,
        env=env,
    )
    assert result.returncode == 0
    assert "scan" in result.stdout
    assert "protect" in result.stdout
