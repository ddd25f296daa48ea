"""Tests for CLI tool."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


def run_cli(*args: str, env: Optional[Dict[str, str]] = None) -> subprocess.CompletedProcess:
    """Run the CLI module in a subprocess with a clean cloakid environment."""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("CLOAKID_")}
    environ["PYTHONPATH"] = os.pathsep.join(
        [str(SRC_DIR)] + ([environ["PYTHONPATH"]] if environ.get("PYTHONPATH") else [])
    )
    environ.update(env or {})
    command: List[str] = [sys.executable, "-m", "cloakid.cli.main", *args]
    return subprocess.run(command, capture_output=True, text=True, env=environ)


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "cloakid: Reversible Identifier Obfuscation" in result.stdout
    assert "--analyze" in result.stdout
    assert "--encode" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert "cloakid 0.1.0" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = run_cli()
    assert result.returncode == 0
    assert "cloakid: Reversible Identifier Obfuscation" in result.stdout


def test_cli_encode_decode_roundtrip() -> None:
    """Test --encode output decodes back with --decode."""
    encoded = run_cli("--encode", "123456", "--kind", "int32", "--min-length", "6")
    assert encoded.returncode == 0
    text = encoded.stdout.strip()
    assert len(text) >= 6

    decoded = run_cli("--decode", text, "--kind", "int32", "--min-length", "6")
    assert decoded.returncode == 0
    assert decoded.stdout.strip() == "123456"


def test_cli_options_from_environment() -> None:
    """Test default options are read from CLOAKID_* variables."""
    env = {"CLOAKID_MIN_LENGTH": "12"}
    encoded = run_cli("--encode", "5", env=env)
    assert encoded.returncode == 0
    assert len(encoded.stdout.strip()) >= 12


def test_cli_invalid_environment() -> None:
    """Test an invalid configuration is reported as an error."""
    result = run_cli("--encode", "5", env={"CLOAKID_MIN_LENGTH": "-3"})
    assert result.returncode == 1
    assert "Error" in result.stderr


@pytest.mark.parametrize(
    "args",
    [
        ("--decode", "!!!"),
        ("--encode", "-1"),
        ("--encode", "70000", "--kind", "int16"),
        ("--encode", "1", "--kind", "float"),
        ("--encode", "1", "--alphabet", "aab"),
    ],
)
def test_cli_errors(args: tuple) -> None:
    """Test invalid input and options exit with status 1."""
    result = run_cli(*args)
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_non_canonical() -> None:
    """Test non-canonical input exits with its own status."""
    encoded = run_cli("--encode", "1", "--min-length", "10")
    text = encoded.stdout.strip()

    result = run_cli("--decode", text[:2], "--min-length", "10")
    assert result.returncode == 2
    assert "canonical" in result.stderr


def test_cli_analyze_example_file() -> None:
    """Test CLI --analyze with a real example file."""
    example_file = Path(__file__).resolve().parents[2] / "examples" / "basic_usage.py"
    if not example_file.exists():
        pytest.skip("Example file not found")

    result = run_cli("--analyze", str(example_file))
    assert result.returncode == 0
    assert "cloakid: Reversible Identifier Obfuscation" in result.stdout
    assert "models loaded" in result.stdout
    assert "Order" in result.stdout
    assert "int64" in result.stdout


def test_cli_analyze_missing_file() -> None:
    """Test CLI --analyze with missing file."""
    result = run_cli("--analyze", "nonexistent.py")
    assert result.returncode == 1
    assert "Error" in result.stderr or "not found" in result.stderr.lower()
