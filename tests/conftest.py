"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add yaml_verify/ to Python path so `from yamlverify.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "yaml_verify"))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def isolated_options(tmp_path: Path, monkeypatch) -> None:
    """Keep options files and YAMLVERIFY_* variables from leaking into tests."""
    for name in (
        "YAMLVERIFY_SPECIAL_FIELD",
        "YAMLVERIFY_CONCURRENCY",
        "YAMLVERIFY_SENTINEL_COLLIDES",
        "YAMLVERIFY_VERBOSE",
        "YAMLVERIFY_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("YAMLVERIFY_OPTIONS_PATH", str(tmp_path / "no-options.json"))
