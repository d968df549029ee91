"""Tests for option loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from yamlverify.config import VerifyOptions, load_options, parse_unique_keys
from yamlverify.errors import OptionsError


class TestVerifyOptions:
    def test_defaults(self) -> None:
        o = VerifyOptions()
        assert o.special_field == "layoutAssignments"
        assert o.sentinel_collides is False
        assert o.unique_keys == {}
        assert o.extensions == (".yaml", ".yml")
        assert o.include_hidden is False
        assert o.concurrency == 50
        assert o.verbose is False

    def test_extensions_get_leading_dot(self) -> None:
        assert VerifyOptions(extensions=["yaml", ".yml"]).extensions == (".yaml", ".yml")

    def test_concurrency_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            VerifyOptions(concurrency=0)


class TestLoadOptions:
    def test_defaults_without_file_or_env(self) -> None:
        assert load_options() == VerifyOptions()

    def test_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("YAMLVERIFY_SPECIAL_FIELD", "pageLayouts")
        monkeypatch.setenv("YAMLVERIFY_CONCURRENCY", "8")
        monkeypatch.setenv("YAMLVERIFY_SENTINEL_COLLIDES", "true")
        monkeypatch.setenv("YAMLVERIFY_VERBOSE", "no")
        o = load_options()
        assert o.special_field == "pageLayouts"
        assert o.concurrency == 8
        assert o.sentinel_collides is True
        assert o.verbose is False

    def test_invalid_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("YAMLVERIFY_CONCURRENCY", "many")
        with pytest.raises(OptionsError):
            load_options()

    def test_options_file(self, tmp_path: Path, monkeypatch) -> None:
        opts = tmp_path / "opts.json"
        opts.write_text(json.dumps({
            "concurrency": 3,
            "unique_keys": {"objectPermissions": "object"},
            "extensions": [".yaml"],
        }))
        monkeypatch.setenv("YAMLVERIFY_OPTIONS_PATH", str(opts))
        # the file wins over the environment
        monkeypatch.setenv("YAMLVERIFY_CONCURRENCY", "9")
        o = load_options()
        assert o.concurrency == 3
        assert o.unique_keys == {"objectPermissions": "object"}
        assert o.extensions == (".yaml",)

    def test_options_file_not_an_object(self, tmp_path: Path, monkeypatch) -> None:
        opts = tmp_path / "opts.json"
        opts.write_text("[1, 2]")
        monkeypatch.setenv("YAMLVERIFY_OPTIONS_PATH", str(opts))
        with pytest.raises(OptionsError):
            load_options()

    def test_options_file_bad_json(self, tmp_path: Path, monkeypatch) -> None:
        opts = tmp_path / "opts.json"
        opts.write_text("{not json")
        monkeypatch.setenv("YAMLVERIFY_OPTIONS_PATH", str(opts))
        with pytest.raises(OptionsError):
            load_options()


class TestParseUniqueKeys:
    def test_pairs(self) -> None:
        assert parse_unique_keys(["objectPermissions=object", " tabs = tab "]) == {
            "objectPermissions": "object",
            "tabs": "tab",
        }

    @pytest.mark.parametrize("bad", ["noequals", "=key", "field="])
    def test_rejects_malformed(self, bad: str) -> None:
        with pytest.raises(OptionsError):
            parse_unique_keys([bad])
