"""Run options -- loaded from an options file or the environment."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from yamlverify.errors import OptionsError

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS_PATH = ".yaml-verify.json"
DEFAULT_SPECIAL_FIELD = "layoutAssignments"
DEFAULT_CONCURRENCY = 50
DEFAULT_EXTENSIONS = (".yaml", ".yml")


class VerifyOptions(BaseModel):
    """Everything that tunes discovery, detection and scheduling."""

    special_field: str = DEFAULT_SPECIAL_FIELD
    sentinel_collides: bool = False
    unique_keys: dict[str, str] = Field(default_factory=dict)
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    include_hidden: bool = False
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    verbose: bool = False

    @field_validator("extensions")
    @classmethod
    def _normalise_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one extension is required")
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _options_from_env() -> dict[str, Any]:
    opts: dict[str, Any] = {}
    if "YAMLVERIFY_SPECIAL_FIELD" in os.environ:
        opts["special_field"] = os.environ["YAMLVERIFY_SPECIAL_FIELD"]
    if "YAMLVERIFY_CONCURRENCY" in os.environ:
        opts["concurrency"] = os.environ["YAMLVERIFY_CONCURRENCY"]
    for key, env in (
        ("sentinel_collides", "YAMLVERIFY_SENTINEL_COLLIDES"),
        ("verbose", "YAMLVERIFY_VERBOSE"),
    ):
        flag = _env_flag(env)
        if flag is not None:
            opts[key] = flag
    return opts


def load_options() -> VerifyOptions:
    """Load options from the JSON options file, or the environment as fallback.

    The file path comes from YAMLVERIFY_OPTIONS_PATH and defaults to
    .yaml-verify.json in the working directory.
    """
    opts_path = Path(os.environ.get("YAMLVERIFY_OPTIONS_PATH", DEFAULT_OPTIONS_PATH))
    if opts_path.is_file():
        try:
            raw = json.loads(opts_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise OptionsError(f"Cannot read options file {opts_path}: {e}") from e
        if not isinstance(raw, dict):
            raise OptionsError(f"Options file {opts_path} must contain a JSON object")
        source = str(opts_path)
    else:
        raw = _options_from_env()
        source = "environment"

    try:
        options = VerifyOptions.model_validate(raw)
    except ValidationError as e:
        raise OptionsError(f"Invalid options from {source}: {e}") from e

    logger.debug("Options loaded from %s: %s", source, options.model_dump())
    return options


def parse_unique_keys(pairs: list[str]) -> dict[str, str]:
    """Turn ``FIELD=KEY`` strings from the command line into a mapping."""
    result: dict[str, str] = {}
    for pair in pairs:
        field, sep, key = pair.partition("=")
        field, key = field.strip(), key.strip()
        if not sep or not field or not key:
            raise OptionsError(f"Expected FIELD=KEY, got '{pair}'")
        result[field] = key
    return result
