"""Per-file validation -- read, parse, detect, always return an outcome."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from ruamel.yaml import YAMLError

from yamlverify.config import VerifyOptions
from yamlverify.validator.duplicates import detect
from yamlverify.validator.models import FileOutcome
from yamlverify.validator.yaml_syntax import describe_yaml_error, load_yaml

logger = logging.getLogger(__name__)


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def validate_text(
    path: str, yaml_str: str, options: VerifyOptions | None = None,
) -> FileOutcome:
    """Parse already-loaded text and run duplicate detection on it.

    Order: 1. YAML syntax -> 2. duplicate detection.
    If parsing fails the outcome is a parse error and detection is skipped.
    """
    try:
        doc = load_yaml(yaml_str)
    except YAMLError as e:
        return FileOutcome.parse_error(path, describe_yaml_error(e))

    violations = detect(doc, options)
    if violations:
        return FileOutcome.validation_failed(path, violations)
    return FileOutcome.success(path)


async def validate_file(path: str, options: VerifyOptions | None = None) -> FileOutcome:
    """Validate one file. Never raises: every failure becomes the outcome."""
    try:
        yaml_str = await asyncio.to_thread(_read_text, path)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return FileOutcome.parse_error(path, f"Cannot read file: {e}")

    try:
        outcome = validate_text(path, yaml_str, options)
    except Exception as e:
        logger.exception("Unexpected error validating %s", path)
        return FileOutcome.parse_error(path, f"Internal error: {e}")

    logger.debug("%s: %s", path, outcome.status.value)
    return outcome
