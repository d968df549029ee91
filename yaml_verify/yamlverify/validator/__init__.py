"""Per-file YAML validation: loading, duplicate detection, outcomes."""

from yamlverify.validator.duplicates import canonical_form, detect
from yamlverify.validator.models import FileOutcome, FileStatus, Violation
from yamlverify.validator.pipeline import validate_file, validate_text

__all__ = [
    "FileOutcome",
    "FileStatus",
    "Violation",
    "canonical_form",
    "detect",
    "validate_file",
    "validate_text",
]
