"""YAML loading using ruamel.yaml."""

from __future__ import annotations

from datetime import date
from io import StringIO
from typing import TypeAlias

from ruamel.yaml import YAML, YAMLError

# Mapping | Sequence | Scalar; timestamps load as date or datetime
Document: TypeAlias = (
    dict[str, "Document"] | list["Document"] | str | int | float | bool | date | None
)


def load_yaml(yaml_str: str) -> Document:
    """Parse a single YAML document into plain dicts, lists and scalars.

    Empty input yields None. Syntax errors, duplicate mapping keys and
    multi-document streams raise YAMLError.
    """
    if not yaml_str or not yaml_str.strip():
        return None

    yaml = YAML(typ="safe", pure=True)
    return yaml.load(StringIO(yaml_str))


def describe_yaml_error(e: YAMLError) -> str:
    """Render a parser error as one line, with the 1-based line number."""
    mark = getattr(e, "problem_mark", None)
    problem = getattr(e, "problem", None)
    message = problem if problem else str(e).strip()
    if mark is not None:
        return f"line {mark.line + 1}, column {mark.column + 1}: {message}"
    return message
