"""Duplicate-entry detection over top-level list fields of a parsed document.

Three rules, chosen per field:

* the special field (``layoutAssignments`` by default) compares entries on
  their ``layout`` / ``recordType`` pair;
* fields configured in ``unique_keys`` compare mapping entries on one key;
* every other list compares whole entries by canonical form.

Only top-level lists are scanned. Each field is one pass with a seen-dict,
and the violation always names the later occurrence.
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import date, datetime
from typing import Any

from yamlverify.config import VerifyOptions
from yamlverify.validator.models import Violation
from yamlverify.validator.yaml_syntax import Document

logger = logging.getLogger(__name__)

LAYOUT_KEY = "layout"
RECORD_TYPE_KEY = "recordType"
NO_RECORD_TYPE = "noRecordType"


CYCLE_MARKER = "*cycle"
# Container forms longer than this are replaced by their digest, so nested
# aliases cannot grow a form exponentially.
MAX_FORM_LENGTH = 1024


class Canonicalizer:
    """Serialize document nodes so that equivalent nodes compare equal.

    Mapping keys are sorted by their own canonical form, so key order does
    not matter. Scalars keep their type: ``1``, ``1.0``, ``"1"`` and ``true``
    all serialize differently.

    Container forms are cached by ``id`` for the lifetime of the instance, so
    a node shared through YAML aliases is serialized once. A container that
    is reached again while it is still being serialized becomes
    ``CYCLE_MARKER``. One instance must only be used while the document it
    serializes is alive.
    """

    def __init__(self) -> None:
        self._memo: dict[int, str] = {}
        self._active: set[int] = set()

    def form(self, node: Any) -> str:
        if isinstance(node, (dict, list, tuple)):
            return self._container_form(node)
        if node is None or isinstance(node, (str, bool, int)):
            return json.dumps(node, ensure_ascii=False)
        if isinstance(node, float):
            # json.dumps keeps the trailing .0 so 1.0 never matches 1
            return json.dumps(node) if node == node else "NaN"
        if isinstance(node, (datetime, date)):
            return f"!{type(node).__name__} {node.isoformat()}"
        return f"!{type(node).__name__} {json.dumps(str(node), ensure_ascii=False)}"

    def _container_form(self, node: dict | list | tuple) -> str:
        key = id(node)
        if key in self._memo:
            return self._memo[key]
        if key in self._active:
            return CYCLE_MARKER

        self._active.add(key)
        try:
            if isinstance(node, dict):
                pairs = sorted((self.form(k), self.form(v)) for k, v in node.items())
                text = "{" + ",".join(f"{k}:{v}" for k, v in pairs) + "}"
            else:
                text = "[" + ",".join(self.form(item) for item in node) + "]"
        finally:
            self._active.discard(key)

        if len(text) > MAX_FORM_LENGTH:
            text = "#sha256:" + hashlib.sha256(text.encode("utf-8")).hexdigest()
        self._memo[key] = text
        return text


def canonical_form(node: Any) -> str:
    """Canonical text of a single node; see ``Canonicalizer``."""
    return Canonicalizer().form(node)


def _display(node: Any, canon: Canonicalizer) -> str:
    if isinstance(node, str):
        return node
    return canon.form(node)


def _check_special_field(
    field: str, entries: list, sentinel_collides: bool, canon: Canonicalizer,
) -> list[Violation]:
    """Flag entries sharing both layout and recordType.

    Entries without a recordType get the sentinel; unless sentinel_collides
    is set, sentinel entries never collide with each other.
    """
    violations: list[Violation] = []
    seen: dict[tuple[str, str], int] = {}

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or entry.get(LAYOUT_KEY) is None:
            logger.debug("%s[%d]: no %s, skipped", field, i, LAYOUT_KEY)
            continue

        layout = entry[LAYOUT_KEY]
        record_type = entry.get(RECORD_TYPE_KEY)
        if record_type is None:
            record_type = NO_RECORD_TYPE

        if record_type == NO_RECORD_TYPE and not sentinel_collides:
            continue

        key = (canon.form(layout), canon.form(record_type))
        if key in seen:
            violations.append(
                Violation(
                    field=field,
                    index=i,
                    first_index=seen[key],
                    description=(
                        f"Duplicate entry in '{field}' at index {i}: layout "
                        f"'{_display(layout, canon)}' with recordType '{_display(record_type, canon)}' "
                        f"is already assigned at index {seen[key]}"
                    ),
                )
            )
        else:
            seen[key] = i

    return violations


def _check_keyed_field(
    field: str, entries: list, unique_key: str, canon: Canonicalizer,
) -> list[Violation]:
    """Flag mapping entries that repeat the value of ``unique_key``."""
    violations: list[Violation] = []
    seen: dict[str, int] = {}

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or unique_key not in entry:
            continue
        value = entry[unique_key]
        key = canon.form(value)
        if key in seen:
            violations.append(
                Violation(
                    field=field,
                    index=i,
                    first_index=seen[key],
                    description=(
                        f"Duplicate entry in '{field}' at index {i}: "
                        f"{unique_key}={_display(value, canon)} already used at index {seen[key]}"
                    ),
                )
            )
        else:
            seen[key] = i

    return violations


def _check_generic_field(
    field: str, entries: list, canon: Canonicalizer,
) -> list[Violation]:
    """Flag entries whose canonical form already appeared in the list."""
    violations: list[Violation] = []
    seen: dict[str, int] = {}

    for i, entry in enumerate(entries):
        key = canon.form(entry)
        if key in seen:
            violations.append(
                Violation(
                    field=field,
                    index=i,
                    first_index=seen[key],
                    description=(
                        f"Duplicate entry in '{field}' at index {i}: "
                        f"{_display(entry, canon)} (first seen at index {seen[key]})"
                    ),
                )
            )
        else:
            seen[key] = i

    return violations


def detect(doc: Document, options: VerifyOptions | None = None) -> list[Violation]:
    """Return every duplicate found in the top-level list fields of ``doc``.

    Documents that are not mappings (empty files, scalars, top-level lists)
    have no fields to check and produce no violations.
    """
    if options is None:
        options = VerifyOptions()

    if not isinstance(doc, dict):
        return []

    canon = Canonicalizer()
    violations: list[Violation] = []
    for field, value in doc.items():
        if not isinstance(value, list) or not value:
            continue
        name = str(field)
        if name == options.special_field:
            violations.extend(
                _check_special_field(name, value, options.sentinel_collides, canon)
            )
        elif name in options.unique_keys:
            violations.extend(
                _check_keyed_field(name, value, options.unique_keys[name], canon)
            )
        else:
            violations.extend(_check_generic_field(name, value, canon))

    return violations
