"""Expand file and directory arguments into the list of files to validate."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from yamlverify.config import DEFAULT_EXTENSIONS
from yamlverify.errors import DiscoveryError, EmptyInputError

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Files found plus the input paths that could not be resolved."""

    files: list[str] = field(default_factory=list)
    errors: list[DiscoveryError] = field(default_factory=list)


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def find_yaml_files(
    directory: Path,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    include_hidden: bool = False,
) -> list[Path]:
    """Recursively list files under ``directory`` with a matching suffix."""
    suffixes = set(extensions)
    found = []
    for candidate in directory.rglob("*"):
        if candidate.suffix not in suffixes or not candidate.is_file():
            continue
        if not include_hidden and _is_hidden(candidate, directory):
            continue
        found.append(candidate)
    return sorted(found)


def discover(
    paths: Iterable[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    include_hidden: bool = False,
) -> DiscoveryResult:
    """Resolve every input path to concrete files, deduplicated.

    Directories are searched recursively; files given explicitly are kept
    whatever their extension. Missing paths are recorded and skipped.

    Raises:
        EmptyInputError: when no file at all was found.
    """
    paths = list(paths)
    extensions = tuple(extensions)
    result = DiscoveryResult()
    seen: set[Path] = set()

    def _add(candidate: Path) -> None:
        key = candidate.resolve()
        if key in seen:
            return
        seen.add(key)
        result.files.append(str(candidate))

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            matches = find_yaml_files(path, extensions, include_hidden)
            logger.debug("%s: %d matching files", raw, len(matches))
            for match in matches:
                _add(match)
        elif path.is_file():
            _add(path)
        else:
            error = DiscoveryError(raw)
            logger.debug("Skipping %s", error)
            result.errors.append(error)

    if not result.files:
        raise EmptyInputError(result.errors)

    logger.info("Discovered %d files from %d paths", len(result.files), len(paths))
    return result
