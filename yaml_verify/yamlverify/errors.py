"""Exceptions raised outside the per-file validation boundary."""

from __future__ import annotations


class YamlVerifyError(Exception):
    """Base class for errors that change the control flow of a run."""


class DiscoveryError(YamlVerifyError):
    """An input path could not be resolved to any file or directory."""

    def __init__(self, path: str, reason: str = "path does not exist") -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class EmptyInputError(YamlVerifyError):
    """Discovery resolved zero files, so there is nothing to validate."""

    def __init__(self, errors: list[DiscoveryError] | None = None) -> None:
        super().__init__("No YAML files found in the given paths")
        self.errors = errors or []


class OptionsError(YamlVerifyError):
    """Options file, environment or CLI values are invalid."""
