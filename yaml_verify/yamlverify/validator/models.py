"""Validation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """Final state of one file's validation."""

    success = "success"
    parse_error = "parse_error"
    validation_failed = "validation_failed"


class Violation(BaseModel):
    """A single duplicate-entry finding."""

    model_config = ConfigDict(frozen=True)

    field: str
    description: str
    index: int
    first_index: int


class FileOutcome(BaseModel):
    """Complete result of validating one file."""

    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatus
    message: str | None = None
    violations: list[Violation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == FileStatus.success

    @property
    def failed(self) -> bool:
        return not self.ok

    @classmethod
    def success(cls, path: str) -> FileOutcome:
        return cls(path=path, status=FileStatus.success)

    @classmethod
    def parse_error(cls, path: str, message: str) -> FileOutcome:
        return cls(path=path, status=FileStatus.parse_error, message=message)

    @classmethod
    def validation_failed(cls, path: str, violations: list[Violation]) -> FileOutcome:
        return cls(
            path=path,
            status=FileStatus.validation_failed,
            violations=list(violations),
        )
