"""Bounded-concurrency validation of many files."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pydantic import BaseModel, Field, computed_field

from yamlverify.config import VerifyOptions
from yamlverify.validator.models import FileOutcome
from yamlverify.validator.pipeline import validate_file

logger = logging.getLogger(__name__)

ValidateFn = Callable[[str, VerifyOptions], Awaitable[FileOutcome]]


class BatchResult(BaseModel):
    """Result of validating a batch of files."""

    total: int
    failed: int
    outcomes: list[FileOutcome] = Field(default_factory=list)

    @computed_field
    @property
    def passed(self) -> int:
        return self.total - self.failed

    @classmethod
    def from_outcomes(cls, outcomes: list[FileOutcome]) -> BatchResult:
        return cls(
            total=len(outcomes),
            failed=sum(1 for o in outcomes if o.failed),
            outcomes=outcomes,
        )


async def run_batch(
    files: list[str],
    options: VerifyOptions | None = None,
    validate: ValidateFn = validate_file,
) -> BatchResult:
    """Validate every file with at most ``options.concurrency`` in flight.

    Args:
        files: Paths produced by discovery.
        options: Detection and scheduling options.
        validate: Async callable(path, options) -> FileOutcome. Expected not
                  to raise; anything it does raise is recorded as a parse
                  error for that file.

    Counts are folded from the collected outcomes once every task is done.
    """
    if options is None:
        options = VerifyOptions()

    semaphore = asyncio.Semaphore(options.concurrency)

    async def _run_one(path: str) -> FileOutcome:
        async with semaphore:
            try:
                return await validate(path, options)
            except Exception as e:
                logger.warning("Validation of %s raised: %s", path, e)
                return FileOutcome.parse_error(path, f"Internal error: {e}")

    logger.info(
        "Validating %d files (concurrency %d)", len(files), options.concurrency
    )
    outcomes = await asyncio.gather(*(_run_one(path) for path in files))

    result = BatchResult.from_outcomes(list(outcomes))
    logger.info("Batch done: %d passed, %d failed", result.passed, result.failed)
    return result
