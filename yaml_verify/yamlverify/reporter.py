"""Turn a batch result into display lines and an exit code."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from yamlverify.batch import BatchResult
from yamlverify.validator.models import FileOutcome, FileStatus

logger = logging.getLogger(__name__)


class ReportLine(BaseModel):
    text: str
    error: bool = False


class Report(BaseModel):
    """Everything the CLI prints, plus the process exit code."""

    exit_code: int
    lines: list[ReportLine] = Field(default_factory=list)


def _outcome_lines(outcome: FileOutcome, verbose: bool) -> list[ReportLine]:
    if outcome.status == FileStatus.success:
        if verbose:
            return [ReportLine(text=f"✓ Validation passed for {outcome.path}")]
        return []

    if outcome.status == FileStatus.parse_error:
        return [
            ReportLine(text=f"✗ YAML parsing failed for {outcome.path}", error=True),
            ReportLine(text=f"  {outcome.message}", error=True),
        ]

    lines = [
        ReportLine(
            text=(
                f"✗ Validation failed for {outcome.path} "
                f"({len(outcome.violations)} duplicate(s))"
            ),
            error=True,
        )
    ]
    lines.extend(
        ReportLine(text=f"  {v.description}", error=True) for v in outcome.violations
    )
    return lines


def summarize(result: BatchResult, verbose: bool = False) -> Report:
    """Render the whole batch at once, sorted by path.

    Failures are always listed with every violation or parse message;
    successes only when ``verbose`` is set.
    """
    lines: list[ReportLine] = []
    for outcome in sorted(result.outcomes, key=lambda o: o.path):
        lines.extend(_outcome_lines(outcome, verbose))

    lines.append(
        ReportLine(
            text=(
                f"{result.total} file(s) checked: "
                f"{result.passed} passed, {result.failed} failed"
            ),
            error=result.failed > 0,
        )
    )
    return Report(exit_code=1 if result.failed else 0, lines=lines)


def write_json_report(result: BatchResult, path: Path) -> Path:
    """Write the batch result as JSON and return the path written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Report written to %s", path)
    return path
