"""Run every applicable check over a run directory and sum the failures."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from seqhealth.checks.base import CheckResult
from seqhealth.checks.registry import CheckRegistry
from seqhealth.config import Settings

logger = logging.getLogger(__name__)


class RunSummary(BaseModel):
    """Aggregated outcome of all checks run against one run directory."""

    run_dir: str
    results: list[CheckResult] = Field(default_factory=list)
    skipped: list[str] = Field(
        default_factory=list, description="Checks whose feature is disabled"
    )

    @property
    def total_failures(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def passed(self) -> bool:
        return self.total_failures == 0


def run_checks(
    run_dir: Path | str,
    settings: Settings | None = None,
    checks: CheckRegistry | None = None,
) -> RunSummary:
    """Run the registered checks that apply to `run_dir`, in name order.

    A check whose feature is disabled in the run configuration is skipped.
    A check that raises is recorded as failed.
    """
    if checks is None:
        from seqhealth.checks import registry as checks

    settings = settings or Settings.from_env()
    run_dir = Path(run_dir)
    summary = RunSummary(run_dir=str(run_dir))

    to_run, summary.skipped = checks.applicable(run_dir, settings)
    for check in to_run:
        try:
            result = check.run(run_dir, settings)
        except Exception as exc:
            logger.exception("Check %s failed to run", check.name)
            result = CheckResult(
                check_name=check.name,
                passed=False,
                summary=f"[ERROR] {exc}",
                completed_at=datetime.now(),
            )
        summary.results.append(result)

    return summary
