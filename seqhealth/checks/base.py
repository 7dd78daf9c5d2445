"""Abstract base class for run-directory checks."""

from __future__ import annotations

import abc
import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from seqhealth.config import Settings

logger = logging.getLogger(__name__)


class CheckResult(BaseModel):
    """Standardized result from a run check."""

    check_name: str
    passed: bool
    summary: str = Field(default="", description="Human-readable summary")
    details: list[str] = Field(
        default_factory=list, description="Lines worth showing to the operator"
    )
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: datetime | None = None
    duration_seconds: float = 0.0


class RunCheck(abc.ABC):
    """Abstract base class for a check over a pipeline run directory.

    Subclasses must implement:
    - `name` (class attribute): unique check name used in the registry.
    - `description` (class attribute): short description of the check.
    - `check()`: returns `(passed, summary, details)`.

    `feature` is set on registration (`registry.register(feature=...)`):
    the run-configuration key that must be enabled for the check to apply.
    None means the check always applies.
    """

    name: str = ""
    description: str = ""
    feature: str | None = None

    @abc.abstractmethod
    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        """Inspect the run directory.

        Args:
            run_dir: Root of the pipeline run.
            settings: Active settings.

        Returns:
            Whether the check passed, a one-line summary and detail lines.
        """
        ...

    def run(self, run_dir: Path, settings: Settings) -> CheckResult:
        """Execute the check and wrap its outcome in a timed result."""
        started = datetime.now()
        passed, summary, details = self.check(run_dir, settings)
        completed = datetime.now()
        logger.debug("Check %s on %s: passed=%s", self.name, run_dir, passed)
        return CheckResult(
            check_name=self.name,
            passed=passed,
            summary=summary,
            details=details,
            started_at=started,
            completed_at=completed,
            duration_seconds=(completed - started).total_seconds(),
        )
