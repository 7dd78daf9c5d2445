"""The health-check evaluation engine as a run check."""

from __future__ import annotations

from pathlib import Path

from seqhealth.checks import registry
from seqhealth.checks.base import RunCheck
from seqhealth.config import Settings
from seqhealth.health.engine import evaluate_log
from seqhealth.health.errors import HealthCheckError
from seqhealth.health.report import render_report, verdict_line


@registry.register
class HealthCheck(RunCheck):
    name = "health_check"
    description = "Health-check metrics meet coverage, kinship and contamination thresholds"

    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        log_path = run_dir / settings.health_check_log
        try:
            context, result = evaluate_log(log_path, strict=settings.strict)
        except HealthCheckError as exc:
            return False, f"[ERROR] {exc}", []

        details = [line.text for line in render_report(context, result)[:-1] if line.is_error]
        return result.passed, verdict_line(result).text, details
