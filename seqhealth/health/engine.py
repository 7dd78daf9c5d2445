"""End-to-end evaluation of a health-check log."""

from __future__ import annotations

from pathlib import Path

from seqhealth.health.mode import resolve_mode
from seqhealth.health.models import EvaluationResult, RunContext
from seqhealth.health.parser import parse_log
from seqhealth.health.rules import evaluate


def evaluate_log(path: Path | str, strict: bool = True) -> tuple[RunContext, EvaluationResult]:
    """Parse a log, resolve its run mode and evaluate the matching rule set.

    Raises:
        HealthCheckError: on any parse, resolution or lookup error.
    """
    fact_base = parse_log(path)
    context = resolve_mode(fact_base)
    return context, evaluate(context, fact_base, strict=strict)
