"""Health-check evaluation engine."""

from seqhealth.health.engine import evaluate_log
from seqhealth.health.errors import (
    EmptyLogError,
    HealthCheckError,
    LogReadError,
    MalformedValueError,
    MissingKeyError,
    ModeResolutionError,
    PoisonedValueError,
    UnsupportedSampleCountError,
)
from seqhealth.health.lookup import FactLookup, to_value
from seqhealth.health.mode import partition_samples, resolve_mode
from seqhealth.health.models import (
    EvaluationResult,
    Fact,
    FactBase,
    Missing,
    Numeric,
    Poisoned,
    Rule,
    RuleOutcome,
    RunContext,
    RunMode,
    SampleRole,
)
from seqhealth.health.parser import parse_lines, parse_log
from seqhealth.health.report import ReportLine, render_report
from seqhealth.health.rules import NA, evaluate, if_lower_fail

__all__ = [
    "EmptyLogError",
    "EvaluationResult",
    "Fact",
    "FactBase",
    "FactLookup",
    "HealthCheckError",
    "LogReadError",
    "MalformedValueError",
    "Missing",
    "MissingKeyError",
    "ModeResolutionError",
    "NA",
    "Numeric",
    "Poisoned",
    "PoisonedValueError",
    "ReportLine",
    "Rule",
    "RuleOutcome",
    "RunContext",
    "RunMode",
    "SampleRole",
    "UnsupportedSampleCountError",
    "evaluate",
    "evaluate_log",
    "if_lower_fail",
    "parse_lines",
    "parse_log",
    "partition_samples",
    "render_report",
    "resolve_mode",
    "to_value",
]
