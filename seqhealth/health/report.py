"""Plain-text health-check report.

Downstream log scrapers grep these lines, so their shape is fixed:

    [INFO] Reference sample: CPCT01R
    [OK] COVERAGE_10X_R: 0.95 > 0.90
    [FAIL] COVERAGE_20X_R: 0.50 < 0.70
    TEST RESULT for CPCT01R (fails:1) = FAIL
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from seqhealth.health.models import (
    Comparison,
    EvaluationResult,
    RuleOutcome,
    RunContext,
    RunMode,
)


class ReportLine(BaseModel):
    """A rendered line and whether it belongs on the error stream."""

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False


def format_number(value: float) -> str:
    """Two decimals, thousands separated."""
    return f"{value:,.2f}"


def format_count(value: float) -> str:
    return f"{round(value):,d}"


def format_percentage(value: float) -> str:
    return f"{value:,.2f}%"


def format_threshold(term: Comparison) -> str:
    if term.threshold is None:
        return "NA"
    if term.percent:
        return format_percentage(term.threshold * 100)
    return format_number(term.threshold)


def format_comparison(term: Comparison, passed: bool) -> str:
    """Render `<value> <symbol> <threshold>`.

    The symbol marks the verdict, `>` on OK and `<` on FAIL, for every rule,
    including the upper-bound contamination limits.
    """
    observed = (
        format_percentage(term.observed * 100) if term.percent else format_number(term.observed)
    )
    symbol = ">" if passed else "<"
    return f"{observed} {symbol} {format_threshold(term)}"


def rule_line(outcome: RuleOutcome) -> ReportLine:
    if outcome.skipped:
        return ReportLine(
            text=f"[SKIP] {outcome.name}: metric {outcome.missing_metric} missing",
            is_error=True,
        )
    tag = "OK" if outcome.passed else "FAIL"
    detail = " and ".join(format_comparison(term, outcome.passed) for term in outcome.terms)
    return ReportLine(text=f"[{tag}] {outcome.name}: {detail}", is_error=not outcome.passed)


def verdict_line(result: EvaluationResult) -> ReportLine:
    verdict = "OK" if result.passed else "FAIL"
    return ReportLine(
        text=f"TEST RESULT for {result.sample} (fails:{result.failure_count}) = {verdict}",
        is_error=not result.passed,
    )


def info_lines(context: RunContext, result: EvaluationResult) -> list[ReportLine]:
    lines = [ReportLine(text=f"[INFO] Reference sample: {context.ref_sample}")]
    if context.mode != RunMode.SOMATIC:
        return lines

    lines.append(ReportLine(text=f"[INFO] Tumor sample: {context.tum_sample}"))
    counts = result.somatic_counts
    if counts is not None:
        indels = "NA" if counts.indel_count is None else format_count(counts.indel_count)
        lines.extend([
            ReportLine(text=f"[INFO] Somatic SNP count: {format_count(counts.snp_count)}"),
            ReportLine(
                text=(
                    f"[INFO] Somatic SNP dbSNP count: {format_count(counts.dbsnp_count)} "
                    f"({format_percentage(counts.dbsnp_ratio * 100)})"
                )
            ),
            ReportLine(text=f"[INFO] Somatic indel count: {indels}"),
        ])
    return lines


def render_report(context: RunContext, result: EvaluationResult) -> list[ReportLine]:
    """Render the info block, one line per rule and the verdict line."""
    lines = info_lines(context, result)
    lines.extend(rule_line(outcome) for outcome in result.outcomes)
    lines.append(verdict_line(result))
    return lines
