"""Threshold rules and the rule evaluator.

Rule sets are static per run mode. Evaluation is a fold over the rule list
into an immutable `EvaluationResult`; the order of outcomes is the report
order and never depends on the values.
"""

from __future__ import annotations

import logging

from seqhealth.health.errors import MalformedValueError
from seqhealth.health.lookup import FactLookup
from seqhealth.health.models import (
    Comparison,
    EvaluationResult,
    FactBase,
    Missing,
    Rule,
    RuleOutcome,
    RunContext,
    RunMode,
    SampleRole,
    SomaticCounts,
)

logger = logging.getLogger(__name__)

NA = None

SNP_COUNT = "SOMATIC_SNP_COUNT"
DBSNP_COUNT = "SOMATIC_SNP_DBSNP_COUNT"
INDEL_COUNT = "SOMATIC_INDEL_COUNT"

MAX_DBSNP_COUNT = 250_000
MAX_SNP_COUNT = 1_000_000
MIN_DBSNP_RATIO = 0.2


COVERAGE_10X_R = Rule(
    name="COVERAGE_10X_R", role=SampleRole.REF,
    metric="COVERAGE_10X", fallback="REF_COVERAGE_10X", threshold=0.90,
)
COVERAGE_20X_R = Rule(
    name="COVERAGE_20X_R", role=SampleRole.REF,
    metric="COVERAGE_20X", fallback="REF_COVERAGE_20X", threshold=0.70,
)
COVERAGE_30X_T = Rule(
    name="COVERAGE_30X_T", role=SampleRole.TUM,
    metric="COVERAGE_30X", fallback="TUMOR_COVERAGE_30X", threshold=0.80,
)
COVERAGE_60X_T = Rule(
    name="COVERAGE_60X_T", role=SampleRole.TUM,
    metric="COVERAGE_60X", fallback="TUMOR_COVERAGE_60X", threshold=0.65,
)
KINSHIP = Rule(
    name="KINSHIP", role=SampleRole.TUM, metric="KINSHIP_TEST", threshold=0.35,
)

SINGLE_RULES: tuple[Rule, ...] = (COVERAGE_10X_R, COVERAGE_20X_R)
SOMATIC_RULES: tuple[Rule, ...] = (
    COVERAGE_10X_R,
    COVERAGE_20X_R,
    COVERAGE_30X_T,
    COVERAGE_60X_T,
    KINSHIP,
)


def if_lower_fail(observed: float, threshold: float | None) -> bool:
    """Return True if `observed` passes a lower-bound `threshold`.

    A threshold of NA never fails; otherwise the check fails iff the
    observed value is strictly below the threshold.
    """
    if threshold is NA:
        return True
    return not observed < threshold


def is_dbsnp_contaminated(dbsnp_count: float) -> bool:
    return dbsnp_count > MAX_DBSNP_COUNT


def is_nondbsnp_contaminated(snp_count: float, dbsnp_ratio: float) -> bool:
    """Many somatic SNPs, few of them known: both conditions must hold."""
    return snp_count > MAX_SNP_COUNT and dbsnp_ratio < MIN_DBSNP_RATIO


def rules_for(mode: RunMode) -> tuple[Rule, ...]:
    return SOMATIC_RULES if mode == RunMode.SOMATIC else SINGLE_RULES


def evaluate_rule(rule: Rule, context: RunContext, lookup: FactLookup) -> RuleOutcome:
    """Evaluate one threshold rule against the sample its role selects."""
    sample = context.sample_for(rule.role)
    value = lookup.value(sample, rule.metric, rule.fallback)
    if isinstance(value, Missing):
        logger.warning("Skipping %s: metric '%s' missing for sample '%s'",
                       rule.name, rule.metric, sample)
        return RuleOutcome(
            name=rule.name, passed=False, skipped=True, missing_metric=rule.metric
        )

    passed = if_lower_fail(value.value, rule.threshold)
    comparison = Comparison(
        observed=value.value, threshold=rule.threshold, tripped=not passed
    )
    return RuleOutcome(name=rule.name, passed=passed, terms=(comparison,))


def somatic_counts(tumor: str, lookup: FactLookup) -> SomaticCounts:
    """Look up the tumor variant counts the contamination rules need.

    Raises:
        MalformedValueError: if the SNP count is zero.
    """
    snp_count = lookup.number(tumor, SNP_COUNT)
    dbsnp_count = lookup.number(tumor, DBSNP_COUNT)
    if snp_count == 0:
        raise MalformedValueError(
            f"{SNP_COUNT} is 0 for sample '{tumor}'; dbSNP ratio is undefined"
        )
    indel = lookup.value(tumor, INDEL_COUNT)
    return SomaticCounts(
        snp_count=snp_count,
        dbsnp_count=dbsnp_count,
        indel_count=None if isinstance(indel, Missing) else indel.value,
    )


def contamination_outcomes(counts: SomaticCounts) -> tuple[RuleOutcome, RuleOutcome]:
    dbsnp = is_dbsnp_contaminated(counts.dbsnp_count)
    dbsnp_outcome = RuleOutcome(
        name="DBSNP_CONTAMINATION",
        passed=not dbsnp,
        terms=(
            Comparison(
                observed=counts.dbsnp_count,
                threshold=MAX_DBSNP_COUNT,
                upper_bound=True,
                tripped=dbsnp,
            ),
        ),
    )

    ratio = counts.dbsnp_ratio
    nondbsnp = is_nondbsnp_contaminated(counts.snp_count, ratio)
    nondbsnp_outcome = RuleOutcome(
        name="NONDBSNP_CONTAMINATION",
        passed=not nondbsnp,
        terms=(
            Comparison(
                observed=counts.snp_count,
                threshold=MAX_SNP_COUNT,
                upper_bound=True,
                tripped=counts.snp_count > MAX_SNP_COUNT,
            ),
            Comparison(
                observed=ratio,
                threshold=MIN_DBSNP_RATIO,
                tripped=ratio < MIN_DBSNP_RATIO,
                percent=True,
            ),
        ),
    )
    return dbsnp_outcome, nondbsnp_outcome


def evaluate(
    context: RunContext, fact_base: FactBase, strict: bool = True
) -> EvaluationResult:
    """Evaluate the rule set for the run's mode.

    Args:
        context: Resolved run mode and sample roles.
        fact_base: Parsed health-check facts.
        strict: If False, threshold rules whose metric is missing are
            reported as skipped, and counted as failures, instead of
            aborting the evaluation.

    Returns:
        The outcomes in report order, scoped to the verdict sample.
    """
    lookup = FactLookup(fact_base, strict=strict)

    counts = None
    outcomes: tuple[RuleOutcome, ...] = ()
    if context.mode == RunMode.SOMATIC:
        counts = somatic_counts(context.tum_sample, lookup)
        outcomes = contamination_outcomes(counts)

    outcomes += tuple(evaluate_rule(rule, context, lookup) for rule in rules_for(context.mode))

    result = EvaluationResult(
        sample=context.subject,
        mode=context.mode,
        outcomes=outcomes,
        somatic_counts=counts,
    )
    logger.debug(
        "Evaluated %d rule(s) for %s: %d failure(s)",
        len(result.outcomes), result.sample, result.failure_count,
    )
    return result
