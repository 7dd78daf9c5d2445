"""Pydantic models for the health-check fact base and evaluation results."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


POISON_SENTINEL = "ERROR"


class Fact(BaseModel):
    """A single `(sample, metric, value)` triple parsed from the log."""

    model_config = ConfigDict(frozen=True)

    sample: str
    metric: str
    value: str = Field(..., description="Raw value as it appears in the log")


class FactBase(BaseModel):
    """Per-sample metric values, keyed by sample in first-seen order."""

    model_config = ConfigDict(frozen=True)

    samples: dict[str, dict[str, str]] = Field(default_factory=dict)

    @classmethod
    def from_facts(cls, facts: Iterable[Fact]) -> "FactBase":
        samples: dict[str, dict[str, str]] = {}
        for fact in facts:
            # Later lines overwrite earlier ones for the same metric
            samples.setdefault(fact.sample, {})[fact.metric] = fact.value
        return cls(samples=samples)

    @property
    def sample_names(self) -> tuple[str, ...]:
        return tuple(self.samples)

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    def metrics(self, sample: str) -> dict[str, str]:
        """Return a copy of the metrics recorded for a sample."""
        return dict(self.samples.get(sample, {}))

    def has(self, sample: str, metric: str) -> bool:
        return metric in self.samples.get(sample, {})

    def raw(self, sample: str, metric: str) -> str | None:
        return self.samples.get(sample, {}).get(metric)


class RunMode(str, Enum):
    """Run layout inferred from the samples in the log."""

    SINGLE = "single"
    SOMATIC = "somatic"


class SampleRole(str, Enum):
    """Which sample of the run a rule is evaluated against."""

    REF = "ref"
    TUM = "tum"


class RunContext(BaseModel):
    """Run mode and sample roles derived from a fact base."""

    model_config = ConfigDict(frozen=True)

    mode: RunMode
    sample_names: tuple[str, ...]
    ref_sample: str
    tum_sample: str | None = None

    @property
    def sample_count(self) -> int:
        return len(self.sample_names)

    @property
    def subject(self) -> str:
        """The sample the final verdict is reported for."""
        return self.tum_sample if self.mode == RunMode.SOMATIC else self.ref_sample

    def sample_for(self, role: SampleRole) -> str:
        if role == SampleRole.TUM:
            if self.tum_sample is None:
                raise ValueError("Tumor sample requested in a single-sample run")
            return self.tum_sample
        return self.ref_sample


class Numeric(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"
    value: float


class Poisoned(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["poisoned"] = "poisoned"


class Missing(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["missing"] = "missing"


Value = Annotated[Union[Numeric, Poisoned, Missing], Field(discriminator="kind")]


class Rule(BaseModel):
    """A named lower-fails threshold check on one metric of one sample."""

    model_config = ConfigDict(frozen=True)

    name: str
    role: SampleRole
    metric: str
    fallback: str | None = Field(
        default=None, description="Metric name used when the primary is absent"
    )
    threshold: float | None = Field(
        default=None, description="Lower bound; None means NA and never fails"
    )


class Comparison(BaseModel):
    """One evaluated comparison of an observed value against a limit."""

    model_config = ConfigDict(frozen=True)

    observed: float
    threshold: float | None
    upper_bound: bool = Field(
        default=False, description="True if exceeding the limit trips the check"
    )
    tripped: bool
    percent: bool = False


class RuleOutcome(BaseModel):
    """Pass/fail outcome of one rule."""

    model_config = ConfigDict(frozen=True)

    name: str
    passed: bool
    terms: tuple[Comparison, ...] = ()
    skipped: bool = False
    missing_metric: str | None = None


class SomaticCounts(BaseModel):
    """Tumor variant counts shown in the info block of a somatic report."""

    model_config = ConfigDict(frozen=True)

    snp_count: float
    dbsnp_count: float
    indel_count: float | None = None

    @property
    def dbsnp_ratio(self) -> float:
        return self.dbsnp_count / self.snp_count


class EvaluationResult(BaseModel):
    """Outcomes of every rule for one run, scoped to the verdict sample."""

    model_config = ConfigDict(frozen=True)

    sample: str
    mode: RunMode
    outcomes: tuple[RuleOutcome, ...] = ()
    somatic_counts: SomaticCounts | None = None

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.passed)

    @property
    def passed(self) -> bool:
        return self.failure_count == 0
