"""Run mode resolution: single-sample vs paired tumor/reference runs."""

from __future__ import annotations

from typing import Sequence

from seqhealth.health.errors import ModeResolutionError, UnsupportedSampleCountError
from seqhealth.health.models import FactBase, RunContext, RunMode

TUMOR_MARKER = "SOMATIC_SNP_COUNT"


def partition_samples(
    sample_names: Sequence[str], tumor_marked: Sequence[bool]
) -> tuple[str, str]:
    """Split a sample pair into `(reference, tumor)`.

    Args:
        sample_names: Sample identifiers in log order.
        tumor_marked: Parallel flags, True where the sample carries the
            tumor marker metric.

    Raises:
        ModeResolutionError: unless exactly one sample is marked and one is not.
    """
    tumors = [name for name, marked in zip(sample_names, tumor_marked) if marked]
    refs = [name for name, marked in zip(sample_names, tumor_marked) if not marked]
    if len(tumors) != 1 or len(refs) != 1:
        raise ModeResolutionError(
            f"Cannot resolve tumor/reference samples from {list(sample_names)}: "
            f"{len(tumors)} sample(s) carry {TUMOR_MARKER}"
        )
    return refs[0], tumors[0]


def resolve_mode(fact_base: FactBase) -> RunContext:
    """Derive run mode and sample roles from a fact base."""
    names = fact_base.sample_names
    if len(names) == 1:
        return RunContext(mode=RunMode.SINGLE, sample_names=names, ref_sample=names[0])
    if len(names) == 2:
        ref, tum = partition_samples(
            names, [fact_base.has(name, TUMOR_MARKER) for name in names]
        )
        return RunContext(
            mode=RunMode.SOMATIC, sample_names=names, ref_sample=ref, tum_sample=tum
        )
    raise UnsupportedSampleCountError(len(names))
