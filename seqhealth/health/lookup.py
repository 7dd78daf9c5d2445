"""Typed access to fact-base values with fallback keys and poison detection."""

from __future__ import annotations

import logging
import math

from seqhealth.health.errors import (
    MalformedValueError,
    MissingKeyError,
    PoisonedValueError,
)
from seqhealth.health.models import (
    POISON_SENTINEL,
    FactBase,
    Missing,
    Numeric,
    Poisoned,
    Value,
)

logger = logging.getLogger(__name__)


def to_value(raw: str | None) -> Value:
    """Map a raw log value onto the value sum type.

    Raises:
        MalformedValueError: if the value is neither the poison sentinel nor
            a finite decimal number.
    """
    if raw is None:
        return Missing()
    text = raw.strip()
    if text == POISON_SENTINEL:
        return Poisoned()
    try:
        number = float(text)
    except ValueError:
        raise MalformedValueError(f"Value '{raw}' is not a number") from None
    if not math.isfinite(number):
        raise MalformedValueError(f"Value '{raw}' is not a finite number")
    return Numeric(value=number)


class FactLookup:
    """Resolve metrics for a sample against a fact base.

    In strict mode a metric absent under both its primary and fallback key
    raises `MissingKeyError`. In lenient mode the absence is logged as a
    warning and reported as `None` / `Missing`; callers decide whether they
    can proceed without it.
    """

    def __init__(self, fact_base: FactBase, strict: bool = True):
        self.fact_base = fact_base
        self.strict = strict

    def raw(self, sample: str, key: str, fallback: str | None = None) -> str | None:
        """Return the raw value of `key` (or `fallback`) for `sample`."""
        resolved = key
        value = self.fact_base.raw(sample, key)
        if value is None and fallback is not None:
            resolved = fallback
            value = self.fact_base.raw(sample, fallback)

        if value is None:
            if self.strict:
                raise MissingKeyError(key, sample)
            logger.warning("Metric '%s' not found for sample '%s'", key, sample)
            return None

        if value.strip() == POISON_SENTINEL:
            raise PoisonedValueError(resolved, sample)
        return value

    def value(self, sample: str, key: str, fallback: str | None = None) -> Numeric | Missing:
        return to_value(self.raw(sample, key, fallback))

    def number(self, sample: str, key: str, fallback: str | None = None) -> float:
        """Return a metric as a float, treating absence as fatal in any mode."""
        value = self.value(sample, key, fallback)
        if isinstance(value, Missing):
            raise MissingKeyError(key, sample)
        return value.value
