"""Exception taxonomy for health-check evaluation.

Every error here aborts the whole evaluation: the input is not analyzable
and no verdict line is produced. Failing rules are not errors, they are
recorded outcomes.
"""

from __future__ import annotations


class HealthCheckError(Exception):
    """Base class for fatal evaluation errors."""


class LogReadError(HealthCheckError):
    """The health-check log could not be opened or read."""


class EmptyLogError(HealthCheckError):
    """No parsable facts were found in the health-check log."""


class UnsupportedSampleCountError(HealthCheckError):
    """The log describes a number of samples other than one or two."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Unsupported sample count: {count} (expected 1 or 2)")


class ModeResolutionError(HealthCheckError):
    """A paired run whose tumor/reference partition is ambiguous."""


class MissingKeyError(HealthCheckError):
    """A required metric is absent for a sample."""

    def __init__(self, key: str, sample: str):
        self.key = key
        self.sample = sample
        super().__init__(f"Metric '{key}' not found for sample '{sample}'")


class PoisonedValueError(HealthCheckError):
    """A metric is present but was marked invalid upstream."""

    def __init__(self, key: str, sample: str):
        self.key = key
        self.sample = sample
        super().__init__(f"Metric '{key}' for sample '{sample}' has value 'ERROR'")


class MalformedValueError(HealthCheckError):
    """A value is not numeric, or an arithmetic invariant does not hold."""
