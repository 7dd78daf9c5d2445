"""seqhealth - sequencing pipeline run health-check evaluation."""

__version__ = "0.1.0"
