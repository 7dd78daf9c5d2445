"""Run-directory check framework.

Each check is a subclass of `RunCheck` registered in the singleton
registry; the runner executes the checks that apply to a run and sums
their failures.

Usage:
    from seqhealth.checks import registry, run_checks

    for info in registry.info():
        print(info["name"], info["feature"])

    summary = run_checks(run_dir, settings)
    print(summary.total_failures)
"""

from seqhealth.checks.base import CheckResult, RunCheck
from seqhealth.checks.registry import CheckRegistry

# Singleton registry
registry = CheckRegistry()

# Auto-register built-in checks
from seqhealth.checks import artifacts  # noqa: E402, F401
from seqhealth.checks import health_check  # noqa: E402, F401
from seqhealth.checks.runner import RunSummary, run_checks  # noqa: E402

__all__ = ["CheckRegistry", "CheckResult", "RunCheck", "RunSummary", "registry", "run_checks"]
