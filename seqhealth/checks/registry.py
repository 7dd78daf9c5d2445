"""Registry of run checks, keyed by name and gated by run features."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Type

from seqhealth.checks.base import RunCheck
from seqhealth.config import Settings, is_feature_enabled

logger = logging.getLogger(__name__)


class CheckRegistry:
    """Run checks available to the orchestrator.

    A check gated by a feature only applies to runs whose run configuration
    enables that feature; ungated checks apply to every run.
    """

    def __init__(self) -> None:
        self._checks: dict[str, Type[RunCheck]] = {}

    def register(
        self, check_cls: Type[RunCheck] | None = None, *, feature: str | None = None
    ) -> Type[RunCheck] | Callable[[Type[RunCheck]], Type[RunCheck]]:
        """Register a RunCheck subclass, optionally gated by a feature::

            @registry.register
            class CoreDumps(RunCheck): ...

            @registry.register(feature="MAPPING")
            class BamFiles(RunCheck): ...
        """

        def _add(cls: Type[RunCheck]) -> Type[RunCheck]:
            if not cls.name:
                raise ValueError(f"Check class {cls.__name__} has no name")
            if cls.name in self._checks:
                raise ValueError(f"Run check '{cls.name}' is already registered")
            if feature is not None:
                cls.feature = feature
            self._checks[cls.name] = cls
            return cls

        if check_cls is None:
            return _add
        return _add(check_cls)

    def get(self, name: str) -> Type[RunCheck] | None:
        return self._checks.get(name)

    def names(self) -> list[str]:
        return sorted(self._checks)

    def applicable(self, run_dir: Path, settings: Settings) -> tuple[list[RunCheck], list[str]]:
        """Split the checks for a run into instances to run and skipped names.

        Both lists are in name order.
        """
        to_run: list[RunCheck] = []
        skipped: list[str] = []
        for name in self.names():
            cls = self._checks[name]
            if cls.feature and not is_feature_enabled(cls.feature, run_dir, settings):
                logger.info("Skipping %s: feature %s disabled", name, cls.feature)
                skipped.append(name)
            else:
                to_run.append(cls())
        return to_run, skipped

    def info(self) -> list[dict[str, str]]:
        """Name, description and gating feature of every check, by name."""
        return [
            {
                "name": name,
                "description": self._checks[name].description,
                "feature": self._checks[name].feature or "always",
            }
            for name in self.names()
        ]
