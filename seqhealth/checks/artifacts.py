"""File-system probes over a pipeline run directory."""

from __future__ import annotations

import re
from pathlib import Path

from seqhealth.checks import registry
from seqhealth.checks.base import RunCheck
from seqhealth.config import Settings

CORE_DUMP_PATTERN = re.compile(r"^core(\.\d+)?$")
MAX_DETAILS = 10


def _relative(path: Path, run_dir: Path) -> str:
    try:
        return path.relative_to(run_dir).as_posix()
    except ValueError:
        return str(path)


@registry.register
class CoreDumps(RunCheck):
    name = "core_dumps"
    description = "No core dump files anywhere in the run directory"

    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        dumps = sorted(
            p for p in run_dir.rglob("core*")
            if p.is_file() and CORE_DUMP_PATTERN.match(p.name)
        )
        if not dumps:
            return True, "No core dumps found", []
        return (
            False,
            f"{len(dumps)} core dump(s) found",
            [_relative(p, run_dir) for p in dumps[:MAX_DETAILS]],
        )


@registry.register
class SubmitLogErrors(RunCheck):
    name = "submit_log_errors"
    description = "Job submission logs contain no error lines"

    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        logs = sorted((run_dir / "logs").glob("submitlog*"))
        if not logs:
            return True, "No submit logs found", []

        errors: list[str] = []
        for log in logs:
            with log.open("r", encoding="utf-8", errors="replace") as handle:
                for idx, line in enumerate(handle, start=1):
                    if "error" in line.lower():
                        errors.append(f"{log.name}:{idx}: {line.strip()}")
        if not errors:
            return True, f"{len(logs)} submit log(s) clean", []
        return False, f"{len(errors)} error line(s) in submit logs", errors[:MAX_DETAILS]


@registry.register(feature="MAPPING")
class BamFiles(RunCheck):
    name = "bam_files"
    description = "Every sample mapping directory holds a non-empty BAM"

    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        mapping_dirs = sorted(
            d / "mapping" for d in run_dir.iterdir() if (d / "mapping").is_dir()
        )
        if not mapping_dirs:
            return False, "No sample mapping directories found", []

        missing = [
            _relative(d, run_dir)
            for d in mapping_dirs
            if not any(p.stat().st_size > 0 for p in d.glob("*.bam") if p.is_file())
        ]
        if missing:
            return False, f"{len(missing)} mapping directory(ies) without BAM", missing
        return True, f"BAM present for {len(mapping_dirs)} sample(s)", []


@registry.register(feature="QCSTATS")
class PngFiles(RunCheck):
    name = "png_files"
    description = "QC statistics plots were rendered"

    def check(self, run_dir: Path, settings: Settings) -> tuple[bool, str, list[str]]:
        qc_dir = run_dir / "QCStats"
        if not qc_dir.is_dir():
            return False, "QCStats directory missing", []
        count = sum(1 for p in qc_dir.rglob("*.png") if p.is_file())
        if count == 0:
            return False, "No PNG plots in QCStats", []
        return True, f"{count} PNG plot(s) in QCStats", []
