"""Health-check log parser.

The upstream health checker writes one fact per line, surrounded by
arbitrary logger decoration:

    2017-03-01 12:00:00 INFO Check 'COVERAGE_10X' for sample 'CPCT01R' has value '0.98'

Lines that do not carry a fact are ignored.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from seqhealth.health.errors import EmptyLogError, LogReadError
from seqhealth.health.models import Fact, FactBase

logger = logging.getLogger(__name__)


LINE_PATTERN = re.compile(
    r"Check '(?P<metric>[^']*)' for sample '(?P<sample>[^']*)' has value '(?P<value>[^']*)'"
)


def parse_line(line: str) -> Fact | None:
    """Extract a fact from a single log line, or None if it carries none."""
    match = LINE_PATTERN.search(line)
    if not match:
        return None
    return Fact(
        sample=match.group("sample"),
        metric=match.group("metric"),
        value=match.group("value"),
    )


def iter_facts(lines: Iterable[str]) -> Iterator[Fact]:
    for line in lines:
        fact = parse_line(line)
        if fact is not None:
            yield fact


def parse_lines(lines: Iterable[str]) -> FactBase:
    """Build a fact base from log lines.

    Raises:
        EmptyLogError: if no line carries a fact.
    """
    fact_base = FactBase.from_facts(iter_facts(lines))
    if fact_base.sample_count == 0:
        raise EmptyLogError("No health-check facts found in log")
    return fact_base


def parse_log(path: Path | str) -> FactBase:
    """Read and parse a health-check log file.

    Args:
        path: Path to the health-check log.

    Returns:
        The fact base built from every matching line.

    Raises:
        LogReadError: if the file cannot be opened.
        EmptyLogError: if the file carries no facts.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as handle:
            fact_base = parse_lines(handle)
    except OSError as exc:
        raise LogReadError(f"Cannot read health-check log {path}: {exc}") from exc

    logger.debug(
        "Parsed %d sample(s) from %s: %s",
        fact_base.sample_count,
        path,
        ", ".join(fact_base.sample_names),
    )
    return fact_base
