from pathlib import Path

import pytest

from seqhealth.health import EmptyLogError, LogReadError, parse_lines, parse_log
from seqhealth.health.parser import parse_line

from healthlog import check_line


def test_parse_line_extracts_fact_from_decorated_line():
    fact = parse_line(check_line("COVERAGE_10X", "CPCT01R", "0.95"))
    assert fact is not None
    assert (fact.sample, fact.metric, fact.value) == ("CPCT01R", "COVERAGE_10X", "0.95")


def test_parse_line_ignores_unrelated_lines():
    assert parse_line("2017-03-01 INFO Starting health checks") is None
    assert parse_line("Check 'X' for sample 'Y'") is None


def test_parse_lines_groups_by_sample_in_first_seen_order():
    fact_base = parse_lines([
        check_line("COVERAGE_10X", "TUM1", "0.9"),
        "noise",
        check_line("COVERAGE_10X", "REF1", "0.8"),
        check_line("COVERAGE_20X", "TUM1", "0.7"),
    ])
    assert fact_base.sample_names == ("TUM1", "REF1")
    assert fact_base.metrics("TUM1") == {"COVERAGE_10X": "0.9", "COVERAGE_20X": "0.7"}


def test_parse_lines_last_write_wins():
    fact_base = parse_lines([
        check_line("COVERAGE_10X", "REF1", "0.1"),
        check_line("COVERAGE_10X", "REF1", "0.2"),
    ])
    assert fact_base.raw("REF1", "COVERAGE_10X") == "0.2"


def test_parse_lines_without_facts_raises_empty_log():
    with pytest.raises(EmptyLogError):
        parse_lines(["nothing to see", ""])


def test_parse_log_reads_file(write_log):
    path = write_log([check_line("COVERAGE_10X", "REF1", "0.95")])
    fact_base = parse_log(path)
    assert fact_base.sample_count == 1


def test_parse_log_empty_file_raises(write_log):
    with pytest.raises(EmptyLogError):
        parse_log(write_log([]))


def test_parse_log_missing_file_raises_read_error(tmp_path):
    with pytest.raises(LogReadError):
        parse_log(tmp_path / "absent.log")


def test_parse_log_tolerates_undecodable_noise(tmp_path):
    path = tmp_path / "HealthCheck.out"
    path.write_bytes(
        b"garbage \xff\xfe noise\n"
        + check_line("COVERAGE_10X", "REF1", "0.95").encode("utf-8")
        + b"\n"
    )
    fact_base = parse_log(path)
    assert fact_base.sample_names == ("REF1",)
    assert fact_base.raw("REF1", "COVERAGE_10X") == "0.95"


def _track_open(monkeypatch) -> list:
    handles = []
    real_open = Path.open

    def tracking_open(self, *args, **kwargs):
        handle = real_open(self, *args, **kwargs)
        handles.append(handle)
        return handle

    monkeypatch.setattr(Path, "open", tracking_open)
    return handles


def test_parse_log_closes_handle_after_empty_log(write_log, monkeypatch):
    path = write_log(["no facts here"])
    handles = _track_open(monkeypatch)
    with pytest.raises(EmptyLogError):
        parse_log(path)
    assert len(handles) == 1
    assert handles[0].closed


def test_parse_log_closes_handle_after_success(write_log, monkeypatch):
    path = write_log([check_line("COVERAGE_10X", "REF1", "0.95")])
    handles = _track_open(monkeypatch)
    parse_log(path)
    assert len(handles) == 1
    assert handles[0].closed
