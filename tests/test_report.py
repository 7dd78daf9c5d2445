import pytest

from seqhealth.health import FactBase, evaluate, render_report, resolve_mode
from seqhealth.health.report import format_count, format_number, format_percentage

from healthlog import somatic_facts


def _report(facts: dict[tuple[str, str], str]) -> list:
    samples: dict[str, dict[str, str]] = {}
    for (sample, metric), value in facts.items():
        samples.setdefault(sample, {})[metric] = value
    fact_base = FactBase(samples=samples)
    context = resolve_mode(fact_base)
    return render_report(context, evaluate(context, fact_base))


def test_format_number_rounds_and_separates():
    assert format_number(0.9) == "0.90"
    assert format_number(1234567.891) == "1,234,567.89"
    assert format_count(1200000) == "1,200,000"
    assert format_percentage(8.3333) == "8.33%"


@pytest.mark.parametrize("value", [0.125, 0.005, 2.675, 1234567.891, 0.3333333])
def test_format_number_is_stable_under_reformatting(value):
    shown = format_number(value)
    assert format_number(float(shown.replace(",", ""))) == shown


def test_single_pass_report():
    lines = _report({("REF1", "COVERAGE_10X"): "0.95", ("REF1", "COVERAGE_20X"): "0.80"})
    assert [line.text for line in lines] == [
        "[INFO] Reference sample: REF1",
        "[OK] COVERAGE_10X_R: 0.95 > 0.90",
        "[OK] COVERAGE_20X_R: 0.80 > 0.70",
        "TEST RESULT for REF1 (fails:0) = OK",
    ]
    assert not any(line.is_error for line in lines)


def test_single_fail_report_marks_error_lines():
    lines = _report({("REF1", "COVERAGE_10X"): "0.50", ("REF1", "COVERAGE_20X"): "0.80"})
    errors = [line.text for line in lines if line.is_error]
    assert errors == [
        "[FAIL] COVERAGE_10X_R: 0.50 < 0.90",
        "TEST RESULT for REF1 (fails:1) = FAIL",
    ]


def test_somatic_contamination_report():
    lines = [line.text for line in _report(somatic_facts(
        TUM1__SOMATIC_SNP_COUNT="1200000", TUM1__SOMATIC_SNP_DBSNP_COUNT="100000",
    ))]
    assert lines[:5] == [
        "[INFO] Reference sample: REF1",
        "[INFO] Tumor sample: TUM1",
        "[INFO] Somatic SNP count: 1,200,000",
        "[INFO] Somatic SNP dbSNP count: 100,000 (8.33%)",
        "[INFO] Somatic indel count: 12,345",
    ]
    assert "[OK] DBSNP_CONTAMINATION: 100,000.00 > 250,000.00" in lines
    assert "[FAIL] NONDBSNP_CONTAMINATION: 1,200,000.00 < 1,000,000.00 and 8.33% < 20.00%" in lines
    assert "[OK] KINSHIP: 0.50 > 0.35" in lines
    assert lines[-1] == "TEST RESULT for TUM1 (fails:1) = FAIL"


def test_contamination_lines_use_verdict_symbols():
    lines = [line.text for line in _report(somatic_facts(
        TUM1__SOMATIC_SNP_COUNT="300000", TUM1__SOMATIC_SNP_DBSNP_COUNT="260000",
    ))]
    assert "[FAIL] DBSNP_CONTAMINATION: 260,000.00 < 250,000.00" in lines
    assert "[OK] NONDBSNP_CONTAMINATION: 300,000.00 > 1,000,000.00 and 86.67% > 20.00%" in lines


def test_skipped_rule_goes_to_error_stream():
    samples = {"REF1": {"COVERAGE_10X": "0.95"}}
    fact_base = FactBase(samples=samples)
    context = resolve_mode(fact_base)
    lines = render_report(context, evaluate(context, fact_base, strict=False))
    errors = [line.text for line in lines if line.is_error]
    assert errors == [
        "[SKIP] COVERAGE_20X_R: metric COVERAGE_20X missing",
        "TEST RESULT for REF1 (fails:1) = FAIL",
    ]
