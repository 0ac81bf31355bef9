import pytest

from hplbench.ptest import (
    ResidualCheck,
    TestCounters,
    format_residual,
    format_result_line,
    format_table_header,
    gflops,
    variant_code,
)
from hplbench.settings import Fact, Order, Topology


def _check(resid0=1e-12, n=100):
    return ResidualCheck(
        resid0=resid0,
        anorm_i=50.0,
        anorm_1=48.0,
        xnorm_i=2.0,
        xnorm_1=1.5,
        bnorm_i=0.5,
        n=n,
        epsil=2.0e-16,
    )


def test_counters_record():
    counters = TestCounters()
    counters.record(True)
    counters.record(True)
    counters.record(False)
    counters.kskip += 1
    assert counters.kpass == 2
    assert counters.kfail == 1
    assert counters.ktest == 4


def test_gflops_scales_inversely_with_time():
    assert gflops(1000, 2.0) == pytest.approx(gflops(1000, 1.0) / 2.0)


def test_gflops_grows_with_n():
    assert gflops(2000, 1.0) > gflops(1000, 1.0)


@pytest.mark.parametrize("seconds", [0.0, -1.0])
def test_gflops_rejects_non_positive_time(seconds):
    with pytest.raises(ValueError):
        gflops(100, seconds)


def test_variant_code_default_run():
    code = variant_code(
        Order.COLUMN_MAJOR, 1, Topology.ONE_RING, Fact.RIGHT_LOOKING, 2,
        Fact.RIGHT_LOOKING, 16,
    )
    assert code == "WC10R2R16"


def test_variant_code_fields():
    code = variant_code(
        Order.ROW_MAJOR, 1, Topology.BLONG_M, Fact.CROUT, 3, Fact.LEFT_LOOKING, 4
    )
    assert code[0] == "W"
    assert code[1] == "R"
    assert code[3] == "5"
    assert code[4] == "C"
    assert code[6] == "L"


def test_result_line_fields():
    line = format_result_line("WC10R2R16", 1000, 64, 2, 3, 1.234, 5.5)
    assert line.endswith("\n")
    tokens = line.split()
    assert tokens[:5] == ["WC10R2R16", "1000", "64", "2", "3"]
    assert float(tokens[5]) == pytest.approx(1.23)
    assert float(tokens[6]) == pytest.approx(5.5)


def test_table_header():
    lines = format_table_header().split("\n")
    assert lines[0] == "=" * 80
    assert lines[1].startswith("T/V")
    assert lines[1].split() == ["T/V", "N", "NB", "P", "Q", "Time", "Gflops"]
    assert lines[2] == "-" * 80


def test_resid1_zero_for_empty_problem():
    assert _check(n=0).resid1 == 0.0


def test_resid1_proportional_to_residual():
    assert _check(resid0=2e-12).resid1 == pytest.approx(2 * _check(resid0=1e-12).resid1)


def test_format_residual_passed():
    check = _check(resid0=1e-14)
    out = format_residual(check, 16.0)
    assert check.resid1 < 16.0
    assert "PASSED" in out
    assert "||A||_1" not in out
    assert out.count("\n") == 2


def test_format_residual_failed_lists_norms():
    check = _check(resid0=1.0)
    out = format_residual(check, 16.0)
    assert "FAILED" in out
    assert out.count("\n") == 8
    a1_line = next(l for l in out.split("\n") if l.startswith("||A||_1"))
    assert float(a1_line.split()[-1]) == pytest.approx(48.0)
    b_line = next(l for l in out.split("\n") if l.startswith("||b||_oo"))
    assert float(b_line.split()[-1]) == pytest.approx(0.5)