import dataclasses
import io
from unittest import mock

import numpy as np
import pytest

from hplbench.ptest import TestCounters, variant_code
from hplbench.runner import Algorithm, check_solution, generate_system, run_test
from hplbench.settings import Fact, Topology, default_config


def _algorithm():
    return Algorithm(
        pfact=Fact.RIGHT_LOOKING,
        rfact=Fact.RIGHT_LOOKING,
        btopo=Topology.ONE_RING,
        depth=1,
        nbmin=16,
        nbdiv=2,
    )


def _config(**changes):
    config = default_config(16, 4, 1, 1, 1, 1, 0.6)
    return dataclasses.replace(config, **changes)


def test_generate_system_shape_and_range():
    a, b = generate_system(10, 7)
    assert a.shape == (10, 10)
    assert b.shape == (10,)
    assert a.min() >= -0.5 and a.max() < 0.5
    assert b.min() >= -0.5 and b.max() < 0.5


def test_generate_system_is_deterministic():
    a1, b1 = generate_system(6, 3)
    a2, b2 = generate_system(6, 3)
    assert np.array_equal(a1, a2)
    assert np.array_equal(b1, b2)


def test_generate_system_rejects_negative_order():
    with pytest.raises(ValueError):
        generate_system(-1, 1)


def test_check_solution_identity_is_exact():
    b = np.array([0.25, -0.5, 0.125])
    check = check_solution(np.eye(3), b, b, 1e-16)
    assert check.resid0 == 0.0
    assert check.resid1 == 0.0
    assert check.anorm_i == 1.0
    assert check.anorm_1 == 1.0
    assert check.xnorm_i == 0.5
    assert check.xnorm_1 == pytest.approx(0.875)
    assert check.bnorm_i == 0.5


def test_check_solution_real_solve_passes_threshold():
    a, b = generate_system(12, 5)
    x = np.linalg.solve(a, b)
    check = check_solution(a, x, b, 2.0**-53)
    assert check.n == 12
    assert check.resid1 < 16.0


def test_check_solution_shape_mismatch():
    with pytest.raises(ValueError):
        check_solution(np.eye(3), np.zeros(2), np.zeros(3), 1e-16)


def test_run_test_passes_and_reports():
    config = _config()
    counters = TestCounters()
    out = io.StringIO()
    check = run_test(config, _algorithm(), 16, 4, out, counters, 100)
    text = out.getvalue()
    assert counters.kpass == 1
    assert counters.kfail == 0
    assert check.resid1 < config.thrsh
    assert "PASSED" in text
    code = variant_code(config.pmap, 1, Topology.ONE_RING, Fact.RIGHT_LOOKING, 2,
                        Fact.RIGHT_LOOKING, 16)
    assert code in text
    assert "HPL_pdgesv() start time" in text


def test_run_test_illegal_block_size_is_skipped():
    counters = TestCounters()
    out = io.StringIO()
    result = run_test(_config(), _algorithm(), 16, 0, out, counters, 100)
    assert result is None
    assert counters.kskip == 1
    assert out.getvalue() == ""


def test_run_test_without_checking_prints_header_once():
    config = _config(thrsh=0.0)
    counters = TestCounters()
    out = io.StringIO()
    run_test(config, _algorithm(), 8, 4, out, counters, 100)
    run_test(config, _algorithm(), 8, 4, out, counters, 100)
    text = out.getvalue()
    assert counters.kpass == 2
    assert text.count("T/V") == 1
    assert "PASSED" not in text


def test_run_test_singular_solve_is_skipped():
    counters = TestCounters()
    out = io.StringIO()
    with mock.patch("numpy.linalg.solve", side_effect=np.linalg.LinAlgError("singular")):
        result = run_test(_config(), _algorithm(), 8, 4, out, counters, 100)
    assert result is None
    assert counters.kskip == 1
    assert "Error code returned by solve is" in out.getvalue()