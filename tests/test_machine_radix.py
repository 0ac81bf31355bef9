import sys

import pytest

from hplbench.machine_radix import RadixInfo, ipow, probe_radix


def test_radix_matches_float_info():
    info = probe_radix()
    assert info.beta == sys.float_info.radix


def test_digits_match_float_info():
    info = probe_radix()
    assert info.digits == sys.float_info.mant_dig


def test_ieee_rounding_detected():
    info = probe_radix()
    assert info.rounds is True
    assert info.ieee is True


def test_probe_is_stable():
    assert probe_radix() == probe_radix()
    assert isinstance(probe_radix(), RadixInfo) and probe_radix().beta > 1


def test_epsilon_from_probe():
    info = probe_radix()
    assert ipow(float(info.beta), 1 - info.digits) == sys.float_info.epsilon


@pytest.mark.parametrize("n", [0, 1, 5, 10])
def test_ipow_positive_matches_pow(n):
    assert ipow(2.0, n) == 2.0**n


@pytest.mark.parametrize("n", [-1, -3, -8])
def test_ipow_negative_matches_reciprocal(n):
    assert ipow(2.0, n) == 2.0**n


def test_ipow_zero_base_is_zero_even_for_zero_power():
    assert ipow(0.0, 0) == 0.0
    assert ipow(0.0, -4) == 0.0
    assert ipow(0.0, 3) == 0.0


def test_ipow_negative_base_sign():
    assert ipow(-3.0, 3) == -27.0
    assert ipow(-3.0, 2) == 9.0


def test_ipow_inverse_round_trip():
    assert ipow(4.0, 3) * ipow(4.0, -3) == 1.0