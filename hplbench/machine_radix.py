"""Discovery of the floating-point radix, mantissa length and rounding style."""

from __future__ import annotations

import functools
from dataclasses import dataclass


@dataclass(frozen=True)
class RadixInfo:
    """Basic properties of the floating-point arithmetic in use."""

    beta: int
    digits: int
    rounds: bool
    ieee: bool


def _add(a: float, b: float) -> float:
    return a + b


@functools.lru_cache(maxsize=None)
def probe_radix() -> RadixInfo:
    """Determine the base, the mantissa length in base digits, whether
    addition rounds, and whether rounding follows IEEE round-to-nearest."""
    one = 1.0

    # Smallest power of two a for which fl(a + 1) - a is no longer 1.
    a = 1.0
    while True:
        a *= 2.0
        c = _add(_add(a, one), -a)
        if c != one:
            break

    # Smallest power of two b for which fl(a + b) > a.
    b = 1.0
    c = _add(a, b)
    while c == a:
        b *= 2.0
        c = _add(a, b)

    # a and c are neighbours, so their difference is the base.
    savec = c
    c = _add(c, -a)
    beta = int(c + 0.25)

    # Rounding or chopping: add a bit less, then a bit more, than beta / 2.
    b = float(beta)
    f = _add(b / 2.0, -b / 100.0)
    rounds = _add(f, a) == a
    f = _add(b / 2.0, b / 100.0)
    if rounds and _add(f, a) == a:
        rounds = False

    # Round-to-nearest-even: a is even and savec odd in their last place.
    t1 = _add(b / 2.0, a)
    t2 = _add(b / 2.0, savec)
    ieee = t1 == a and t2 > savec and rounds

    # Mantissa length: smallest t with fl(beta**t + 1) - beta**t != 1.
    digits = 0
    a = 1.0
    while True:
        digits += 1
        a *= float(beta)
        c = _add(_add(a, one), -a)
        if c != one:
            break

    return RadixInfo(beta=beta, digits=digits, rounds=rounds, ieee=ieee)


def ipow(x: float, n: int) -> float:
    """Raise ``x`` to the integer power ``n`` by repeated multiplication.

    A zero base gives 0.0 for every ``n``.
    """
    if x == 0.0:
        return 0.0
    if n < 0:
        factor = 1.0 / x
        count = -n
    else:
        factor = x
        count = n
    result = 1.0
    for _ in range(count):
        result *= factor
    return result