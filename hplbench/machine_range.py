"""Discovery of the exponent range of the floating-point arithmetic."""

from __future__ import annotations


def _add(a: float, b: float) -> float:
    return a + b


def underflow_exponent(start: float, base: int) -> int:
    """Return the minimum exponent before (gradual) underflow.

    ``start`` is divided by ``base`` over and over until the previous value
    can no longer be recovered, either by multiplying back or by repeated
    addition.  The count of successful steps gives the exponent.
    """
    if base < 2:
        raise ValueError(f"base must be at least 2, got {base}")
    if start == 0.0:
        raise ValueError("start must be non-zero")

    rbase = 1.0 / float(base)
    a = start
    emin = 1
    b1 = _add(a * rbase, 0.0)
    while True:
        emin -= 1
        a = b1
        b1 = _add(a / base, 0.0)
        c1 = _add(b1 * base, 0.0)
        d1 = 0.0
        for _ in range(base):
            d1 += b1
        b2 = _add(a * rbase, 0.0)
        c2 = _add(b2 / rbase, 0.0)
        d2 = 0.0
        for _ in range(base):
            d2 += b2
        if not (c1 == a and c2 == a and d1 == a and d2 == a):
            return emin


def overflow_limit(beta: int, digits: int, emin: int, ieee: bool) -> tuple[int, float]:
    """Return ``(emax, rmax)``: the largest exponent and the largest number.

    Assumes ``emax + abs(emin)`` is close to a power of two.  An implicit
    leading bit (odd bit count in base 2) and an IEEE reserved exponent each
    take one off ``emax``.
    """
    lexp = 1
    exbits = 1
    while True:
        ttry = lexp << 1
        if ttry <= -emin:
            lexp = ttry
            exbits += 1
        else:
            break

    if lexp == -emin:
        uexp = lexp
    else:
        uexp = ttry
        exbits += 1

    # Pick the bound closest to abs(emin) as the exponent range.
    if (uexp + emin) > (-lexp - emin):
        expsum = lexp << 1
    else:
        expsum = uexp << 1

    emax = expsum + emin - 1
    nbits = 1 + exbits + digits
    if nbits % 2 == 1 and beta == 2:
        emax -= 1
    if ieee:
        emax -= 1

    # Build 1 - beta**(-digits) without letting it round up to 1.
    recbas = 1.0 / float(beta)
    z = float(beta) - 1.0
    y = 0.0
    oldy = 0.0
    for _ in range(digits):
        z *= recbas
        if y < 1.0:
            oldy = y
        y = _add(y, z)
    if y >= 1.0:
        y = oldy

    for _ in range(emax):
        y = _add(y * beta, 0.0)

    return emax, y