"""Machine-specific floating-point constants, discovered at run time."""

from __future__ import annotations

import enum
import functools
import sys
from dataclasses import dataclass

from hplbench.machine_radix import ipow, probe_radix
from hplbench.machine_range import overflow_limit, underflow_exponent
from hplbench.messages import emit


class MachineParam(enum.Enum):
    """Which constant :func:`lamch` returns; the value names the field."""

    EPS = "eps"
    SFMIN = "sfmin"
    BASE = "base"
    PREC = "prec"
    MLEN = "t"
    RND = "rnd"
    EMIN = "emin"
    RMIN = "rmin"
    EMAX = "emax"
    RMAX = "rmax"


@dataclass(frozen=True)
class MachineConstants:
    """Properties of the floating-point arithmetic.

    ``eps`` is the relative machine precision, ``sfmin`` the safe minimum
    whose reciprocal does not overflow, ``base`` the radix, ``prec`` is
    ``eps * base``, ``t`` the mantissa length in base digits, ``rnd`` 1.0
    when addition rounds, ``emin``/``rmin`` the underflow exponent and
    threshold and ``emax``/``rmax`` the overflow exponent and threshold.
    """

    eps: float
    sfmin: float
    base: float
    prec: float
    t: float
    rnd: float
    emin: float
    rmin: float
    emax: float
    rmax: float


def _minimum_exponent(beta: int, digits: int) -> tuple[int, bool]:
    """Return the minimum exponent and whether gradual underflow was seen."""
    rbase = 1.0 / float(beta)
    small = 1.0
    for _ in range(3):
        small = small * rbase + 0.0
    a = 1.0 + small

    ngpmin = underflow_exponent(1.0, beta)
    ngnmin = underflow_exponent(-1.0, beta)
    gpmin = underflow_exponent(a, beta)
    gnmin = underflow_exponent(-a, beta)

    gradual = False
    guessed = False
    if ngpmin == ngnmin and gpmin == gnmin:
        if ngpmin == gpmin:
            # No gradual underflow, not twos-complement.
            lemin = ngpmin
        elif gpmin - ngpmin == 3:
            # Gradual underflow, IEEE style.
            lemin = ngpmin - 1 + digits
            gradual = True
        else:
            lemin = min(ngpmin, gpmin)
            guessed = True
    elif ngpmin == gpmin and ngnmin == gnmin:
        if abs(ngpmin - ngnmin) == 1:
            lemin = max(ngpmin, ngnmin)
        else:
            lemin = min(ngpmin, ngnmin)
            guessed = True
    elif abs(ngpmin - ngnmin) == 1 and gpmin == gnmin:
        if gpmin - min(ngpmin, ngnmin) == 3:
            lemin = max(ngpmin, ngnmin) - 1 + digits
        else:
            lemin = min(ngpmin, ngnmin)
            guessed = True
    else:
        lemin = min(ngpmin, ngnmin, gpmin, gnmin)
        guessed = True

    if guessed:
        emit(
            sys.stderr,
            "\n WARNING. The value EMIN may be incorrect:- EMIN = %8d\n"
            "If, after inspection, the value EMIN looks acceptable, it can be used "
            "as is,\notherwise supply EMIN explicitly.\n" % lemin,
        )
    return lemin, gradual


@functools.lru_cache(maxsize=None)
def machine_constants() -> MachineConstants:
    """Probe the arithmetic once and return its constants."""
    radix = probe_radix()
    beta, digits = radix.beta, radix.digits

    lemin, gradual = _minimum_exponent(beta, digits)
    ieee = gradual or radix.ieee

    # Successive division avoids underflow on the way to base**(emin-1).
    rbase = 1.0 / float(beta)
    rmin = 1.0
    for _ in range(1 - lemin):
        rmin = rmin * rbase + 0.0

    emax, rmax = overflow_limit(beta, digits, lemin, ieee)

    base = float(beta)
    if radix.rounds:
        rnd = 1.0
        eps = ipow(base, 1 - digits) / 2.0
    else:
        rnd = 0.0
        eps = ipow(base, 1 - digits)

    sfmin = rmin
    small = 1.0 / rmax
    if small >= sfmin:
        # A little above small so that 1 / sfmin cannot overflow.
        sfmin = small * (1.0 + eps)

    return MachineConstants(
        eps=eps,
        sfmin=sfmin,
        base=base,
        prec=eps * base,
        t=float(digits),
        rnd=rnd,
        emin=float(lemin),
        rmin=rmin,
        emax=float(emax),
        rmax=rmax,
    )


def lamch(cmach: MachineParam) -> float:
    """Return the constant selected by ``cmach``; anything unknown gives eps."""
    constants = machine_constants()
    if isinstance(cmach, MachineParam):
        return getattr(constants, cmach.value)
    return constants.eps