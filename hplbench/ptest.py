"""Bookkeeping and output formatting for a single solver test."""

from __future__ import annotations

from dataclasses import dataclass

from hplbench.settings import Fact, Order, Topology

_RULE_EQ = "=" * 80
_RULE_DASH = "-" * 80

_FACT_CHARS = {Fact.LEFT_LOOKING: "L", Fact.CROUT: "C", Fact.RIGHT_LOOKING: "R"}


@dataclass
class TestCounters:
    """Counts of passed, failed and skipped tests."""

    __test__ = False

    kpass: int = 0
    kfail: int = 0
    kskip: int = 0

    @property
    def ktest(self) -> int:
        """Total number of tests counted."""
        return self.kpass + self.kfail + self.kskip

    def record(self, passed: bool) -> None:
        """Count one completed test as passed or failed."""
        if passed:
            self.kpass += 1
        else:
            self.kfail += 1


@dataclass(frozen=True)
class ResidualCheck:
    """Norms gathered for the scaled residual check of one solve."""

    resid0: float
    anorm_i: float
    anorm_1: float
    xnorm_i: float
    xnorm_1: float
    bnorm_i: float
    n: int
    epsil: float

    @property
    def resid1(self) -> float:
        """||Ax-b||_oo / (eps * (||A||_oo * ||x||_oo + ||b||_oo) * N)."""
        if self.n <= 0:
            return 0.0
        return self.resid0 / (
            self.epsil * (self.anorm_i * self.xnorm_i + self.bnorm_i) * float(self.n)
        )


def gflops(n: int, seconds: float) -> float:
    """Rate of the LU solve in Gflop/s: 2/3 N^3 + 3/2 N^2 operations."""
    if seconds <= 0.0:
        raise ValueError(f"elapsed time must be positive, got {seconds}")
    return ((n / 1.0e9) * (n / seconds)) * ((2.0 / 3.0) * n + (3.0 / 2.0))


def variant_code(
    order: Order,
    depth: int,
    btopo: Topology,
    rfact: Fact,
    nbdiv: int,
    pfact: Fact,
    nbmin: int,
) -> str:
    """Encode the algorithm variant as printed in the T/V column."""
    return "W%c%1d%c%c%1d%c%1d" % (
        "R" if order is Order.ROW_MAJOR else "C",
        depth,
        str(btopo.value),
        _FACT_CHARS.get(rfact, "R"),
        nbdiv,
        _FACT_CHARS.get(pfact, "R"),
        nbmin,
    )


def format_result_line(
    code: str, n: int, nb: int, nprow: int, npcol: int, seconds: float, rate: float
) -> str:
    """One row of the results table."""
    return "%s%12d %5d %5d %5d %18.2f     %18.3e\n" % (
        code,
        n,
        nb,
        nprow,
        npcol,
        seconds,
        rate,
    )


def format_table_header() -> str:
    """Heading of the results table."""
    return (
        _RULE_EQ
        + "\n"
        + "T/V                N    NB     P     Q               Time                 Gflops\n"
        + _RULE_DASH
        + "\n"
    )


def format_residual(check: ResidualCheck, thrsh: float) -> str:
    """Report the scaled residual; a failing check also lists the norms."""
    resid1 = check.resid1
    passed = resid1 < thrsh
    parts = [
        _RULE_DASH + "\n",
        "%s%16.7f%s%s\n"
        % (
            "||Ax-b||_oo/(eps*(||A||_oo*||x||_oo+||b||_oo)*N)= ",
            resid1,
            " ...... ",
            "PASSED" if passed else "FAILED",
        ),
    ]
    if not passed:
        details = (
            ("||Ax-b||_oo  . . . . . . . . . . . . . . . . . = ", check.resid0),
            ("||A||_oo . . . . . . . . . . . . . . . . . . . = ", check.anorm_i),
            ("||A||_1  . . . . . . . . . . . . . . . . . . . = ", check.anorm_1),
            ("||x||_oo . . . . . . . . . . . . . . . . . . . = ", check.xnorm_i),
            ("||x||_1  . . . . . . . . . . . . . . . . . . . = ", check.xnorm_1),
            ("||b||_oo . . . . . . . . . . . . . . . . . . . = ", check.bnorm_i),
        )
        parts.extend("%s%18.6f\n" % (label, value) for label, value in details)
    return "".join(parts)