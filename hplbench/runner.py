"""Running one benchmark test: generate, solve, time and check a system."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional, TextIO

import numpy as np

from hplbench.dense import Norm, lange
from hplbench.messages import emit, warn
from hplbench.ptest import (
    ResidualCheck,
    TestCounters,
    format_residual,
    format_result_line,
    format_table_header,
    gflops,
    variant_code,
)
from hplbench.settings import Fact, RunConfig, SwapAlgo, Topology

DEFAULT_SEED = 100


@dataclass(frozen=True)
class Algorithm:
    """Algorithmic parameters of one test.

    ``l1notran`` selects whether panels of columns are kept in
    no-transposed form.
    """

    pfact: Fact
    rfact: Fact
    btopo: Topology
    depth: int
    nbmin: int
    nbdiv: int
    fswap: SwapAlgo = SwapAlgo.LONG
    fsthr: int = 64
    equil: int = 0
    align: int = 8
    frac: float = 0.6
    l1notran: bool = True


def generate_system(n: int, seed: int = DEFAULT_SEED) -> tuple[np.ndarray, np.ndarray]:
    """Return a random ``n`` by ``n`` matrix A and right-hand side b.

    Entries are uniform in [-0.5, 0.5); the same seed gives the same system.
    """
    if n < 0:
        raise ValueError(f"order of the system must be at least zero, got {n}")
    rng = np.random.default_rng(seed)
    augmented = rng.random((n, n + 1)) - 0.5
    return augmented[:, :n].copy(), augmented[:, n].copy()


def check_solution(a, x, b, epsil: float) -> ResidualCheck:
    """Gather the norms for the scaled residual check of ``A x = b``."""
    a = np.asarray(a, dtype=float)
    x = np.asarray(x, dtype=float).reshape(-1)
    b = np.asarray(b, dtype=float).reshape(-1)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError(f"expected a square matrix, got shape {a.shape}")
    n = a.shape[0]
    if x.shape[0] != n or b.shape[0] != n:
        raise ValueError(
            f"vector lengths {x.shape[0]} and {b.shape[0]} do not match order {n}"
        )
    residual = b - a @ x
    row_x = x.reshape(1, -1)
    return ResidualCheck(
        resid0=lange(Norm.INF, residual.reshape(-1, 1)),
        anorm_i=lange(Norm.INF, a),
        anorm_1=lange(Norm.ONE, a),
        # x is a row vector here, so its one norm is the largest entry.
        xnorm_i=lange(Norm.ONE, row_x),
        xnorm_1=lange(Norm.INF, row_x),
        bnorm_i=lange(Norm.A, b.reshape(-1, 1)),
        n=n,
        epsil=epsil,
    )


def _solve(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    if a.shape[0] == 0:
        return np.zeros(0)
    return np.linalg.solve(a, b)


def run_test(
    config: RunConfig,
    algorithm: Algorithm,
    n: int,
    nb: int,
    stream: TextIO,
    counters: TestCounters,
    seed: int = DEFAULT_SEED,
) -> Optional[ResidualCheck]:
    """Run one test and write its results to ``stream``.

    An illegal size counts as skipped.  With a non-positive threshold the
    table header is written only before the first completed test and the
    solution is not checked.  Returns the residual check, if one was made.
    """
    if n < 0 or nb < 1:
        counters.kskip += 1
        return None

    a, b = generate_system(n, seed)
    info = 0
    start_wall = time.time()
    started = time.perf_counter()
    try:
        x = _solve(a, b)
    except np.linalg.LinAlgError:
        x = np.zeros(n)
        info = 1
    elapsed = time.perf_counter() - started
    end_wall = time.time()

    if config.thrsh > 0.0 or counters.kpass + counters.kfail == 0:
        emit(stream, format_table_header())

    if elapsed > 0.0:
        code = variant_code(
            config.pmap,
            algorithm.depth,
            algorithm.btopo,
            algorithm.rfact,
            algorithm.nbdiv,
            algorithm.pfact,
            algorithm.nbmin,
        )
        emit(stream, format_result_line(code, n, nb, 1, 1, elapsed, gflops(n, elapsed)))
        emit(stream, "HPL_pdgesv() start time %s\n\n" % time.ctime(start_wall))
        emit(stream, "HPL_pdgesv() end time   %s\n\n" % time.ctime(end_wall))

    if config.thrsh <= 0.0:
        counters.kpass += 1
        return None

    if info != 0:
        warn(stream, 0, "HPL_pdtest", f"Error code returned by solve is {info}, skip")
        counters.kskip += 1
        return None

    check = check_solution(a, x, b, config.epsil)
    counters.record(check.resid1 < config.thrsh)
    emit(stream, format_residual(check, config.thrsh))
    return check