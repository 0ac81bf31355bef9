"""Benchmark driver: read the parameters and run every combination."""

from __future__ import annotations

import contextlib
import dataclasses
import itertools
import sys
from typing import Iterator, Optional, Sequence, TextIO

from hplbench.cli import help_text, parse_args, version_text
from hplbench.datfile import read_input_file
from hplbench.messages import emit, warn
from hplbench.ptest import TestCounters
from hplbench.report import format_banner, format_parameters, format_residual_preamble
from hplbench.runner import DEFAULT_SEED, Algorithm, run_test
from hplbench.settings import (
    ConfigError,
    RunConfig,
    default_config,
    resolve_local_grid,
)

_RULE_EQ = "=" * 80
_RULE_DASH = "-" * 80


def enumerate_algorithms(config: RunConfig) -> Iterator[Algorithm]:
    """Yield every algorithm variant of the run.

    Depth varies slowest, then topology, recursive factorization, panel
    factorization, stopping criterion, and number of panels fastest.
    """
    for depth, btopo, rfact, pfact, nbmin, nbdiv in itertools.product(
        config.depths,
        config.topologies,
        config.rfacts,
        config.pfacts,
        config.nbmins,
        config.ndivs,
    ):
        yield Algorithm(
            pfact=pfact,
            rfact=rfact,
            btopo=btopo,
            depth=depth,
            nbmin=nbmin,
            nbdiv=nbdiv,
            fswap=config.fswap,
            fsthr=config.tswap,
            equil=config.equil,
            align=config.align,
            frac=config.frac,
            l1notran=config.l1notran != 0,
        )


def format_summary(counters: TestCounters, thrsh: float) -> str:
    """Closing report with the number of tests passed, failed and skipped."""
    parts = [
        _RULE_EQ + "\n",
        "\nFinished %6d tests with the following results:\n" % counters.ktest,
    ]
    if thrsh > 0.0:
        parts.append(
            "         %6d tests completed and passed residual checks,\n" % counters.kpass
        )
        parts.append(
            "         %6d tests completed and failed residual checks,\n" % counters.kfail
        )
    else:
        parts.append("         %6d tests completed without checking,\n" % counters.kpass)
    parts.append(
        "         %6d tests skipped because of illegal input values.\n" % counters.kskip
    )
    parts.append(_RULE_DASH + "\n")
    parts.append("\nEnd of Tests.\n")
    parts.append(_RULE_EQ + "\n")
    return "".join(parts)


def load_config(argv: Sequence[str], nprocs: int, local_size: int) -> RunConfig:
    """Build the run configuration from the command line and input file.

    ``nprocs`` is the total number of processes and ``local_size`` the
    number on this node.  Illegal values raise :class:`ConfigError`.
    """
    opts = parse_args(argv)
    maxp = opts.big_p * opts.big_q
    if maxp > nprocs:
        raise ConfigError(f"Need at least {maxp} processes for these tests")
    p, q = resolve_local_grid(opts.big_p, opts.big_q, opts.p, opts.q, local_size)
    if not opts.use_input_file:
        return default_config(opts.n, opts.nb, opts.big_p, opts.big_q, p, q, opts.frac)
    config = read_input_file(opts.input_file, nprocs)
    return dataclasses.replace(config, local_p=p, local_q=q, frac=opts.frac)


def _run_all(config: RunConfig, out: TextIO, nprocs: int) -> TestCounters:
    emit(out, format_banner())
    emit(out, format_parameters(config))
    emit(out, format_residual_preamble(config.thrsh, config.epsil))

    counters = TestCounters()
    algorithms = list(enumerate_algorithms(config))
    for nprow, npcol in zip(config.p_values, config.q_values):
        if nprow * npcol > nprocs:
            continue
        for n in config.n_values:
            for nb in config.nb_values:
                for algorithm in algorithms:
                    run_test(config, algorithm, n, nb, out, counters, DEFAULT_SEED)

    emit(out, format_summary(counters, config.thrsh))
    return counters


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the benchmark; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    nprocs = 1
    local_size = 1

    try:
        opts = parse_args(args)
    except ConfigError as exc:
        warn(sys.stderr, 0, "HPL_pdinfo", str(exc))
        return 1
    if opts.show_help:
        emit(sys.stdout, help_text())
        return 0
    if opts.show_version:
        emit(sys.stdout, version_text())
        return 0

    try:
        config = load_config(args, nprocs, local_size)
    except ConfigError as exc:
        warn(sys.stderr, 0, "HPL_pdinfo", str(exc))
        return 1

    with contextlib.ExitStack() as stack:
        if config.output_unit == 6:
            out = sys.stdout
        elif config.output_unit == 7:
            out = sys.stderr
        else:
            try:
                out = stack.enter_context(
                    open(config.output_file, "w", encoding="utf-8")
                )
            except OSError:
                warn(
                    sys.stderr,
                    0,
                    "HPL_pdinfo",
                    f"cannot open file {config.output_file}.",
                )
                return 1
        _run_all(config, out, nprocs)
    return 0