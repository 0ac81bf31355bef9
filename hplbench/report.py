"""Text that echoes the run parameters before the tests start."""

from __future__ import annotations

from typing import Iterable, Union

from hplbench.settings import Fact, Order, RunConfig, SwapAlgo, Topology

_RULE_EQ = "=" * 80
_RULE_DASH = "-" * 80
_PER_LINE = 8
_CONTINUATION = "\n        "

_FACT_NAMES = {
    Fact.LEFT_LOOKING: "Left",
    Fact.CROUT: "Crout",
    Fact.RIGHT_LOOKING: "Right",
}

_TOPOLOGY_NAMES = {
    Topology.ONE_RING: "1ring",
    Topology.ONE_RING_M: "1ringM",
    Topology.TWO_RING: "2ring",
    Topology.TWO_RING_M: "2ringM",
    Topology.BLONG: "Blong",
    Topology.BLONG_M: "BlongM",
}

_EXPLANATION = (
    "\nAn explanation of the input/output parameters follows:\n"
    "T/V    : Wall time / encoded variant.\n"
    "N      : The order of the coefficient matrix A.\n"
    "NB     : The partitioning blocking factor.\n"
    "P      : The number of process rows.\n"
    "Q      : The number of process columns.\n"
    "Time   : Time in seconds to solve the linear system.\n"
    "Gflops : Rate of execution for solving the linear system.\n\n"
    "The following parameter values will be used:\n"
)


def _label(name: str) -> str:
    return "\n" + name.ljust(7) + ":"


def _cell(value: Union[int, str]) -> str:
    if isinstance(value, str):
        return "%8s " % value
    return "%8d " % value


def format_values(label: str, values: Iterable[Union[int, str]]) -> str:
    """Format one parameter line: the label, then the values.

    Values are printed eight to a line; the first sixteen fill two lines
    and every value after them goes on a third.  Integers and short names
    both take a field of eight characters.
    """
    cells = [_cell(value) for value in values]
    parts = [_label(label), "".join(cells[:_PER_LINE])]
    if len(cells) > _PER_LINE:
        parts.append(_CONTINUATION + "".join(cells[_PER_LINE : 2 * _PER_LINE]))
        if len(cells) > 2 * _PER_LINE:
            parts.append(_CONTINUATION + "".join(cells[2 * _PER_LINE :]))
    return "".join(parts)


def _swap_text(config: RunConfig) -> str:
    if config.fswap is SwapAlgo.BIN_EXCH:
        return " Binary-exchange"
    if config.fswap is SwapAlgo.LONG:
        return " Spread-roll (long)"
    return " Mix (threshold = %d)" % config.tswap


def format_parameters(config: RunConfig) -> str:
    """Describe the output columns and list every parameter of the run."""
    mapping = (
        " Row-major process mapping"
        if config.pmap is Order.ROW_MAJOR
        else " Column-major process mapping"
    )
    lines = [
        _EXPLANATION,
        format_values("N", config.n_values),
        format_values("NB", config.nb_values),
        _label("PMAP") + mapping,
        format_values("P", config.p_values),
        format_values("Q", config.q_values),
        format_values("PFACT", [_FACT_NAMES[f] for f in config.pfacts]),
        format_values("NBMIN", config.nbmins),
        format_values("NDIV", config.ndivs),
        format_values("RFACT", [_FACT_NAMES[f] for f in config.rfacts]),
        format_values("BCAST", [_TOPOLOGY_NAMES[t] for t in config.topologies]),
        format_values("DEPTH", config.depths),
        _label("SWAP") + _swap_text(config),
        _label("L1")
        + (" no-transposed form" if config.l1notran != 0 else " transposed form"),
        _label("U")
        + (" no-transposed form" if config.unotran != 0 else " transposed form"),
        _label("EQUIL") + (" yes" if config.equil != 0 else " no"),
        _label("ALIGN") + " %d double precision words" % config.align,
        "\n\n",
    ]
    return "".join(lines)


def format_residual_preamble(thrsh: float, epsil: float) -> str:
    """Explain the residual check; empty when checking is switched off."""
    if thrsh <= 0.0:
        return ""
    return (
        _RULE_DASH
        + "\n\n"
        + "- The matrix A is randomly generated for each test.\n"
        + "- The following scaled residual check will be computed:\n"
        + "      ||Ax-b||_oo / ( eps * ( || x ||_oo * || A ||_oo + || b ||_oo ) * N )\n"
        + "%s %21.6e\n"
        % ("- The relative machine precision (eps) is taken to be     ", epsil)
        + "%s   %11.1f\n\n"
        % ("- Computational tests pass if scaled residuals are less than      ", thrsh)
    )


def format_banner() -> str:
    """Return the heading printed at the top of the output."""
    return (
        _RULE_EQ
        + "\n"
        + "HPLinpack 2.2  --  High-Performance Linpack benchmark  --   February 24, 2016\n"
        + _RULE_EQ
        + "\n"
    )