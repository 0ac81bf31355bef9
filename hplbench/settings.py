"""Run parameters for the benchmark and node-local grid resolution."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass


class ConfigError(ValueError):
    """Raised when the run parameters are illegal."""


class Fact(enum.Enum):
    """Panel factorization variant."""

    LEFT_LOOKING = 0
    CROUT = 1
    RIGHT_LOOKING = 2


class Topology(enum.Enum):
    """Panel broadcast topology."""

    ONE_RING = 0
    ONE_RING_M = 1
    TWO_RING = 2
    TWO_RING_M = 3
    BLONG = 4
    BLONG_M = 5


class SwapAlgo(enum.Enum):
    """Row swapping algorithm."""

    BIN_EXCH = 0
    LONG = 1
    MIX = 2


class Order(enum.Enum):
    """Process mapping onto the grid."""

    ROW_MAJOR = 0
    COLUMN_MAJOR = 1


@dataclass(frozen=True)
class RunConfig:
    """Everything needed to run the series of tests.

    ``output_unit`` 6 sends results to standard output, 7 to standard
    error; any other value writes them to ``output_file``.
    """

    n_values: tuple[int, ...]
    nb_values: tuple[int, ...]
    pmap: Order
    p_values: tuple[int, ...]
    q_values: tuple[int, ...]
    local_p: int
    local_q: int
    pfacts: tuple[Fact, ...]
    nbmins: tuple[int, ...]
    ndivs: tuple[int, ...]
    rfacts: tuple[Fact, ...]
    topologies: tuple[Topology, ...]
    depths: tuple[int, ...]
    fswap: SwapAlgo = SwapAlgo.LONG
    tswap: int = 64
    l1notran: int = 1
    unotran: int = 0
    equil: int = 0
    align: int = 8
    frac: float = 0.6
    thrsh: float = 16.0
    epsil: float = 2.0e-16
    output_file: str = "HPL.out"
    output_unit: int = 0


def resolve_local_grid(
    big_p: int, big_q: int, p: int, q: int, local_size: int
) -> tuple[int, int]:
    """Work out the node-local grid ``(p, q)`` from the processes on a node.

    A value below 1 for ``p`` or ``q`` means it was not given.  With neither
    given the node forms a 1 x ``local_size`` grid.  The global ``big_p`` by
    ``big_q`` grid must split evenly into node-local grids.
    """
    if p < 1 and q < 1:
        p, q = 1, local_size
    elif p < 1:
        if local_size % q != 0:
            raise ConfigError(f"Node-local MPI grid cannot be split into q={q} columns")
        p = local_size // q
    elif q < 1:
        if local_size % p != 0:
            raise ConfigError(f"Node-local MPI grid cannot be split into p={p} rows")
        q = local_size // p
    elif local_size != p * q:
        raise ConfigError("Invalid Node-local MPI grid")

    if big_q % q != 0 or big_p % p != 0:
        raise ConfigError(
            "MPI grid is not uniformly distributed amoung nodes, "
            f"(P,Q)=({big_p},{big_q}) and (p,q)=({p},{q})"
        )
    return p, q


def default_config(
    n: int, nb: int, big_p: int, big_q: int, p: int, q: int, frac: float
) -> RunConfig:
    """Build the single-test configuration used when no input file is read."""
    if big_p < 1:
        raise ConfigError("Illegal value for P. Exiting ...")
    if big_q < 1:
        raise ConfigError("Illegal value for Q. Exiting ...")
    if n < 1:
        raise ConfigError("Illegal value for N. Exiting ...")
    if nb < 1:
        raise ConfigError("Illegal value for NB. Exiting ...")
    return RunConfig(
        n_values=(n,),
        nb_values=(nb,),
        pmap=Order.COLUMN_MAJOR,
        p_values=(big_p,),
        q_values=(big_q,),
        local_p=p,
        local_q=q,
        pfacts=(Fact.RIGHT_LOOKING,),
        nbmins=(16,),
        ndivs=(2,),
        rfacts=(Fact.RIGHT_LOOKING,),
        topologies=(Topology.ONE_RING,),
        depths=(1,),
        fswap=SwapAlgo.LONG,
        tswap=64,
        l1notran=1,
        unotran=0,
        equil=0,
        align=8,
        frac=frac,
        epsil=sys.float_info.epsilon / 2.0,
        output_file="HPL.out",
        output_unit=0,
    )