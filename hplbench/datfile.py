"""Reading the benchmark input file (HPL.dat)."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from hplbench.machine import MachineParam, lamch
from hplbench.settings import (
    ConfigError,
    Fact,
    Order,
    RunConfig,
    SwapAlgo,
    Topology,
)

MAX_PARAM = 20

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_FACTS = {0: Fact.LEFT_LOOKING, 1: Fact.CROUT, 2: Fact.RIGHT_LOOKING}
_TOPOLOGIES = {
    0: Topology.ONE_RING,
    1: Topology.ONE_RING_M,
    2: Topology.TWO_RING,
    3: Topology.TWO_RING_M,
    4: Topology.BLONG,
}
_SWAPS = {0: SwapAlgo.BIN_EXCH, 1: SwapAlgo.LONG, 2: SwapAlgo.MIX}


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


class _Reader:
    """Line-by-line access to the input, one field at a time."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)

    def line(self) -> str:
        try:
            return next(self._lines)
        except StopIteration:
            raise ConfigError("Unexpected end of input file") from None

    def word(self) -> str:
        tokens = self.line().split()
        return tokens[0] if tokens else ""

    def int(self) -> int:
        return _atoi(self.word())

    def float(self) -> float:
        return _atof(self.word())

    def count(self, what: str) -> int:
        value = self.int()
        if value < 1 or value > MAX_PARAM:
            raise ConfigError(f"{what} is less than 1 or greater than {MAX_PARAM}")
        return value

    def ints(self, count: int) -> list[int]:
        tokens = self.line().split()
        if len(tokens) < count:
            raise ConfigError(f"Expected {count} values, found {len(tokens)}")
        return [_atoi(token) for token in tokens[:count]]


def _checked(values: list[int], minimum: int, message: str) -> tuple[int, ...]:
    if any(value < minimum for value in values):
        raise ConfigError(message)
    return tuple(values)


def parse_input_lines(lines: Iterable[str], nprocs: int) -> RunConfig:
    """Parse the lines of an input file into a :class:`RunConfig`.

    ``nprocs`` is the number of processes available; a grid needing more
    is illegal.  The node-local grid is left at 1 x 1 for the caller to
    resolve.  Illegal values raise :class:`ConfigError`.
    """
    reader = _Reader(lines)
    reader.line()
    reader.line()

    output_file = reader.word()
    output_unit = reader.int()

    ns = reader.count("Number of values of N")
    n_values = _checked(reader.ints(ns), 0, "Value of N less than 0")

    nbs = reader.count("Number of values of NB")
    nb_values = _checked(reader.ints(nbs), 1, "Value of NB less than 1")

    pmap = Order.COLUMN_MAJOR if reader.int() == 1 else Order.ROW_MAJOR

    npqs = reader.count("Number of values of grids")
    p_values = _checked(reader.ints(npqs), 1, "Value of P less than 1")
    q_values = _checked(reader.ints(npqs), 1, "Value of Q less than 1")

    maxp = max(p * q for p, q in zip(p_values, q_values))
    if maxp > nprocs:
        raise ConfigError(f"Need at least {maxp} processes for these tests")

    thrsh = reader.float()

    npfs = reader.count("number of values of PFACT")
    pfacts = tuple(_FACTS.get(j, Fact.RIGHT_LOOKING) for j in reader.ints(npfs))

    nbms = reader.count("Number of values of NBMIN")
    nbmins = _checked(reader.ints(nbms), 1, "Value of NBMIN less than 1")

    ndvs = reader.count("Number of values of NDIV")
    ndivs = _checked(reader.ints(ndvs), 2, "Value of NDIV less than 2")

    nrfs = reader.count("Number of values of RFACT")
    rfacts = tuple(_FACTS.get(j, Fact.RIGHT_LOOKING) for j in reader.ints(nrfs))

    ntps = reader.count("Number of values of BCAST")
    topologies = tuple(
        _TOPOLOGIES.get(j, Topology.BLONG_M) for j in reader.ints(ntps)
    )

    ndhs = reader.count("Number of values of DEPTH")
    depths = _checked(reader.ints(ndhs), 0, "Value of DEPTH less than 0")
    if any(depth != 1 for depth in depths):
        raise ConfigError("Value of DEPTH must be 1")

    fswap = _SWAPS.get(reader.int(), SwapAlgo.LONG)
    if fswap is not SwapAlgo.LONG:
        raise ConfigError("Value of SWAP must be 1")

    tswap = max(reader.int(), 0)

    l1notran = reader.int()
    if l1notran not in (0, 1):
        l1notran = 0

    unotran = reader.int()
    if unotran not in (0, 1):
        unotran = 0
    if unotran != 0:
        raise ConfigError("U  in no-transposed form unsupported")

    equil = reader.int()
    if equil not in (0, 1):
        equil = 1
    if equil != 0:
        raise ConfigError("Equilibration currently unsupported")

    align = reader.int()
    if align <= 0:
        align = 4

    return RunConfig(
        n_values=n_values,
        nb_values=nb_values,
        pmap=pmap,
        p_values=p_values,
        q_values=q_values,
        local_p=1,
        local_q=1,
        pfacts=pfacts,
        nbmins=nbmins,
        ndivs=ndivs,
        rfacts=rfacts,
        topologies=topologies,
        depths=depths,
        fswap=fswap,
        tswap=tswap,
        l1notran=l1notran,
        unotran=unotran,
        equil=equil,
        align=align,
        thrsh=thrsh,
        epsil=lamch(MachineParam.EPS),
        output_file=output_file,
        output_unit=output_unit,
    )


def read_input_file(path, nprocs: int) -> RunConfig:
    """Read and parse the input file at ``path``."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as handle:
            lines = handle.readlines()
    except OSError:
        raise ConfigError(f"cannot open file {path}") from None
    return parse_input_lines(lines, nprocs)