"""Command-line options of the benchmark driver."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from hplbench.settings import ConfigError

VERSION = "1.0.0"

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_int(text: str) -> int:
    """Read a leading integer, giving 0 where there is none."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _to_float(text: str) -> float:
    """Read a leading decimal number, giving 0.0 where there is none."""
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


@dataclass
class CommandLine:
    """Options gathered from the command line."""

    big_p: int = 1
    big_q: int = 1
    n: int = 45312
    nb: int = 384
    p: int = -1
    q: int = -1
    frac: float = 0.6
    input_file: str = "HPL.dat"
    cmdline_run: bool = False
    input_given: bool = False
    show_help: bool = False
    show_version: bool = False

    @property
    def use_input_file(self) -> bool:
        """Whether parameters come from the input file rather than defaults."""
        return self.input_given or not self.cmdline_run


def parse_args(argv: Optional[Iterable[str]]) -> CommandLine:
    """Parse the arguments that follow the program name.

    Parsing stops at ``-h``/``--help`` or ``--version``; unknown arguments
    are ignored.  Illegal grid or problem sizes raise :class:`ConfigError`.
    """
    opts = CommandLine()
    tokens = iter(list(argv or []))

    def value_of(flag: str) -> str:
        try:
            return next(tokens)
        except StopIteration:
            raise ConfigError(f"Missing value for {flag}") from None

    for token in tokens:
        if token in ("-h", "--help"):
            opts.show_help = True
            return opts
        if token == "--version":
            opts.show_version = True
            return opts
        if token in ("-P", "--ranksP"):
            opts.big_p = _to_int(value_of(token))
            opts.cmdline_run = True
            if opts.big_p < 1:
                raise ConfigError("Illegal value for P. Exiting ...")
        elif token in ("-Q", "--ranksQ"):
            opts.big_q = _to_int(value_of(token))
            opts.cmdline_run = True
            if opts.big_q < 1:
                raise ConfigError("Illegal value for Q. Exiting ...")
        elif token == "-p":
            opts.p = _to_int(value_of(token))
            opts.cmdline_run = True
        elif token == "-q":
            opts.q = _to_int(value_of(token))
            opts.cmdline_run = True
        elif token in ("-N", "--sizeN"):
            opts.n = _to_int(value_of(token))
            opts.cmdline_run = True
            if opts.n < 1:
                raise ConfigError("Illegal value for N. Exiting ...")
        elif token in ("-NB", "--sizeNB"):
            opts.nb = _to_int(value_of(token))
            opts.cmdline_run = True
            if opts.nb < 1:
                raise ConfigError("Illegal value for NB. Exiting ...")
        elif token in ("-f", "--frac"):
            opts.frac = _to_float(value_of(token))
        elif token in ("-i", "--input"):
            opts.input_file = value_of(token)
            opts.input_given = True
    return opts


_HELP_LINES = (
    "hplbench client command line options:",
    "-P  [ --ranksP ] arg (=1)          Specific MPI grid size: the number of",
    "                                   rows in MPI grid.",
    "-Q  [ --ranksQ ] arg (=1)          Specific MPI grid size: the number of",
    "                                   columns in MPI grid.",
    "-N  [ --sizeN ]  arg (=45312)      Specific matrix size: the number of rows",
    "                                   /columns in global matrix.",
    "-NB [ --sizeNB ] arg (=384)        Specific panel size: the number of rows",
    "                                   /columns in panels.",
    "-f  [ --frac ] arg (=0.6)          Specific update split: the percentage to",
    "                                   split the trailing submatrix.",
    "-i  [ --input ]  arg (=HPL.dat)    Input file. When set, all other command",
    "                                   line parameters are ignored, and problem",
    "                                   parameters are read from input file.",
    "-h  [ --help ]                     Produces this help message",
    "--version                          Prints the version number",
)


def help_text() -> str:
    """Return the usage message."""
    return "\n".join(_HELP_LINES) + "\n"


def version_text() -> str:
    """Return the version line."""
    return f"hplbench version: {VERSION}\n"