"""Diagnostic output: flushed writes, warnings and fatal errors."""

from __future__ import annotations

import sys
from typing import NoReturn, TextIO


def emit(stream: TextIO, text: str) -> None:
    """Write ``text`` to ``stream`` and flush it immediately."""
    stream.write(text)
    stream.flush()


def _compose(line: int, routine: str, message: str, tail: str) -> str:
    if line <= 0:
        head = f"HPL ERROR in function {routine}:"
    else:
        head = f"HPL ERROR on line {line} of function {routine}:"
    return f"{head}\n>>> {message} <<<{tail}\n\n"


def format_error(line: int, routine: str, message: str) -> str:
    """Build the error block reported for ``routine``.

    A non-positive ``line`` is left out of the message.
    """
    return _compose(line, routine, message, "")


def warn(stream: TextIO, line: int, routine: str, message: str) -> None:
    """Write an error block to ``stream`` and carry on."""
    emit(stream, format_error(line, routine, message))


def abort(line: int, routine: str, message: str) -> NoReturn:
    """Report a fatal error on standard error and stop with exit status 0."""
    emit(sys.stderr, _compose(line, routine, message, " Abort ..."))
    raise SystemExit(0)