"""Small dense-matrix helpers: copies, norms and printing."""

from __future__ import annotations

import enum
import sys
from typing import Optional, TextIO

import numpy as np

from hplbench.messages import emit


class Norm(enum.Enum):
    """Which quantity :func:`lange` computes."""

    A = "max"  # largest absolute entry
    ONE = "one"  # maximum column sum
    INF = "inf"  # maximum row sum


def _as_matrix(a) -> np.ndarray:
    arr = np.asarray(a, dtype=float)
    if arr.ndim != 2:
        raise ValueError(f"expected a two-dimensional array, got {arr.ndim} dimensions")
    return arr


def lacpy(a, m: int, n: int) -> np.ndarray:
    """Return a copy of the leading ``m`` by ``n`` block of ``a``."""
    arr = _as_matrix(a)
    if m <= 0 or n <= 0:
        return np.empty((max(m, 0), max(n, 0)))
    rows, cols = arr.shape
    if m > rows or n > cols:
        raise ValueError(f"block {m}x{n} does not fit in a {rows}x{cols} array")
    return arr[:m, :n].copy()


def latcpy(a, m: int, n: int) -> np.ndarray:
    """Return the ``m`` by ``n`` transpose of the leading ``n`` by ``m`` block of ``a``."""
    arr = _as_matrix(a)
    if m <= 0 or n <= 0:
        return np.empty((max(m, 0), max(n, 0)))
    rows, cols = arr.shape
    if n > rows or m > cols:
        raise ValueError(f"block {n}x{m} does not fit in a {rows}x{cols} array")
    return arr[:n, :m].T.copy()


def lange(norm: Norm, a) -> float:
    """Return the one norm, infinity norm or largest absolute entry of ``a``.

    An empty matrix gives 0.0.
    """
    arr = _as_matrix(a)
    if arr.size == 0:
        return 0.0
    magnitudes = np.abs(arr)
    if norm is Norm.A:
        return float(magnitudes.max())
    if norm is Norm.ONE:
        return float(magnitudes.sum(axis=0).max())
    if norm is Norm.INF:
        return float(magnitudes.sum(axis=1).max())
    raise ValueError(f"unknown norm {norm!r}")


def laprnt(a, name: str, ia: int = 0, ja: int = 0, stream: Optional[TextIO] = None) -> None:
    """Print every entry of ``a`` column by column, labelled from (``ia``, ``ja``)."""
    arr = _as_matrix(a)
    out = sys.stderr if stream is None else stream
    rows, cols = arr.shape
    for j in range(cols):
        for i, value in enumerate(arr[:, j]):
            emit(out, "%s(%6d,%6d)=%30.18f\n" % (name, ia + i, ja + j, value))