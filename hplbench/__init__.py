"""Linpack-style dense LU benchmark: parameter parsing, timed solves, residual checks and reports."""

__version__ = "0.1.0"