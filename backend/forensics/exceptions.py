"""
exceptions.py – Error taxonomy for the forensics engine.

Only precondition violations are raised; every detection stage is a pure
function over the graph and cannot fail on well-formed input.
"""
from __future__ import annotations


class ForensicsError(ValueError):
    """Base class for errors surfaced to the caller."""


class InputError(ForensicsError):
    """Raw records could not be turned into transactions (upstream parser)."""


class DegenerateInputError(ForensicsError):
    """Zero valid transactions remain after upstream filtering."""

    def __init__(self, message: str = "No valid transactions found."):
        super().__init__(message)
