"""
Exceptions
==========

Exception hierarchy shared by the generator, the bin containers and the
binned random functions.

- :class:`PreconditionError` — a hard precondition of an operation is violated
  (invalid domain ordering, non-positive bin width, unsupported parameter).
- :class:`EmptyDistributionError` — sampling from a distribution with zero mass.
- :class:`SerializationError` — a binary stream is truncated or inconsistent.

Recoverable conditions (normalizing an all-zero distribution, building a CDF
table for it) are reported by boolean return values, not by exceptions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class PySATLBinnedError(Exception):
    """Base class for all errors raised by this package."""


class PreconditionError(PySATLBinnedError, ValueError):
    """
    A hard precondition of an operation does not hold.

    Messages are prefixed with the failing operation, e.g.
    ``"RandomFunction.init: min_v must not exceed max_v"``.
    """

    def __init__(self, where: str, message: str) -> None:
        super().__init__(f"{where}: {message}")
        self.where = where


class EmptyDistributionError(PreconditionError):
    """Sampling was requested from a distribution whose weights sum to zero."""


class SerializationError(PySATLBinnedError, OSError):
    """A binary stream could not be decoded."""


__all__ = [
    "PySATLBinnedError",
    "PreconditionError",
    "EmptyDistributionError",
    "SerializationError",
]
