"""
CDF Cache State
===============

Tagged state of a random function's fast-sampling structures:

- :class:`CdfUninitialized` — no lookup table; ``cdf`` sums bins on demand
  and ``sample`` scans the weights.
- :class:`CdfBuilt` — an inverse-CDF lookup table and the prefix sums it was
  built from.

Any mutation of the bin weights replaces the state with
:data:`CDF_UNINITIALIZED`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

if TYPE_CHECKING:
    from pysatl_binned.types import FloatArray, IndexArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CdfUninitialized:
    """No lookup structures are available."""


@dataclass(frozen=True, slots=True)
class CdfBuilt:
    """
    Inverse-CDF lookup table with its prefix sums.

    Parameters
    ----------
    lookup : numpy.ndarray
        Entry ``j`` is the first bin whose cumulative probability exceeds
        ``(j + 0.5) / size``.
    prefix_sums : numpy.ndarray
        Cumulative sums of the (normalized) bin weights, one per bin.
    """

    lookup: IndexArray
    prefix_sums: FloatArray

    @property
    def size(self) -> int:
        """Number of entries in the lookup table."""
        return int(self.lookup.size)

    @classmethod
    def from_weights(cls, weights: FloatArray, size: int) -> CdfBuilt:
        """
        Invert the cumulative distribution of ``weights`` into a table.

        Parameters
        ----------
        weights : numpy.ndarray
            Normalized, non-negative bin weights.
        size : int
            Number of uniformly spaced probability thresholds.

        Returns
        -------
        CdfBuilt
            The lookup table and prefix sums.
        """
        prefix = np.cumsum(weights, dtype=np.float64)
        thresholds = (np.arange(size, dtype=np.float64) + 0.5) / size
        lookup = np.searchsorted(prefix, thresholds, side="right")
        # rounding in the prefix sums can leave the last thresholds past the end
        np.minimum(lookup, weights.size - 1, out=lookup)

        logger.debug("Built CDF lookup table: %d entries over %d bins", size, weights.size)
        return cls(
            lookup=cast("IndexArray", lookup.astype(np.intp, copy=False)),
            prefix_sums=cast("FloatArray", prefix),
        )


type CdfState = CdfUninitialized | CdfBuilt
"""State of a random function's CDF cache."""

CDF_UNINITIALIZED = CdfUninitialized()


__all__ = [
    "CdfState",
    "CdfUninitialized",
    "CdfBuilt",
    "CDF_UNINITIALIZED",
]
