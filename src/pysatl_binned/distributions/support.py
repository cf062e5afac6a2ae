from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from pysatl_binned.types import BoolArray, Number, NumericArray


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


@dataclass(frozen=True, slots=True)
class BinnedSupport(Support):
    """
    Half-open interval ``[left, left + count * width)`` covered by equal bins.

    Parameters
    ----------
    left : float
        Left edge of the first bin.
    width : float
        Bin width.
    count : int
        Number of bins.
    """

    left: float
    width: float
    count: int

    @property
    def right(self) -> float:
        """Right (open) edge of the last bin."""
        return self.left + self.count * self.width

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=float)
        idx = np.floor((arr - self.left) / self.width)
        result = (idx >= 0) & (idx < self.count)

        if np.ndim(arr) == 0:
            return bool(result)
        return cast("BoolArray", result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast("Number", x)))

    def bin_edges(self) -> NumericArray:
        """Edges of all bins, ``count + 1`` values."""
        return cast("NumericArray", self.left + np.arange(self.count + 1) * self.width)


__all__ = [
    "Support",
    "BinnedSupport",
]
