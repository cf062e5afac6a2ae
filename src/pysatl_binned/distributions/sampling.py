"""
Sampling Containers
===================

Protocol and array-backed container for batches of draws from a random
function.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, cast

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pysatl_binned.types import FloatArray


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> FloatArray: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container of shape ``(n, 1)``.

    Parameters
    ----------
    data : numpy.ndarray
        2D floating-point array with a single column.

    Raises
    ------
    ValueError
        If data is not a single-column 2D array.
    """

    data: FloatArray

    def __init__(self, data: FloatArray) -> None:
        if data.ndim != 2 or data.shape[1] != 1:
            raise ValueError("ArraySample expects 2D array of shape (n, 1).")
        self.data = data

    @classmethod
    def from_values(cls, values: FloatArray) -> ArraySample:
        """Wrap a 1D array of draws."""
        return cls(np.asarray(values, dtype=np.float64).reshape(-1, 1))

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[float]:
        """Iterate over the drawn values."""
        for value in self.data[:, 0]:
            yield float(value)

    @property
    def array(self) -> FloatArray:
        """Return the backing array."""
        return self.data

    @property
    def values(self) -> FloatArray:
        """Return the draws as a flat 1D array."""
        return cast("FloatArray", self.data[:, 0])

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, 1)."""
        n, d = self.data.shape
        return int(n), int(d)


__all__ = [
    "Sample",
    "ArraySample",
]
