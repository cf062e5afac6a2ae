"""
Bin Container Interface
=======================

Capability protocol for the linear container that stores bin weights.

A random function only needs a small set of operations from its storage:
dimensioned allocation, element access, fill, summation, scalar multiply,
a 1-D convolution along the row axis and a binary stream round-trip. Any
implementation providing them can back a
:class:`~pysatl_binned.distributions.random_function.RandomFunction`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from typing import IO

    from pysatl_binned.types import FloatArray, IndexArray


@runtime_checkable
class BinVector(Protocol):
    """
    Dimensioned numeric storage for bin weights.

    Attributes
    ----------
    shape : tuple[int, int]
        ``(rows, cols)`` of the storage; random functions use one row.
    """

    def __init__(self, rows: int = 1, cols: int = 0) -> None: ...

    @property
    def shape(self) -> tuple[int, int]: ...

    def __len__(self) -> int: ...
    def __getitem__(self, index: int) -> float: ...
    def __setitem__(self, index: int, value: float) -> None: ...

    def set_dimension(self, rows: int, cols: int) -> None: ...
    def fill(self, value: float) -> None: ...
    def assign(self, values: FloatArray) -> None: ...
    def sum(self) -> float: ...
    def scale(self, factor: float) -> None: ...
    def add_at(self, indices: IndexArray, values: FloatArray | float) -> None: ...
    def convolve_horizontal(self, kernel: FloatArray) -> Self: ...
    def to_numpy(self) -> FloatArray: ...
    def copy(self) -> Self: ...

    def write_to_stream(self, stream: IO[bytes]) -> None: ...
    @classmethod
    def read_from_stream(cls, stream: IO[bytes]) -> Self: ...


__all__ = [
    "BinVector",
]
