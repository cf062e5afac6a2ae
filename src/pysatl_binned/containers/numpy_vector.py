"""
NumPy Bin Vector
================

:class:`NumpyBinVector` — the default :class:`~.protocol.BinVector`
implementation, a ``(rows, cols)`` float64 array.

Binary layout written by :meth:`NumpyBinVector.write_to_stream`
(little-endian, no version tag)::

    rows  : int32
    cols  : int32
    data  : rows * cols float64, row-major
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Self, cast

import numpy as np
import numpy.typing as npt
from scipy.ndimage import convolve1d

from pysatl_binned.errors import PreconditionError, SerializationError

if TYPE_CHECKING:
    from typing import IO

    from pysatl_binned.types import FloatArray, IndexArray

INT_DTYPE = np.dtype("<i4")
FLOAT_DTYPE = np.dtype("<f8")


def read_exact(stream: IO[bytes], dtype: np.dtype[Any], count: int = 1) -> npt.NDArray[Any]:
    """
    Read ``count`` items of ``dtype`` from ``stream``.

    Raises
    ------
    SerializationError
        If the stream ends before enough bytes are available.
    """
    if count == 0:
        return np.empty(0, dtype=dtype)
    nbytes = dtype.itemsize * count
    raw = stream.read(nbytes)
    if len(raw) != nbytes:
        raise SerializationError(f"Unexpected end of stream: wanted {nbytes} bytes, got {len(raw)}.")
    return np.frombuffer(raw, dtype=dtype, count=count)


class NumpyBinVector:
    """
    Row-major float64 storage with the :class:`~.protocol.BinVector` capabilities.

    Parameters
    ----------
    rows : int, default=1
        Number of rows.
    cols : int, default=0
        Number of columns.

    Notes
    -----
    Element access (``v[i]``) addresses the flattened array, which for the
    single-row vectors used by random functions is the bin index.
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int = 1, cols: int = 0) -> None:
        self._data: FloatArray
        self.set_dimension(rows, cols)

    @classmethod
    def from_values(cls, values: FloatArray | list[float]) -> Self:
        """Build a single-row vector holding a copy of ``values``."""
        arr = np.asarray(values, dtype=np.float64).reshape(1, -1)
        vec = cls(1, arr.shape[1])
        vec._data[...] = arr
        return vec

    @property
    def shape(self) -> tuple[int, int]:
        rows, cols = self._data.shape
        return int(rows), int(cols)

    def __len__(self) -> int:
        return int(self._data.size)

    def __getitem__(self, index: int) -> float:
        return float(self._data.flat[index])

    def __setitem__(self, index: int, value: float) -> None:
        self._data.flat[index] = value

    def set_dimension(self, rows: int, cols: int) -> None:
        """
        Reallocate to ``(rows, cols)``; contents are zero-filled.

        Raises
        ------
        PreconditionError
            If either dimension is negative.
        """
        if rows < 0 or cols < 0:
            raise PreconditionError(
                "NumpyBinVector.set_dimension", f"invalid dimension ({rows}, {cols})"
            )
        self._data = np.zeros((rows, cols), dtype=np.float64)

    def fill(self, value: float) -> None:
        self._data.fill(value)

    def assign(self, values: FloatArray) -> None:
        """
        Overwrite the contents with ``values`` (flattened, row-major).

        Raises
        ------
        PreconditionError
            If the number of values differs from the number of elements.
        """
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
        if arr.size != self._data.size:
            raise PreconditionError(
                "NumpyBinVector.assign", f"expected {self._data.size} values, got {arr.size}"
            )
        self._data[...] = arr.reshape(self._data.shape)

    def sum(self) -> float:
        return float(self._data.sum())

    def scale(self, factor: float) -> None:
        self._data *= factor

    def add_at(self, indices: IndexArray, values: FloatArray | float) -> None:
        """Unbuffered ``v[indices] += values`` (repeated indices accumulate)."""
        np.add.at(self._data.reshape(-1), indices, values)

    def convolve_horizontal(self, kernel: FloatArray) -> Self:
        """
        Convolve every row with a 1-row kernel.

        The output has the same shape as the input; samples beyond either end
        of a row are treated as zero.

        Parameters
        ----------
        kernel : numpy.ndarray
            1D array or array of shape ``(1, k)``.

        Returns
        -------
        NumpyBinVector
            New vector holding the convolution.
        """
        k = np.asarray(kernel, dtype=np.float64)
        if k.ndim == 2 and k.shape[0] == 1:
            k = k[0]
        if k.ndim != 1 or k.size == 0:
            raise PreconditionError(
                "NumpyBinVector.convolve_horizontal",
                f"kernel must have exactly one row, got shape {np.shape(kernel)}",
            )

        out = type(self)(*self.shape)
        if len(self) > 0:
            out._data[...] = convolve1d(self._data, k, axis=1, mode="constant", cval=0.0)
        return out

    def to_numpy(self) -> FloatArray:
        """Return a flattened copy of the contents."""
        return cast("FloatArray", self._data.reshape(-1).copy())

    def copy(self) -> Self:
        out = type(self)(*self.shape)
        out._data[...] = self._data
        return out

    def write_to_stream(self, stream: IO[bytes]) -> None:
        rows, cols = self.shape
        stream.write(np.array([rows, cols], dtype=INT_DTYPE).tobytes())
        stream.write(self._data.astype(FLOAT_DTYPE, copy=False).tobytes(order="C"))

    @classmethod
    def read_from_stream(cls, stream: IO[bytes]) -> Self:
        """
        Decode a vector written by :meth:`write_to_stream`.

        Raises
        ------
        SerializationError
            If the stream is truncated or carries a negative dimension.
        """
        rows, cols = (int(v) for v in read_exact(stream, INT_DTYPE, 2))
        if rows < 0 or cols < 0:
            raise SerializationError(f"Corrupt vector header: dimension ({rows}, {cols}).")
        data = read_exact(stream, FLOAT_DTYPE, rows * cols)

        vec = cls(rows, cols)
        vec._data[...] = data.reshape(rows, cols)
        return vec

    def __repr__(self) -> str:
        return f"{type(self).__name__}(shape={self.shape})"


__all__ = [
    "NumpyBinVector",
    "read_exact",
]
