"""
Binary Serialization
====================

Fixed-order binary encoding of a :class:`RandomFunction` (little-endian, no
version tag)::

    weights : the bin container's own encoding
    count   : int32
    min_v   : float64
    w       : float64
    w_inv   : float64

Readers must know this layout in advance. The CDF cache is never persisted:
a decoded random function always starts in the uninitialized CDF state.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_binned.containers.numpy_vector import FLOAT_DTYPE, INT_DTYPE, read_exact
from pysatl_binned.errors import SerializationError

if TYPE_CHECKING:
    from typing import IO

    from pysatl_binned.containers.protocol import BinVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BinnedHeader:
    """Scalar fields stored after the weight vector."""

    count: int
    min_v: float
    w: float
    w_inv: float


def write_binned(stream: IO[bytes], weights: BinVector, header: BinnedHeader) -> None:
    """Write ``weights`` followed by the header fields."""
    weights.write_to_stream(stream)
    stream.write(np.array([header.count], dtype=INT_DTYPE).tobytes())
    stream.write(np.array([header.min_v, header.w, header.w_inv], dtype=FLOAT_DTYPE).tobytes())


def read_binned[V: BinVector](stream: IO[bytes], container: type[V]) -> tuple[V, BinnedHeader]:
    """
    Read a weight vector and header written by :func:`write_binned`.

    Parameters
    ----------
    stream : IO[bytes]
        Binary stream positioned at the start of the record.
    container : type
        Bin container class used to decode the weights.

    Returns
    -------
    tuple
        The decoded weights and header.

    Raises
    ------
    SerializationError
        If the stream is truncated, the bin count or width is not positive,
        or the stored bin count disagrees with the weight vector.
    """
    weights = container.read_from_stream(stream)
    (count,) = (int(v) for v in read_exact(stream, INT_DTYPE, 1))
    min_v, w, w_inv = (float(v) for v in read_exact(stream, FLOAT_DTYPE, 3))

    if count <= 0:
        raise SerializationError(f"Stored bin count must be positive, got {count}.")
    if count != len(weights):
        raise SerializationError(
            f"Stored bin count {count} does not match weight vector length {len(weights)}."
        )
    if not w > 0:
        raise SerializationError(f"Stored bin width must be positive, got {w}.")

    logger.debug("Decoded binned record: %d bins from %g with width %g", count, min_v, w)
    return weights, BinnedHeader(count=count, min_v=min_v, w=w, w_inv=w_inv)


__all__ = [
    "BinnedHeader",
    "write_binned",
    "read_binned",
]
