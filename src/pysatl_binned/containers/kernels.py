"""
Smoothing kernels for 1-row convolution.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_binned.errors import PreconditionError

if TYPE_CHECKING:
    from pysatl_binned.types import FloatArray


def gaussian_kernel(sigma: float, truncate: float = 3.0) -> FloatArray:
    """
    Sampled Gaussian kernel of shape ``(1, 2r + 1)``.

    Parameters
    ----------
    sigma : float
        Standard deviation in bins, must be positive.
    truncate : float, default=3.0
        The kernel radius is ``r = ceil(truncate * sigma)`` (at least 1).

    Returns
    -------
    numpy.ndarray
        Row kernel normalized to unit sum.

    Raises
    ------
    PreconditionError
        If ``sigma`` or ``truncate`` is not positive.
    """
    if not sigma > 0:
        raise PreconditionError("gaussian_kernel", f"sigma must be positive, got {sigma}")
    if not truncate > 0:
        raise PreconditionError("gaussian_kernel", f"truncate must be positive, got {truncate}")

    radius = max(1, math.ceil(truncate * sigma))
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-(x**2) / (2.0 * sigma**2))
    kernel /= kernel.sum()
    return cast("FloatArray", kernel.reshape(1, -1))


__all__ = [
    "gaussian_kernel",
]
