"""
Core Type Definitions
=====================

Numeric type aliases used throughout the package.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import numpy as np
from numpy.typing import NDArray

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for float64 arrays (bin weights, prefix sums, samples)."""

IndexArray = NDArray[np.intp]
"""Type alias for bin index arrays (CDF lookup tables)."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

type BinIndex = int
"""Type alias for a (possibly out-of-range) bin index."""


__all__ = [
    "NumPyNumber",
    "Number",
    "NumericArray",
    "FloatArray",
    "IndexArray",
    "BoolArray",
    "BinIndex",
]
