"""
Containers subpackage

Storage for bin weights used by the binned random functions:

- bin container capability protocol (:mod:`.protocol`);
- NumPy-backed implementation (:mod:`.numpy_vector`);
- smoothing kernels (:mod:`.kernels`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .kernels import gaussian_kernel
from .numpy_vector import NumpyBinVector
from .protocol import BinVector

__all__ = [
    "BinVector",
    "NumpyBinVector",
    "gaussian_kernel",
]
