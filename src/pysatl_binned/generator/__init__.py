"""
Generator subpackage

Seedable pseudorandom generation used by the binned random functions:

- Park–Miller generator with Bays–Durham shuffle (:mod:`.park_miller`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .park_miller import ParkMillerGenerator

__all__ = [
    "ParkMillerGenerator",
]
