"""
Distributions subpackage

Binned random functions and their supporting pieces:

- discretized distribution with fast sampling (:mod:`.random_function`);
- CDF cache state (:mod:`.cdf_state`);
- bin support interval (:mod:`.support`);
- sample containers (:mod:`.sampling`);
- binary serialization (:mod:`.serialization`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .cdf_state import CDF_UNINITIALIZED, CdfBuilt, CdfState, CdfUninitialized
from .random_function import RandomFunction
from .sampling import ArraySample, Sample
from .support import BinnedSupport, Support

__all__ = [
    # random function
    "RandomFunction",
    # cdf cache
    "CdfState",
    "CdfUninitialized",
    "CdfBuilt",
    "CDF_UNINITIALIZED",
    # sampling
    "Sample",
    "ArraySample",
    # support
    "Support",
    "BinnedSupport",
]
