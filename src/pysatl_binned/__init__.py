"""
PySATL Binned
=============

Seedable Park–Miller generator and binned random functions: discretized
distributions with analytic initializers, smoothing, moments and O(1)
sampling through an inverse-CDF lookup table.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .containers import *
from .containers import __all__ as _containers_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .generator import *
from .generator import __all__ as _generator_all
from .types import *
from .types import __all__ as _types_all

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = version("pysatl-binned")
__all__ = [
    "__version__",
    *_config_all,
    *_containers_all,
    *_distr_all,
    *_errors_all,
    *_generator_all,
    *_types_all,
]

del _config_all
del _containers_all
del _distr_all
del _errors_all
del _generator_all
del _types_all
