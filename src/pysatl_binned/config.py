"""
Package Configuration
=====================

Default knobs used by generators and random functions.

The defaults are resolved once and cached; environment variables with the
``PYSATL_BINNED_`` prefix override them:

- ``PYSATL_BINNED_DEFAULT_SEED``
- ``PYSATL_BINNED_MAX_CDF_TABLE_SIZE``
- ``PYSATL_BINNED_GAUSSIAN_TRUNCATION``
- ``PYSATL_BINNED_SMOOTHING_TRUNCATION``

Call :func:`reset_default_config` after changing the environment.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import TYPE_CHECKING

from pysatl_binned.errors import PreconditionError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

logger = logging.getLogger(__name__)

ENV_PREFIX = "PYSATL_BINNED_"


@dataclass(frozen=True, slots=True)
class BinnedConfig:
    """
    Defaults for generators and random functions.

    Parameters
    ----------
    default_seed : int, default=1
        Seed of the generator created for a random function when the caller
        does not supply one.
    max_cdf_table_size : int, default=1_000_000
        Upper bound on the size of the inverse-CDF lookup table.
    gaussian_truncation : float, default=4.0
        Half-width of the Gaussian initializer's domain in units of sigma.
    smoothing_truncation : float, default=3.0
        Radius of the Gaussian smoothing kernel in units of sigma.
    """

    default_seed: int = 1
    max_cdf_table_size: int = 1_000_000
    gaussian_truncation: float = 4.0
    smoothing_truncation: float = 3.0

    def __post_init__(self) -> None:
        if self.max_cdf_table_size < 1:
            raise PreconditionError("BinnedConfig", "max_cdf_table_size must be positive")
        if self.gaussian_truncation <= 0:
            raise PreconditionError("BinnedConfig", "gaussian_truncation must be positive")
        if self.smoothing_truncation <= 0:
            raise PreconditionError("BinnedConfig", "smoothing_truncation must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BinnedConfig:
        """
        Build a configuration from environment variables.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Variables to read; defaults to :data:`os.environ`.

        Raises
        ------
        PreconditionError
            If a variable cannot be parsed or the resulting value is invalid.
        """
        env = os.environ if environ is None else environ
        parsers: dict[str, Callable[[str], Any]] = {
            "default_seed": int,
            "max_cdf_table_size": int,
            "gaussian_truncation": float,
            "smoothing_truncation": float,
        }

        overrides: dict[str, Any] = {}
        for field, parse in parsers.items():
            raw = env.get(ENV_PREFIX + field.upper())
            if raw is None:
                continue
            try:
                overrides[field] = parse(raw)
            except ValueError as exc:
                raise PreconditionError(
                    "BinnedConfig.from_env", f"cannot parse {ENV_PREFIX}{field.upper()}={raw!r}"
                ) from exc

        if overrides:
            logger.debug("Configuration overrides from environment: %s", overrides)
        return replace(cls(), **overrides)


@lru_cache(maxsize=1)
def default_config() -> BinnedConfig:
    """
    Return the process-wide default configuration.

    Returns
    -------
    BinnedConfig
        Defaults with environment overrides applied.
    """
    return BinnedConfig.from_env()


def reset_default_config() -> None:
    """
    Reset the cached default configuration.
    """
    default_config.cache_clear()


__all__ = [
    "BinnedConfig",
    "default_config",
    "reset_default_config",
]
