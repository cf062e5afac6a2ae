"""
Park–Miller Generator
=====================

Seedable pseudorandom generator built on the Park–Miller "minimal standard"
linear congruential generator with a Bays–Durham shuffle table.

- :class:`ParkMillerGenerator` — caller-owned generator object producing
  uniform floats, uniform integers, Gaussian deviates and random
  permutations/subsets.

Notes
-----
- The sequence is a deterministic function of the constructor seed. Two
  instances created with the same seed produce identical streams.
- Generators are not thread-safe. Concurrent callers must either own separate
  instances or serialize access themselves.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

IA = 16807
IM = 2147483647
AM = 1.0 / IM
IQ = 127773
IR = 2836
NTAB = 32
NDIV = 1 + (IM - 1) // NTAB
EPS = 1.2e-7
RNMX = 1.0 - EPS
WARMUP_STEPS = 8


def _schrage_step(state: int) -> int:
    """Compute ``(IA * state) % IM`` with Schrage's factorization."""
    k = state // IQ
    state = IA * (state - k * IQ) - IR * k
    if state < 0:
        state += IM
    return state


class ParkMillerGenerator:
    """
    Park–Miller minimal standard generator with Bays–Durham shuffle.

    Parameters
    ----------
    seed : int, default=1
        Initial seed. Its absolute value is used; zero is replaced by 1.

    Attributes
    ----------
    initial_seed : int
        The seed the current sequence was started from (after sanitizing).

    Notes
    -----
    Instances are not safe for concurrent use from several threads.
    """

    __slots__ = ("initial_seed", "_state", "_table", "_last", "_gauss_spare", "_has_spare")

    def __init__(self, seed: int = 1) -> None:
        self.initial_seed = 1
        self._state = 1
        self._table = [0] * NTAB
        self._last = 0
        self._gauss_spare = 0.0
        self._has_spare = False
        self.reseed(seed)

    def reseed(self, seed: int) -> None:
        """
        Restart the sequence from ``seed``.

        The shuffle table is refilled after eight warm-up steps and any cached
        Gaussian deviate is discarded.

        Parameters
        ----------
        seed : int
            New seed. Its absolute value is used; zero is replaced by 1.
        """
        self.initial_seed = abs(int(seed)) % IM or 1

        state = self.initial_seed
        for j in range(NTAB + WARMUP_STEPS - 1, -1, -1):
            state = _schrage_step(state)
            if j < NTAB:
                self._table[j] = state

        self._state = state
        self._last = self._table[0]
        self._gauss_spare = 0.0
        self._has_spare = False
        logger.debug("Park-Miller generator seeded with %d", self.initial_seed)

    def uniform_float(self) -> float:
        """
        Draw a uniform deviate.

        Returns
        -------
        float
            A value in ``(0, 1 - 1.2e-7]``; neither endpoint of ``(0, 1)`` is
            ever returned.
        """
        self._state = _schrage_step(self._state)
        j = self._last // NDIV
        self._last = self._table[j]
        self._table[j] = self._state
        return min(AM * self._last, RNMX)

    def uniform_floats(self, n: int) -> npt.NDArray[np.float64]:
        """
        Draw ``n`` successive uniform deviates.

        Parameters
        ----------
        n : int
            Number of draws.

        Returns
        -------
        numpy.ndarray
            1D float64 array of length ``n``.
        """
        return np.fromiter((self.uniform_float() for _ in range(n)), dtype=np.float64, count=n)

    def uniform_int(self, low: int, high: int) -> int:
        """
        Draw a uniform integer from the closed range ``[low, high]``.

        Parameters
        ----------
        low : int
            Lower bound (inclusive).
        high : int
            Upper bound (inclusive).

        Returns
        -------
        int
            ``low + floor((high - low + 1) * u)`` for a uniform deviate ``u``.

        Notes
        -----
        The result is undefined when ``low > high``; callers must not rely on
        any particular value in that case.
        """
        return low + int(math.floor((high - low + 1) * self.uniform_float()))

    def gaussian(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        """
        Draw a Gaussian deviate with the Box–Muller polar method.

        Each accepted pair of uniforms yields two independent standard normals;
        the second one is cached and returned by the next call.

        Parameters
        ----------
        mean : float, default=0.0
            Location of the distribution.
        sigma : float, default=1.0
            Standard deviation.

        Returns
        -------
        float
            ``mean + sigma * z`` for a standard normal ``z``.
        """
        if self._has_spare:
            self._has_spare = False
            return mean + sigma * self._gauss_spare

        while True:
            x1 = 2.0 * self.uniform_float() - 1.0
            x2 = 2.0 * self.uniform_float() - 1.0
            wid = x1 * x1 + x2 * x2
            if 0.0 < wid < 1.0:
                break

        factor = math.sqrt(-2.0 * math.log(wid) / wid)
        self._gauss_spare = x2 * factor
        self._has_spare = True
        return mean + sigma * x1 * factor

    def random_subset_permutation(self, n: int, k: int | None = None) -> list[int]:
        """
        Draw ``k`` distinct integers from ``[0, n)`` in random order.

        A partial Fisher–Yates shuffle of the identity permutation: position
        ``i`` is swapped with a uniformly chosen position in ``[i, n)`` for
        every ``i < k``, and the first ``k`` entries are returned.

        Parameters
        ----------
        n : int
            Size of the index range.
        k : int, optional
            Number of values to draw, clamped into ``[0, n]``. ``None`` draws a
            full permutation.

        Returns
        -------
        list[int]
            ``k`` distinct values from ``[0, n)``.
        """
        n = max(n, 0)
        k = n if k is None else min(max(k, 0), n)

        permuted = list(range(n))
        for i in range(k):
            r = self.uniform_int(i, n - 1)
            permuted[i], permuted[r] = permuted[r], permuted[i]
        return permuted[:k]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.initial_seed})"


__all__ = [
    "ParkMillerGenerator",
]
