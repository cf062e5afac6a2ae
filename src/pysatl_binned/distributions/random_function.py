"""
Binned Random Function
======================

:class:`RandomFunction` — a discretized probability distribution over a
continuous scalar domain ``[min_v, max_v]`` split into bins of equal width.

Bin ``i`` covers ``[min_v + i*w, min_v + (i+1)*w)`` and is represented by the
value ``get_val(i) = min_v + i*w``. Weights are non-negative and become a
probability mass after :meth:`RandomFunction.normalize`.

Typical use::

    rf = RandomFunction(generator=ParkMillerGenerator(seed=7))
    rf.set_gaussian(mean=5.0, sigma=1.0, w=0.01)
    rf.set_cdf(100)
    x = rf.sample()

Notes
-----
- Every operation that changes the weights drops the CDF lookup table; call
  :meth:`RandomFunction.set_cdf` again before relying on O(1) sampling.
- Hard preconditions raise :class:`~pysatl_binned.errors.PreconditionError`.
  Degenerate (all-zero) distributions make :meth:`RandomFunction.normalize`
  and :meth:`RandomFunction.set_cdf` return ``False``. Point edits and point
  queries outside the domain are silently ignored.
- Instances are not thread-safe and share nothing but the generator they
  were given.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_binned.config import BinnedConfig, default_config
from pysatl_binned.containers.kernels import gaussian_kernel
from pysatl_binned.containers.numpy_vector import NumpyBinVector
from pysatl_binned.distributions.cdf_state import CDF_UNINITIALIZED, CdfBuilt
from pysatl_binned.distributions.sampling import ArraySample
from pysatl_binned.distributions.serialization import BinnedHeader, read_binned, write_binned
from pysatl_binned.distributions.support import BinnedSupport
from pysatl_binned.errors import EmptyDistributionError, PreconditionError
from pysatl_binned.generator import ParkMillerGenerator

if TYPE_CHECKING:
    from typing import IO

    from numpy.typing import ArrayLike

    from pysatl_binned.containers.protocol import BinVector
    from pysatl_binned.distributions.cdf_state import CdfState
    from pysatl_binned.types import FloatArray

logger = logging.getLogger(__name__)

POISSON_MAX_LAMBDA = 100.0
POISSON_SMALL_LAMBDA = 10.0
POISSON_SMALL_SPAN = 15.0
POISSON_LARGE_UPPER = 150.0


class RandomFunction:
    """
    Discretized distribution with equal-width bins.

    Parameters
    ----------
    generator : ParkMillerGenerator, optional
        Source of uniform deviates for sampling. A fresh generator seeded with
        ``config.default_seed`` is created when omitted.
    config : BinnedConfig, optional
        Defaults for table sizes and truncation; :func:`default_config` when
        omitted.
    container : type, default=NumpyBinVector
        :class:`~pysatl_binned.containers.protocol.BinVector` implementation
        used to store the weights.

    Notes
    -----
    A new instance holds a single zero-weight bin at 0 with width 1. Call
    :meth:`init` or one of the ``set_*`` initializers to shape it.
    """

    def __init__(
        self,
        generator: ParkMillerGenerator | None = None,
        config: BinnedConfig | None = None,
        container: type[BinVector] = NumpyBinVector,
    ) -> None:
        self.config = config if config is not None else default_config()
        self.generator = (
            generator if generator is not None else ParkMillerGenerator(self.config.default_seed)
        )
        self._container = container
        self._pdf: BinVector = container(1, 1)
        self._cnt = 1
        self._min_v = 0.0
        self._w = 1.0
        self._w_inv = 1.0
        self._cdf_state: CdfState = CDF_UNINITIALIZED

    # ------------------------------------------------------------------
    # construction and bin access
    # ------------------------------------------------------------------

    def init(self, min_v: float, max_v: float, w: float) -> None:
        """
        Allocate zero-weight bins covering ``[min_v, max_v]``.

        The bin count is ``round((max_v - min_v) / w) + 1``.

        Parameters
        ----------
        min_v : float
            Representative value of the first bin.
        max_v : float
            Upper end of the domain.
        w : float
            Bin width.

        Raises
        ------
        PreconditionError
            If ``min_v > max_v``, ``w`` is not positive, or the derived bin
            count is not positive.
        """
        if not min_v <= max_v:
            raise PreconditionError(
                "RandomFunction.init", f"min_v ({min_v}) must not exceed max_v ({max_v})"
            )
        if not w > 0:
            raise PreconditionError("RandomFunction.init", f"bin width must be positive, got {w}")

        w_inv = 1.0 / w
        cnt = math.floor((max_v - min_v) * w_inv + 0.5) + 1
        if cnt <= 0:
            raise PreconditionError("RandomFunction.init", f"derived bin count {cnt} is not positive")

        self._min_v = float(min_v)
        self._w = float(w)
        self._w_inv = w_inv
        self._cnt = cnt
        self._pdf = self._container(1, cnt)
        self.set_all_bins(0.0)

    @property
    def count(self) -> int:
        """Number of bins."""
        return self._cnt

    @property
    def bin_width(self) -> float:
        return self._w

    @property
    def min_val(self) -> float:
        """Representative value of the first bin."""
        return self._min_v

    @property
    def max_val(self) -> float:
        """Representative value of the last bin."""
        return self.get_val(self._cnt - 1)

    @property
    def support(self) -> BinnedSupport:
        """Half-open interval covered by the bins."""
        return BinnedSupport(left=self._min_v, width=self._w, count=self._cnt)

    @property
    def cdf_state(self) -> CdfState:
        return self._cdf_state

    @property
    def cdf_initialized(self) -> bool:
        """Whether the fast-sampling lookup table is built."""
        return isinstance(self._cdf_state, CdfBuilt)

    @property
    def weights(self) -> FloatArray:
        """Copy of the bin weights."""
        return self._pdf.to_numpy()

    @property
    def values(self) -> FloatArray:
        """Representative values of all bins."""
        return cast("FloatArray", self._min_v + np.arange(self._cnt, dtype=np.float64) * self._w)

    def get_val(self, index: int) -> float:
        """Representative value ``min_v + index * w`` of bin ``index``."""
        return self._min_v + index * self._w

    def get_index(self, x: float) -> int:
        """
        Bin index containing ``x``.

        The result is not clipped and may fall outside ``[0, count)``. ``x``
        must be finite and close enough to the domain for the index to be
        representable.
        """
        return math.floor((x - self._min_v) * self._w_inv)

    def in_range(self, index: int) -> bool:
        return 0 <= index < self._cnt

    def _scaled(self, x: float) -> float:
        return (x - self._min_v) * self._w_inv

    def _bin_of(self, x: float) -> int | None:
        """Bin containing ``x``, or ``None`` outside the domain (NaN included)."""
        scaled = self._scaled(x)
        if not 0.0 <= scaled < self._cnt:
            return None
        return math.floor(scaled)

    def _invalidate_cdf(self) -> None:
        self._cdf_state = CDF_UNINITIALIZED

    def set_all_bins(self, p: float) -> None:
        """Set every bin weight to ``p``."""
        self._pdf.fill(p)
        self._invalidate_cdf()

    def set_one_bin(self, x: float, p: float) -> None:
        """Set the weight of the bin containing ``x``; no-op outside the domain."""
        index = self._bin_of(x)
        if index is not None:
            self._pdf[index] = p
        self._invalidate_cdf()

    def add_to_bin(self, x: float, p: float) -> None:
        """Add ``p`` to the bin containing ``x``; no-op outside the domain."""
        index = self._bin_of(x)
        if index is not None:
            self._pdf[index] += p
        self._invalidate_cdf()

    def accumulate(self, xs: ArrayLike, p: float = 1.0) -> int:
        """
        Add ``p`` to the bin of every observation in ``xs``.

        Observations outside the domain are skipped.

        Parameters
        ----------
        xs : array_like
            Observed values.
        p : float, default=1.0
            Weight added per observation.

        Returns
        -------
        int
            Number of observations that landed in a bin.
        """
        arr = np.asarray(xs, dtype=np.float64).reshape(-1)
        indices = np.floor((arr - self._min_v) * self._w_inv)
        mask = (indices >= 0) & (indices < self._cnt)
        self._pdf.add_at(indices[mask].astype(np.intp), p)
        self._invalidate_cdf()
        return int(mask.sum())

    def normalize(self) -> bool:
        """
        Rescale the weights to sum to one.

        Returns
        -------
        bool
            ``False`` if the weights sum to zero or less, in which case they
            are left unchanged.
        """
        self._invalidate_cdf()
        total = self._pdf.sum()
        if total > 0.0:
            self._pdf.scale(1.0 / total)
            return True
        return False

    # ------------------------------------------------------------------
    # analytic initializers
    # ------------------------------------------------------------------

    def set_uniform(self, min_v: float, max_v: float, w: float) -> None:
        """Flat distribution over the bins of ``[min_v, max_v]``."""
        self.init(min_v, max_v, w)
        self.set_all_bins(1.0)
        self.normalize()

    def set_uniform_int(self, min_v: int, max_v: int) -> None:
        """Flat distribution over the integers ``min_v..max_v``."""
        self.init(float(min_v), float(max_v), 1.0)
        self.set_all_bins(1.0)
        self.normalize()

    def set_gaussian(self, mean: float, sigma: float, w: float) -> None:
        """
        Gaussian density sampled at the bin values of ``mean ± t*sigma``.

        ``t`` is ``config.gaussian_truncation`` (4 by default); the weights
        are renormalized to absorb the truncated tails.

        Raises
        ------
        PreconditionError
            If ``sigma`` is not positive.
        """
        if not sigma > 0:
            raise PreconditionError(
                "RandomFunction.set_gaussian", f"sigma must be positive, got {sigma}"
            )
        half = self.config.gaussian_truncation * sigma
        self.init(mean - half, mean + half, w)

        x = self.values - mean
        density = np.exp(-(x**2) / (2.0 * sigma**2)) / (math.sqrt(2.0 * math.pi) * sigma)
        self._pdf.assign(cast("FloatArray", density))
        self.normalize()

    def set_poisson(self, lam: float) -> None:
        """
        Poisson mass function with rate ``lam`` on integer bins.

        The domain is ``[0, 15*lam]`` for ``lam < 10`` and ``[0, 150]``
        otherwise. Weights follow ``lam**i / (exp(lam) * i!)`` with the
        factorial accumulated bin by bin.

        Raises
        ------
        PreconditionError
            If ``lam > 100``; the factorial recurrence is not accurate beyond.
        """
        if lam > POISSON_MAX_LAMBDA:
            raise PreconditionError(
                "RandomFunction.set_poisson",
                f"only works for lambda <= {POISSON_MAX_LAMBDA:g}, got {lam}",
            )
        if lam < POISSON_SMALL_LAMBDA:
            self.init(0.0, POISSON_SMALL_SPAN * lam, 1.0)
        else:
            self.init(0.0, POISSON_LARGE_UPPER, 1.0)

        i = np.arange(self._cnt, dtype=np.float64)
        factorial = np.cumprod(np.maximum(i, 1.0))
        mass = np.power(lam, i) / (math.exp(lam) * factorial)
        self._pdf.assign(cast("FloatArray", mass))
        self.normalize()

    # ------------------------------------------------------------------
    # smoothing
    # ------------------------------------------------------------------

    def gauss_smooth(self, sigma: float) -> None:
        """
        Convolve the weights with a Gaussian of ``sigma`` bins and renormalize.

        Raises
        ------
        PreconditionError
            If ``sigma`` is not positive.
        """
        kernel = gaussian_kernel(sigma, truncate=self.config.smoothing_truncation)
        logger.debug("Gaussian smoothing with sigma=%g (%d taps)", sigma, kernel.size)
        self.smooth(kernel)

    def smooth(self, kernel: ArrayLike) -> None:
        """
        Convolve the weights with a 1-row ``kernel`` and renormalize.

        Raises
        ------
        PreconditionError
            If ``kernel`` has more than one row.
        """
        k = np.asarray(kernel, dtype=np.float64)
        if not (k.ndim == 1 or (k.ndim == 2 and k.shape[0] == 1)):
            raise PreconditionError(
                "RandomFunction.smooth", f"kernel must have exactly one row, got shape {k.shape}"
            )
        self._pdf = self._pdf.convolve_horizontal(cast("FloatArray", k))
        self.normalize()

    # ------------------------------------------------------------------
    # statistics and evaluation
    # ------------------------------------------------------------------

    def pdf(self, x: float) -> float:
        """Weight of the bin containing ``x``; 0 outside the domain."""
        index = self._bin_of(x)
        if index is None:
            return 0.0
        return self._pdf[index]

    def cdf(self, x: float) -> float:
        """
        Cumulative weight up to and including the bin containing ``x``.

        Uses the prefix sums of the lookup table when it is built; otherwise
        sums the bins on demand.

        Returns
        -------
        float
            1.0 beyond the last bin, 0.0 before the first and for NaN.
        """
        scaled = self._scaled(x)
        if scaled >= self._cnt:
            return 1.0
        if not scaled >= 0.0:
            return 0.0
        index = math.floor(scaled)
        match self._cdf_state:
            case CdfBuilt(prefix_sums=prefix):
                return float(prefix[index])
            case _:
                return float(self.weights[: index + 1].sum())

    def mean(self) -> float:
        return float(np.dot(self.weights, self.values))

    def variance(self) -> float:
        """Second central moment, ``E[X^2] - E[X]^2``."""
        weights, values = self.weights, self.values
        ex = float(np.dot(weights, values))
        ex2 = float(np.dot(weights, values * values))
        return ex2 - ex * ex

    def describe(self) -> str:
        """One-line summary terminated by a newline."""
        return (
            f"mean={self.mean():g} variance={self.variance():g}"
            f" minV={self.min_val:g} maxV={self.max_val:g}"
            f" cdfSet={int(self.cdf_initialized)}\n"
        )

    __str__ = describe

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(min_v={self._min_v!r}, w={self._w!r}, "
            f"count={self._cnt}, cdf_initialized={self.cdf_initialized})"
        )

    # ------------------------------------------------------------------
    # sampling
    # ------------------------------------------------------------------

    def set_cdf(self, count_per_bin: int) -> bool:
        """
        Normalize and build the inverse-CDF lookup table.

        Parameters
        ----------
        count_per_bin : int
            Table entries per bin; values below 1 are treated as 1. The table
            size is capped at ``config.max_cdf_table_size``.

        Returns
        -------
        bool
            ``False`` if the distribution is degenerate (zero mass).
        """
        if not self.normalize():
            logger.warning("Cannot build CDF lookup table: distribution has no mass")
            return False
        count_per_bin = max(count_per_bin, 1)
        size = min(self.config.max_cdf_table_size, count_per_bin * self._cnt)
        self._cdf_state = CdfBuilt.from_weights(self.weights, size)
        return True

    def sample_non_set_cdf(self, cumsum: float = 0.0) -> float:
        """
        Draw a bin value by scanning the weights.

        Parameters
        ----------
        cumsum : float, default=0.0
            Total weight used to scale the uniform target. Zero means "use the
            current total". If the scan runs past the last bin because the
            given total was too large, the draw is repeated with the current
            total.

        Returns
        -------
        float
            Representative value of the selected bin.

        Raises
        ------
        EmptyDistributionError
            If the weights sum to zero.
        """
        weights = self.weights
        running = np.cumsum(weights)
        total = float(running[-1])
        if cumsum == 0:
            cumsum = total
        if cumsum == 0 or total == 0:
            raise EmptyDistributionError(
                "RandomFunction.sample_non_set_cdf", "cannot sample from an empty pdf"
            )

        target = self.generator.uniform_float() * cumsum
        hits = np.flatnonzero((running >= target) & (weights > 0.0))
        if hits.size == 0:
            logger.warning(
                "Scan exhausted with cumulative total %g; resampling with live total %g",
                cumsum,
                total,
            )
            return self.sample_non_set_cdf()
        return self.get_val(int(hits[0]))

    def sample(self) -> float:
        """
        Draw a bin value.

        O(1) through the lookup table when :meth:`set_cdf` has been called
        since the last mutation; falls back to :meth:`sample_non_set_cdf`
        otherwise.
        """
        match self._cdf_state:
            case CdfBuilt(lookup=lookup):
                j = int(self.generator.uniform_float() * lookup.size)
                return self.get_val(int(lookup[j]))
            case _:
                return self.sample_non_set_cdf()

    def sample_many(self, n: int) -> ArraySample:
        """
        Draw ``n`` values.

        Returns
        -------
        ArraySample
            Draws as an array of shape ``(n, 1)``.
        """
        match self._cdf_state:
            case CdfBuilt(lookup=lookup):
                u = self.generator.uniform_floats(n)
                bins = lookup[(u * lookup.size).astype(np.intp)]
                draws = self._min_v + bins * self._w
            case _:
                draws = np.fromiter(
                    (self.sample_non_set_cdf() for _ in range(n)), dtype=np.float64, count=n
                )
        return ArraySample.from_values(cast("FloatArray", draws))

    # ------------------------------------------------------------------
    # persistence
    # ------------------------------------------------------------------

    def write_to_stream(self, stream: IO[bytes]) -> None:
        """Serialize the weights and bin geometry; the CDF cache is not stored."""
        header = BinnedHeader(count=self._cnt, min_v=self._min_v, w=self._w, w_inv=self._w_inv)
        write_binned(stream, self._pdf, header)

    def read_from_stream(self, stream: IO[bytes]) -> None:
        """
        Replace this instance's contents with a record from ``stream``.

        The CDF cache is reset regardless of the state it was in when the
        record was written.

        Raises
        ------
        SerializationError
            If the record is truncated or inconsistent.
        """
        self._invalidate_cdf()
        weights, header = read_binned(stream, self._container)
        self._pdf = weights
        self._cnt = header.count
        self._min_v = header.min_v
        self._w = header.w
        self._w_inv = header.w_inv

    @classmethod
    def from_stream(
        cls,
        stream: IO[bytes],
        generator: ParkMillerGenerator | None = None,
        config: BinnedConfig | None = None,
    ) -> RandomFunction:
        """Decode a new instance from ``stream``."""
        rf = cls(generator=generator, config=config)
        rf.read_from_stream(stream)
        return rf


__all__ = [
    "RandomFunction",
]
