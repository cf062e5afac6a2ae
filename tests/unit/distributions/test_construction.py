from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_binned.containers import NumpyBinVector
from pysatl_binned.distributions import CDF_UNINITIALIZED, RandomFunction
from pysatl_binned.errors import PreconditionError
from tests.unit.distributions.base import BaseRandomFunctionTest


class TestInit(BaseRandomFunctionTest):
    @pytest.mark.parametrize(
        "min_v, max_v, w, expected_count",
        [
            (0.0, 9.0, 1.0, 10),
            (0.0, 0.0, 1.0, 1),
            (-1.0, 1.0, 0.5, 5),
            (0.0, 1.0, 0.3, 4),
            (1.0, 9.0, 0.01, 801),
        ],
    )
    def test_bin_count(self, min_v: float, max_v: float, w: float, expected_count: int) -> None:
        rf = self.make_rf()
        rf.init(min_v, max_v, w)

        assert rf.count == expected_count
        assert rf.weights.shape == (expected_count,)
        assert rf.weights.sum() == 0.0
        assert rf.cdf_state is CDF_UNINITIALIZED

    @pytest.mark.parametrize(
        "min_v, max_v, w",
        [(1.0, 0.0, 1.0), (0.0, 1.0, 0.0), (0.0, 1.0, -0.5), (0.0, 1.0, float("nan"))],
        ids=["reversed_domain", "zero_width", "negative_width", "nan_width"],
    )
    def test_invalid_domain_raises(self, min_v: float, max_v: float, w: float) -> None:
        with pytest.raises(PreconditionError, match=r"^RandomFunction\.init: "):
            self.make_rf().init(min_v, max_v, w)

    def test_precondition_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            self.make_rf().init(1.0, 0.0, 1.0)

    def test_geometry_accessors(self) -> None:
        rf = self.make_rf()
        rf.init(-2.0, 2.0, 0.5)

        assert rf.min_val == -2.0
        assert rf.max_val == 2.0
        assert rf.bin_width == 0.5
        assert rf.get_val(3) == -0.5
        self.assert_arrays_almost_equal(rf.values, np.linspace(-2.0, 2.0, 9))

    def test_default_instance(self) -> None:
        rf = RandomFunction()
        assert rf.count == 1
        assert rf.generator.initial_seed == rf.config.default_seed

    def test_custom_container(self) -> None:
        class TracingVector(NumpyBinVector):
            __slots__ = ()

        rf = RandomFunction(container=TracingVector)
        rf.set_uniform_int(0, 3)
        assert rf.weights.sum() == pytest.approx(1.0)
        assert isinstance(rf._pdf, TracingVector)


class TestBinAccess(BaseRandomFunctionTest):
    @pytest.mark.parametrize(
        "x, expected_index",
        [(0.0, 0), (3.5, 3), (9.99, 9), (-0.5, -1), (10.0, 10), (123.0, 123)],
    )
    def test_get_index(self, x: float, expected_index: int) -> None:
        rf = self.make_rf()
        rf.init(0.0, 9.0, 1.0)
        assert rf.get_index(x) == expected_index

    @pytest.mark.parametrize("index, expected", [(-1, False), (0, True), (9, True), (10, False)])
    def test_in_range(self, index: int, expected: bool) -> None:
        rf = self.make_rf()
        rf.init(0.0, 9.0, 1.0)
        assert rf.in_range(index) is expected

    def test_set_all_bins(self) -> None:
        rf = self.make_rf()
        rf.init(0.0, 4.0, 1.0)
        rf.set_all_bins(2.0)
        self.assert_arrays_almost_equal(rf.weights, np.full(5, 2.0))

    def test_set_one_bin_and_add_to_bin(self) -> None:
        rf = self.make_rf()
        rf.init(0.0, 4.0, 1.0)
        rf.set_one_bin(2.2, 3.0)
        rf.add_to_bin(2.9, 1.5)
        rf.add_to_bin(0.0, 1.0)

        self.assert_arrays_almost_equal(rf.weights, [1.0, 0.0, 4.5, 0.0, 0.0])

    @pytest.mark.parametrize(
        "x", [-0.01, 5.0, 1e9, -1e9, 1e307, -1e307, float("inf"), float("-inf"), float("nan")]
    )
    def test_out_of_range_point_edits_are_ignored(self, x: float) -> None:
        rf = self.make_rf()
        rf.set_uniform_int(0, 4)
        before = rf.weights

        rf.set_one_bin(x, 10.0)
        rf.add_to_bin(x, 10.0)

        self.assert_arrays_almost_equal(rf.weights, before)
        assert rf.weights.sum() == pytest.approx(1.0)

    def test_accumulate_builds_histogram(self) -> None:
        rf = self.make_rf()
        rf.init(0.0, 3.0, 1.0)

        landed = rf.accumulate([0.1, 0.2, 2.5, 3.9, -1.0, 4.0, 17.0])

        assert landed == 4
        self.assert_arrays_almost_equal(rf.weights, [2.0, 0.0, 1.0, 1.0])

    def test_weights_is_a_copy(self) -> None:
        rf = self.make_rf()
        rf.set_uniform_int(0, 2)
        w = rf.weights
        w[:] = 0.0
        assert rf.weights.sum() == pytest.approx(1.0)


class TestNormalize(BaseRandomFunctionTest):
    def test_rescales_to_unit_sum(self) -> None:
        rf = self.make_rf()
        rf.init(0.0, 3.0, 1.0)
        rf.set_all_bins(4.0)

        assert rf.normalize() is True
        self.assert_arrays_almost_equal(rf.weights, np.full(4, 0.25))

    def test_all_zero_returns_false_and_keeps_bins(self) -> None:
        rf = self.make_rf()
        rf.init(0.0, 3.0, 1.0)

        assert rf.normalize() is False
        self.assert_arrays_almost_equal(rf.weights, np.zeros(4))


class TestCdfInvalidation(BaseRandomFunctionTest):
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda rf: rf.set_all_bins(1.0),
            lambda rf: rf.set_one_bin(2.0, 5.0),
            lambda rf: rf.add_to_bin(2.0, 5.0),
            lambda rf: rf.set_one_bin(-100.0, 5.0),
            lambda rf: rf.accumulate([1.0]),
            lambda rf: rf.normalize(),
            lambda rf: rf.gauss_smooth(1.0),
            lambda rf: rf.smooth([0.5, 0.5]),
            lambda rf: rf.init(0.0, 1.0, 1.0),
            lambda rf: rf.set_gaussian(0.0, 1.0, 0.5),
        ],
        ids=[
            "set_all_bins",
            "set_one_bin",
            "add_to_bin",
            "set_one_bin_out_of_range",
            "accumulate",
            "normalize",
            "gauss_smooth",
            "smooth",
            "init",
            "set_gaussian",
        ],
    )
    def test_mutation_drops_lookup_table(self, mutate) -> None:
        rf = self.make_rf()
        rf.set_uniform_int(0, 9)
        assert rf.set_cdf(10)
        assert rf.cdf_initialized

        mutate(rf)

        assert not rf.cdf_initialized
        assert rf.cdf_state is CDF_UNINITIALIZED
