from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_binned.generator import ParkMillerGenerator
from pysatl_binned.generator.park_miller import IM, NTAB, RNMX, _schrage_step


class TestSchrageStep:
    def test_minimal_standard_check_value(self) -> None:
        # Park & Miller (1988): z_10000 = 1043618065 when starting from z_0 = 1
        state = 1
        for _ in range(10_000):
            state = _schrage_step(state)
        assert state == 1043618065

    def test_first_steps_match_plain_modular_product(self) -> None:
        state = 1
        for _ in range(50):
            expected = (16807 * state) % IM
            state = _schrage_step(state)
            assert state == expected


class TestUniformFloat:
    @pytest.mark.parametrize("seed", [1, -7, 0, 123456789, 2**40])
    def test_values_strictly_inside_unit_interval(self, seed: int) -> None:
        gen = ParkMillerGenerator(seed)
        draws = gen.uniform_floats(20_000)

        assert draws.shape == (20_000,)
        assert (draws > 0.0).all()
        assert (draws <= RNMX).all()

    def test_upper_endpoint_is_clamped(self) -> None:
        gen = ParkMillerGenerator(1)
        gen._table = [IM - 1] * NTAB
        gen._last = IM - 1

        assert gen.uniform_float() == RNMX

    def test_same_seed_same_sequence(self) -> None:
        a = ParkMillerGenerator(2024)
        b = ParkMillerGenerator(2024)

        assert [a.uniform_float() for _ in range(100)] == [b.uniform_float() for _ in range(100)]

    def test_different_seeds_differ(self) -> None:
        a = ParkMillerGenerator(1)
        b = ParkMillerGenerator(2)

        assert [a.uniform_float() for _ in range(10)] != [b.uniform_float() for _ in range(10)]

    @pytest.mark.parametrize("seed, equivalent", [(-7, 7), (0, 1)])
    def test_seed_is_sanitized(self, seed: int, equivalent: int) -> None:
        a = ParkMillerGenerator(seed)
        b = ParkMillerGenerator(equivalent)

        assert a.initial_seed == equivalent
        assert [a.uniform_float() for _ in range(20)] == [b.uniform_float() for _ in range(20)]

    def test_reseed_restarts_sequence(self) -> None:
        gen = ParkMillerGenerator(99)
        first = [gen.uniform_float() for _ in range(30)]
        gen.gaussian()
        gen.reseed(99)

        assert [gen.uniform_float() for _ in range(30)] == first

    def test_mean_is_one_half(self) -> None:
        draws = ParkMillerGenerator(31337).uniform_floats(50_000)
        assert float(draws.mean()) == pytest.approx(0.5, abs=0.01)


class TestUniformInt:
    def test_closed_range(self) -> None:
        gen = ParkMillerGenerator(5)
        draws = [gen.uniform_int(3, 7) for _ in range(5_000)]

        assert min(draws) == 3
        assert max(draws) == 7
        assert set(draws) == {3, 4, 5, 6, 7}

    def test_degenerate_range(self) -> None:
        gen = ParkMillerGenerator(5)
        assert all(gen.uniform_int(4, 4) == 4 for _ in range(100))

    def test_negative_bounds(self) -> None:
        gen = ParkMillerGenerator(8)
        draws = {gen.uniform_int(-2, 1) for _ in range(2_000)}
        assert draws == {-2, -1, 0, 1}


class TestGaussian:
    def test_spare_deviate_is_reused(self) -> None:
        standard = ParkMillerGenerator(5)
        shifted = ParkMillerGenerator(5)

        z1, z2 = standard.gaussian(), standard.gaussian()
        x1, x2 = shifted.gaussian(10.0, 2.0), shifted.gaussian(10.0, 2.0)

        assert x1 == pytest.approx(10.0 + 2.0 * z1)
        assert x2 == pytest.approx(10.0 + 2.0 * z2)
        assert z1 != z2

    def test_second_call_draws_no_uniforms(self) -> None:
        gen = ParkMillerGenerator(17)
        gen.gaussian()
        state_after_first = gen._state
        gen.gaussian()

        assert gen._state == state_after_first

    def test_moments(self) -> None:
        gen = ParkMillerGenerator(271828)
        draws = np.array([gen.gaussian(3.0, 2.0) for _ in range(40_000)])

        assert float(draws.mean()) == pytest.approx(3.0, abs=0.05)
        assert float(draws.std()) == pytest.approx(2.0, abs=0.05)


class TestRandomSubsetPermutation:
    @pytest.mark.parametrize("n, k", [(10, 3), (10, 10), (1, 1), (50, 0), (7, 5)])
    def test_distinct_values_in_range(self, n: int, k: int) -> None:
        gen = ParkMillerGenerator(3)
        subset = gen.random_subset_permutation(n, k)

        assert len(subset) == k
        assert len(set(subset)) == k
        assert all(0 <= v < n for v in subset)

    @pytest.mark.parametrize(
        "n, k, expected_len",
        [(5, -3, 0), (5, 9, 5), (5, None, 5), (0, 3, 0)],
        ids=["negative_k", "k_above_n", "full_permutation", "empty_range"],
    )
    def test_k_is_clamped(self, n: int, k: int | None, expected_len: int) -> None:
        gen = ParkMillerGenerator(3)
        assert len(gen.random_subset_permutation(n, k)) == expected_len

    def test_full_permutation_is_a_permutation(self) -> None:
        gen = ParkMillerGenerator(11)
        assert sorted(gen.random_subset_permutation(20)) == list(range(20))

    def test_positions_are_uniform(self) -> None:
        gen = ParkMillerGenerator(12345)
        n, trials = 4, 4_000
        counts = np.zeros((n, n), dtype=int)
        for _ in range(trials):
            for position, value in enumerate(gen.random_subset_permutation(n, n)):
                counts[position, value] += 1

        freqs = counts / trials
        np.testing.assert_allclose(freqs, np.full((n, n), 1.0 / n), atol=0.04)
