from __future__ import annotations

import math
import unittest

from app.domain.exceptions import (
    InvalidPriceError,
    InvalidRangeError,
    InvalidSqrtPriceOrderError,
    SpreadMisalignedError,
    SpreadTooNarrowError,
    TickOutOfRangeError,
)
from app.domain.services.univ3_math import (
    MAX_TICK,
    MIN_TICK,
    Q96,
    align_to_tick_spacing,
    compute_liquidity_from_amount0,
    compute_tick_range,
    encode_sqrt_price_x96,
    ensure_tick_bounds,
    price_to_tick,
    sqrt_prices_from_ticks,
    tick_to_price,
)


class PriceToTickTests(unittest.TestCase):
    def test_price_one_is_tick_zero(self):
        self.assertEqual(price_to_tick(1.0), 0)

    def test_uses_floor_for_positive_and_negative_ticks(self):
        self.assertEqual(price_to_tick(2.0), 6931)
        self.assertEqual(price_to_tick(tick_to_price(100.6)), 100)
        self.assertEqual(price_to_tick(tick_to_price(-100.4)), -101)

    def test_round_trip_within_one_tick(self):
        for tick in range(-200_000, 200_001, 997):
            with self.subTest(tick=tick):
                self.assertLessEqual(abs(price_to_tick(tick_to_price(tick)) - tick), 1)

    def test_rejects_non_positive_and_non_finite_prices(self):
        for price in (0, -1.5, math.nan, math.inf):
            with self.subTest(price=price):
                with self.assertRaises(InvalidPriceError):
                    price_to_tick(price)


class AlignToTickSpacingTests(unittest.TestCase):
    def test_rounds_toward_negative_infinity(self):
        self.assertEqual(align_to_tick_spacing(59, 60), 0)
        self.assertEqual(align_to_tick_spacing(60, 60), 60)
        self.assertEqual(align_to_tick_spacing(-1, 60), -60)
        self.assertEqual(align_to_tick_spacing(-60, 60), -60)
        self.assertEqual(align_to_tick_spacing(-61, 60), -120)

    def test_result_is_multiple_not_above_tick(self):
        for spacing in (1, 10, 60, 200):
            for tick in range(-1000, 1001, 37):
                aligned = align_to_tick_spacing(tick, spacing)
                self.assertEqual(aligned % spacing, 0)
                self.assertLessEqual(aligned, tick)
                self.assertLess(tick - aligned, spacing)

    def test_rejects_non_positive_spacing(self):
        with self.assertRaises(ValueError):
            align_to_tick_spacing(10, 0)


class ComputeTickRangeTests(unittest.TestCase):
    def test_centers_spread_on_aligned_tick(self):
        tick_range = compute_tick_range(2.0, 60, 3000)
        self.assertEqual(tick_range.tick_lower, 3900)
        self.assertEqual(tick_range.tick_upper, 9900)

    def test_price_one_is_symmetric(self):
        tick_range = compute_tick_range(1.0, 60, 3000)
        self.assertEqual((tick_range.tick_lower, tick_range.tick_upper), (-3000, 3000))

    def test_valid_inputs_give_aligned_ordered_range(self):
        for price in (0.0001, 0.5, 1.0, 3.7, 2500.0, 1e9):
            for spacing in (1, 10, 60, 200):
                tick_range = compute_tick_range(price, spacing, spacing * 15)
                self.assertLess(tick_range.tick_lower, tick_range.tick_upper)
                self.assertEqual(tick_range.tick_lower % spacing, 0)
                self.assertEqual(tick_range.tick_upper % spacing, 0)
                self.assertGreaterEqual(tick_range.tick_lower, MIN_TICK)
                self.assertLessEqual(tick_range.tick_upper, MAX_TICK)

    def test_spread_narrower_than_spacing_is_checked_first(self):
        with self.assertRaises(SpreadTooNarrowError) as ctx:
            compute_tick_range(1.0, 60, 30)
        self.assertIsInstance(ctx.exception, InvalidRangeError)

    def test_spread_must_be_divisible_by_spacing(self):
        with self.assertRaises(SpreadMisalignedError):
            compute_tick_range(1.0, 60, 90)

    def test_spread_checks_run_before_price_validation(self):
        with self.assertRaises(SpreadTooNarrowError):
            compute_tick_range(-1.0, 60, 30)
        with self.assertRaises(InvalidPriceError):
            compute_tick_range(-1.0, 60, 60)

    def test_upper_bound_is_inclusive(self):
        tick_range = compute_tick_range(tick_to_price(887269.5), 1, 1)
        self.assertEqual(tick_range.tick_upper, MAX_TICK)

    def test_one_tick_past_upper_bound_fails(self):
        with self.assertRaises(TickOutOfRangeError):
            compute_tick_range(tick_to_price(887270.5), 1, 1)

    def test_lower_bound_is_inclusive(self):
        tick_range = compute_tick_range(tick_to_price(-887268.5), 1, 1)
        self.assertEqual(tick_range.tick_lower, MIN_TICK)

    def test_one_tick_past_lower_bound_fails(self):
        with self.assertRaises(TickOutOfRangeError):
            compute_tick_range(tick_to_price(-887269.5), 1, 1)

    def test_ensure_tick_bounds_uses_narrowed_limit(self):
        ensure_tick_bounds(-887270, 887270)
        with self.assertRaises(TickOutOfRangeError):
            ensure_tick_bounds(-887271, 0)
        with self.assertRaises(TickOutOfRangeError):
            ensure_tick_bounds(0, 887271)


class SqrtPriceTests(unittest.TestCase):
    def test_encodes_exact_squares(self):
        self.assertEqual(encode_sqrt_price_x96(1.0), Q96)
        self.assertEqual(encode_sqrt_price_x96(4.0), 2 * Q96)
        self.assertEqual(encode_sqrt_price_x96(0.25), Q96 // 2)

    def test_floors_the_encoded_value(self):
        value = encode_sqrt_price_x96(2.0)
        self.assertEqual(value, math.floor(math.sqrt(2.0) * float(Q96)))
        self.assertLess(value, 2**160)

    def test_rejects_invalid_prices(self):
        for price in (0, -4.0, math.nan, math.inf):
            with self.subTest(price=price):
                with self.assertRaises(InvalidPriceError):
                    encode_sqrt_price_x96(price)

    def test_sqrt_prices_from_ticks_requires_ordered_ticks(self):
        lower, upper = sqrt_prices_from_ticks(-600, 600)
        self.assertLess(lower, Q96)
        self.assertGreater(upper, Q96)
        with self.assertRaises(InvalidSqrtPriceOrderError):
            sqrt_prices_from_ticks(600, 600)


class LiquidityFromAmount0Tests(unittest.TestCase):
    def test_closed_form_with_integer_division(self):
        self.assertEqual(compute_liquidity_from_amount0(Q96, 2 * Q96, 1000), 2000)
        self.assertEqual(compute_liquidity_from_amount0(3, 5, Q96), 7)

    def test_strictly_increasing_in_amount0(self):
        lower, upper = sqrt_prices_from_ticks(-600, 600)
        previous = -1
        for amount0 in (1, 2, 3, 10, 10**6, 10**18, 10**30):
            liquidity = compute_liquidity_from_amount0(lower, upper, amount0)
            self.assertGreater(liquidity, previous)
            previous = liquidity

    def test_zero_amount_gives_zero_liquidity(self):
        lower, upper = sqrt_prices_from_ticks(-600, 600)
        self.assertEqual(compute_liquidity_from_amount0(lower, upper, 0), 0)

    def test_rejects_degenerate_or_reversed_bounds(self):
        with self.assertRaises(InvalidSqrtPriceOrderError):
            compute_liquidity_from_amount0(10, 10, 1)
        with self.assertRaises(InvalidSqrtPriceOrderError):
            compute_liquidity_from_amount0(11, 10, 1)


if __name__ == "__main__":
    unittest.main()
