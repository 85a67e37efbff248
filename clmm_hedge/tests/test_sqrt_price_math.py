"""
Sqrt Price Math 테스트

Whirlpool Q64.64 sqrt price 및 온체인 유동성 변환.
"""

import pytest

from ..constants import Q64
from ..math.curve_math import token_amounts
from ..math.sqrt_price_math import (
    price_to_sqrt_price_x64,
    raw_liquidity_to_human,
    sqrt_price_x64_to_price,
)
from ..math.tick_math import tick_to_price


class TestSqrtPriceX64:
    """sqrtPriceX64 변환 테스트"""

    def test_q64_is_price_one_same_decimals(self):
        assert sqrt_price_x64_to_price(Q64, 6, 6) == pytest.approx(1.0)

    def test_q64_sol_usdc(self):
        """raw 가격 1 = SOL/USDC 1000"""
        assert sqrt_price_x64_to_price(Q64, 9, 6) == pytest.approx(1000.0)

    def test_roundtrip(self):
        for price in [0.5, 23.7, 150.0, 2000.0]:
            encoded = price_to_sqrt_price_x64(price, 9, 6)
            assert sqrt_price_x64_to_price(encoded, 9, 6) == pytest.approx(price, rel=1e-9)

    def test_invalid(self):
        with pytest.raises(ValueError):
            sqrt_price_x64_to_price(0)
        with pytest.raises(ValueError):
            price_to_sqrt_price_x64(-1.0)


class TestRawLiquidity:
    """raw_liquidity_to_human 테스트"""

    def test_human_amounts_match_raw_amounts(self):
        """human 유동성으로 계산한 수량 = raw 수량 / 10^decimals"""
        decimals_a, decimals_b = 9, 6
        raw_liquidity = 123_456_789_000
        low_raw = tick_to_price(-20000, 0, 0)
        high_raw = tick_to_price(-18000, 0, 0)
        price_raw = tick_to_price(-19000, 0, 0)

        raw_a, raw_b = token_amounts(raw_liquidity, low_raw, high_raw, price_raw)

        human_liquidity = raw_liquidity_to_human(raw_liquidity, decimals_a, decimals_b)
        human_a, human_b = token_amounts(
            human_liquidity,
            tick_to_price(-20000, decimals_a, decimals_b),
            tick_to_price(-18000, decimals_a, decimals_b),
            tick_to_price(-19000, decimals_a, decimals_b),
        )

        assert human_a == pytest.approx(raw_a / 10 ** decimals_a, rel=1e-9)
        assert human_b == pytest.approx(raw_b / 10 ** decimals_b, rel=1e-9)

    def test_negative_liquidity(self):
        with pytest.raises(ValueError):
            raw_liquidity_to_human(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
