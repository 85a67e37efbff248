"""
Data source 테스트 (정적 소스)
"""

import asyncio

import pytest

from ..data.sources import StaticPositionSource, StaticPriceSource
from ..data.types import LiquidityPosition, PriceRange
from ..errors import PriceUnavailableError


class TestStaticSources:
    """StaticPositionSource / StaticPriceSource 테스트"""

    def test_positions_for_wallet(self):
        position = LiquidityPosition("p1", "A/B", PriceRange(1800.0, 2200.0), 10.0)
        source = StaticPositionSource({"wallet-1": [position]})

        assert asyncio.run(source.fetch_live_positions("wallet-1")) == [position]
        assert asyncio.run(source.fetch_live_positions("unknown")) == []

    def test_price(self, ab_pair):
        source = StaticPriceSource({"A/B": 2000.0})
        assert asyncio.run(source.fetch_current_price(ab_pair)) == 2000.0

    def test_missing_price(self, sol_pair):
        source = StaticPriceSource({"A/B": 2000.0})
        with pytest.raises(PriceUnavailableError) as exc_info:
            asyncio.run(source.fetch_current_price(sol_pair))
        assert exc_info.value.pair_id == "SOL/USDC"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
