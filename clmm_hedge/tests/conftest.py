"""
공통 fixture

테스트용 "A/B" 페어와 레지스트리.
"""

import pytest

from ..data.registry import PoolRegistry
from ..data.types import Pair, Token
from ..engine import HedgeEngine


@pytest.fixture
def ab_pair():
    return Pair(
        pair_id="A/B",
        token_a=Token(symbol="A", decimals=9),
        token_b=Token(symbol="B", decimals=6),
        tick_spacing=64,
        fee_rate=3000,
    )


@pytest.fixture
def sol_pair():
    return Pair(
        pair_id="SOL/USDC",
        token_a=Token(symbol="SOL", decimals=9),
        token_b=Token(symbol="USDC", decimals=6),
        tick_spacing=64,
        fee_rate=3000,
        pool_address="pool-sol-usdc",
    )


@pytest.fixture
def registry(ab_pair, sol_pair):
    return PoolRegistry([ab_pair, sol_pair])


@pytest.fixture
def engine(registry):
    return HedgeEngine(registry)
