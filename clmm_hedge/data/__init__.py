"""
Data layer for CLMM Hedge Engine

페어/포지션 데이터 타입, 풀 레지스트리, 외부 데이터 소스 인터페이스
"""

from .types import (
    Token,
    Pair,
    PriceRange,
    RangeStatus,
    LiquidityPosition,
    OnChainPosition,
    PositionReport,
)
from .registry import PoolRegistry
from .sources import PositionSource, PriceSource, StaticPositionSource, StaticPriceSource
