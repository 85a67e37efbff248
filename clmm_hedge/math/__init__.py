"""
Math layer for CLMM Hedge Engine

집중화 유동성 포지션 계산 함수들:
- curve_math: 유동성 ↔ 토큰 수량 변환
- hedge_math: 델타 및 헤지 계산
- tick_math: Tick ↔ Price 변환
- sqrt_price_math: sqrtPriceX64 및 온체인 유동성 변환
"""

from .curve_math import (
    token_amounts,
    liquidity_for_amounts,
    validate_range,
    validate_price,
)
from .hedge_math import (
    HedgeSide,
    compute_delta,
    compute_hedge,
    position_value,
)
from .tick_math import (
    tick_to_price,
    price_to_tick,
    round_tick_to_spacing,
    snap_price_to_tick,
    get_tick_spacing_for_fee,
)
from .sqrt_price_math import (
    sqrt_price_x64_to_price,
    price_to_sqrt_price_x64,
    raw_liquidity_to_human,
)
