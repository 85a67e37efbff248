"""
Exposure profile - 가격 구간별 보유량/헤지 곡선

가격을 그리드로 움직이며 token 수량, 가치, 델타를 계산합니다.
현재 가격을 범위 [low, high]로 clip하면 범위 밖 구간도
같은 공식으로 처리됩니다.
"""

from typing import Dict

import numpy as np

from ..data.types import LiquidityPosition
from ..errors import ValidationError
from ..math.curve_math import validate_price


def exposure_profile(
    position: LiquidityPosition,
    price_low: float,
    price_high: float,
    points: int = 50
) -> Dict[str, np.ndarray]:
    """가격 그리드에 대한 노출 곡선

    Args:
        position: 유동성 포지션
        price_low: 그리드 최저 가격
        price_high: 그리드 최고 가격
        points: 그리드 점 개수 (2 이상)

    Returns:
        {"price", "amount_a", "amount_b", "value", "delta"} numpy 배열
    """
    validate_price(price_low)
    validate_price(price_high)
    if price_low >= price_high:
        raise ValidationError("priceHigh", "must be above priceLow")
    if points < 2:
        raise ValidationError("points", f"must be at least 2 (got {points})")

    rng = position.price_range
    liquidity = position.liquidity

    prices = np.linspace(price_low, price_high, points)
    sqrt_low = np.sqrt(rng.low)
    sqrt_high = np.sqrt(rng.high)
    sqrt_p = np.sqrt(np.clip(prices, rng.low, rng.high))

    amount_a = liquidity * (sqrt_high - sqrt_p) / (sqrt_p * sqrt_high)
    amount_b = liquidity * (sqrt_p - sqrt_low)
    value = amount_a * prices + amount_b

    return {
        "price": prices,
        "amount_a": amount_a,
        "amount_b": amount_b,
        "value": value,
        "delta": amount_a.copy(),
    }
