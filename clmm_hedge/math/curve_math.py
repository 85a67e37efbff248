"""
Curve Math - 집중화 유동성 본딩 커브 계산

(유동성, 가격 범위, 현재 가격) ↔ (token A 수량, token B 수량) 변환.
모든 값은 human 단위 float이며, 반올림은 표시 단계에서만 합니다.

References:
- Uniswap V3 백서 Section 6.2.1: Concentrated Liquidity
- Whirlpool: programs/whirlpool/src/math/token_math.rs

핵심 공식 (P_a = range_low, P_b = range_high):
    P <= P_a:        x = L × (√P_b - √P_a) / (√P_a × √P_b),  y = 0
    P_a < P < P_b:   x = L × (√P_b - √P) / (√P × √P_b),      y = L × (√P - √P_a)
    P >= P_b:        x = 0,                                   y = L × (√P_b - √P_a)
"""

import math
from typing import Tuple

from ..constants import TOKEN_A_ALIAS, TOKEN_B_ALIAS
from ..errors import (
    InvalidPriceError,
    InvalidRangeError,
    InvalidTokenError,
    ValidationError,
)


def validate_range(range_low: float, range_high: float) -> None:
    """가격 범위 검증

    Raises:
        InvalidRangeError: 경계가 유한한 양수가 아니거나 low >= high
    """
    if not (math.isfinite(range_low) and math.isfinite(range_high)):
        raise InvalidRangeError(
            f"range bounds must be finite (got {range_low}, {range_high})"
        )
    if range_low <= 0 or range_high <= 0:
        raise InvalidRangeError(
            f"range bounds must be positive (got {range_low}, {range_high})"
        )
    if range_low >= range_high:
        raise InvalidRangeError(
            f"rangeLow must be below rangeHigh (got {range_low} >= {range_high})"
        )


def validate_price(price: float) -> None:
    """현재 가격 검증

    Raises:
        InvalidPriceError: 가격이 유한한 양수가 아님
    """
    if not math.isfinite(price) or price <= 0:
        raise InvalidPriceError(f"price must be a finite positive number (got {price})")


def token_amounts(
    liquidity: float,
    range_low: float,
    range_high: float,
    current_price: float
) -> Tuple[float, float]:
    """유동성에서 토큰 수량 계산

    Args:
        liquidity: 포지션 유동성 L (human 단위)
        range_low: 하한 가격
        range_high: 상한 가격
        current_price: 현재 가격

    Returns:
        (amount_a, amount_b) 튜플
    """
    validate_range(range_low, range_high)
    validate_price(current_price)
    if not math.isfinite(liquidity) or liquidity < 0:
        raise ValidationError("liquidity", f"must be a finite non-negative number (got {liquidity})")

    sqrt_low = math.sqrt(range_low)
    sqrt_high = math.sqrt(range_high)

    if current_price <= range_low:
        # 범위 아래: token A만 보유
        amount_a = liquidity * (sqrt_high - sqrt_low) / (sqrt_low * sqrt_high)
        amount_b = 0.0

    elif current_price < range_high:
        # 범위 내: 양쪽 토큰 보유
        sqrt_price = math.sqrt(current_price)
        amount_a = liquidity * (sqrt_high - sqrt_price) / (sqrt_price * sqrt_high)
        amount_b = liquidity * (sqrt_price - sqrt_low)

    else:
        # 범위 위: token B만 보유
        amount_a = 0.0
        amount_b = liquidity * (sqrt_high - sqrt_low)

    return amount_a, amount_b


def liquidity_for_amounts(
    amount: float,
    range_low: float,
    range_high: float,
    current_price: float,
    entry_token: str
) -> float:
    """예치 금액에서 유동성 계산 (token_amounts의 역함수)

    amount는 entry_token 단위로 표시된 전체 예치금입니다.
    현재 가격에서 커브가 요구하는 비율로 두 토큰에 나눠 예치한다고 보고,
    L = value_B / (x₁ × P + y₁) 로 계산합니다.
    여기서 (x₁, y₁) = token_amounts(1, ...) 은 단위 유동성당 보유량입니다.

    Args:
        amount: 예치 금액 (entry_token 단위)
        range_low: 하한 가격
        range_high: 상한 가격
        current_price: 예치 시점 가격
        entry_token: "A" 또는 "B"

    Returns:
        유동성 L
    """
    if not math.isfinite(amount) or amount < 0:
        raise ValidationError("amount", f"must be a finite non-negative number (got {amount})")
    if entry_token not in (TOKEN_A_ALIAS, TOKEN_B_ALIAS):
        raise InvalidTokenError(f"entry token must be '{TOKEN_A_ALIAS}' or '{TOKEN_B_ALIAS}' (got {entry_token!r})")

    unit_a, unit_b = token_amounts(1.0, range_low, range_high, current_price)

    value_b = amount if entry_token == TOKEN_B_ALIAS else amount * current_price
    unit_value = unit_a * current_price + unit_b

    return value_b / unit_value
