"""
Sqrt Price Math - sqrtPriceX64 관련 계산

Whirlpool의 가격은 Q64.64 고정소수점 sqrt price로 저장됩니다.
sqrtPriceX64 = sqrt(price_raw) * 2^64

온체인 유동성(u128)도 최소 단위 기준이므로,
human 단위 토큰 수량을 얻으려면 decimals 보정이 필요합니다.
"""

import math

from ..constants import Q64


def sqrt_price_x64_to_price(
    sqrt_price_x64: int,
    decimals_a: int = 9,
    decimals_b: int = 6
) -> float:
    """sqrtPriceX64을 human-readable 가격으로 변환

    가격 = (sqrtPriceX64 / 2^64)^2 × 10^(decimals_a - decimals_b)

    Args:
        sqrt_price_x64: sqrtPriceX64 값
        decimals_a: token A 소수점 자릿수
        decimals_b: token B 소수점 자릿수

    Returns:
        가격 (token B / token A)
    """
    if sqrt_price_x64 <= 0:
        raise ValueError(f"invalid sqrt price: {sqrt_price_x64}")

    sqrt_price = sqrt_price_x64 / Q64
    price_raw = sqrt_price ** 2

    return price_raw * (10 ** (decimals_a - decimals_b))


def price_to_sqrt_price_x64(
    price: float,
    decimals_a: int = 9,
    decimals_b: int = 6
) -> int:
    """Human-readable 가격을 sqrtPriceX64로 변환

    sqrtPriceX64 = sqrt(price × 10^(decimals_b - decimals_a)) × 2^64
    """
    if not math.isfinite(price) or price <= 0:
        raise ValueError("price must be positive")

    adjusted_price = price * (10 ** (decimals_b - decimals_a))
    return int(math.sqrt(adjusted_price) * Q64)


def raw_liquidity_to_human(
    liquidity: int,
    decimals_a: int = 9,
    decimals_b: int = 6
) -> float:
    """온체인 유동성(u128)을 human 단위 유동성으로 변환

    raw 단위: amount_b_raw = L_raw × Δ√P_raw
    √P_raw = √P × 10^((decimals_b - decimals_a) / 2) 이므로
    amount_b = amount_b_raw / 10^decimals_b = L_raw / 10^((decimals_a + decimals_b) / 2) × Δ√P

    Returns:
        human 가격/수량과 함께 curve math에 바로 쓸 수 있는 유동성
    """
    if liquidity < 0:
        raise ValueError(f"invalid liquidity: {liquidity}")
    return liquidity / (10 ** ((decimals_a + decimals_b) / 2))
