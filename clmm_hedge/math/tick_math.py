"""
Tick Math - Tick ↔ Price 변환

Whirlpool / Uniswap V3 틱 수학 함수들.
가격은 항상 token B / token A (예: USDC per SOL) 기준입니다.

핵심 공식:
    price = 1.0001^tick × 10^(decimals_a - decimals_b)
    tick = floor(log₁.₀₀₀₁(price × 10^(decimals_b - decimals_a)))
"""

import math

from ..constants import MIN_TICK, MAX_TICK, TICK_SPACINGS, SQRT_RATIO_BASE


def tick_to_price(tick: int, decimals_a: int = 9, decimals_b: int = 6) -> float:
    """틱을 human-readable 가격으로 변환

    Args:
        tick: 틱 인덱스
        decimals_a: token A 소수점 자릿수 (예: SOL = 9)
        decimals_b: token B 소수점 자릿수 (예: USDC = 6)

    Returns:
        가격 (token B / token A)

    Raises:
        ValueError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise ValueError(f"tick out of range: {tick} ({MIN_TICK} ~ {MAX_TICK})")

    return SQRT_RATIO_BASE ** tick * (10 ** (decimals_a - decimals_b))


def price_to_tick(price: float, decimals_a: int = 9, decimals_b: int = 6) -> int:
    """Human-readable 가격을 틱으로 변환 (내림)

    Args:
        price: 가격 (token B / token A)
        decimals_a: token A 소수점 자릿수
        decimals_b: token B 소수점 자릿수

    Returns:
        틱 인덱스 (price 이하인 가장 큰 틱)
    """
    if not math.isfinite(price) or price <= 0:
        raise ValueError("price must be positive")

    ratio = price * (10 ** (decimals_b - decimals_a))
    tick = math.floor(math.log(ratio) / math.log(SQRT_RATIO_BASE))
    return max(MIN_TICK, min(MAX_TICK, tick))


def round_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱을 가장 가까운 유효 틱(tick_spacing의 배수)으로 반올림

    같은 거리일 때는 위쪽 틱을 선택합니다.
    """
    if tick_spacing <= 0:
        raise ValueError(f"invalid tick spacing: {tick_spacing}")

    lower = (tick // tick_spacing) * tick_spacing
    upper = lower + tick_spacing

    if abs(tick - lower) < abs(tick - upper):
        return lower
    return upper


def snap_price_to_tick(
    price: float,
    tick_spacing: int,
    decimals_a: int = 9,
    decimals_b: int = 6
) -> float:
    """가격을 초기화 가능한 가장 가까운 틱의 가격으로 변환

    Whirlpool 포지션은 tick_spacing 배수의 틱에서만 열 수 있으므로
    시뮬레이션 범위를 실제 열 수 있는 범위로 맞출 때 사용합니다.
    """
    tick = price_to_tick(price, decimals_a, decimals_b)
    # 내림된 틱과 그 다음 틱 중 더 가까운 쪽 선택
    if abs(tick_to_price(tick + 1, decimals_a, decimals_b) - price) < \
            abs(tick_to_price(tick, decimals_a, decimals_b) - price):
        tick += 1

    max_usable = (MAX_TICK // tick_spacing) * tick_spacing
    snapped = round_tick_to_spacing(tick, tick_spacing)
    snapped = max(-max_usable, min(max_usable, snapped))
    return tick_to_price(snapped, decimals_a, decimals_b)


def get_tick_spacing_for_fee(fee_rate: int) -> int:
    """수수료 티어에 해당하는 틱 간격 반환

    Args:
        fee_rate: 수수료 티어 (100, 500, 3000, 10000)

    Returns:
        틱 간격
    """
    if fee_rate not in TICK_SPACINGS:
        raise ValueError(f"unsupported fee tier: {fee_rate}")
    return TICK_SPACINGS[fee_rate]
