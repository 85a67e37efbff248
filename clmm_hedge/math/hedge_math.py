"""
Hedge Math - 델타 및 헤지 계산

포지션 가치 (numeraire = token B):
    V = x × P + y

커브를 따라 움직일 때 P·dx + dy = 0 이므로
    dV/dP = x
즉 포지션 델타는 현재 token A 보유량과 같습니다.
델타를 상쇄하는 선형 헤지(perp)는 같은 수량의 token A 숏입니다.
"""

import math
from enum import Enum
from typing import Tuple

from ..errors import ComputationError


class HedgeSide(str, Enum):
    """헤지 방향"""
    SHORT = "short"
    LONG = "long"
    FLAT = "flat"


def _check_inputs(amount_a: float, amount_b: float, current_price: float) -> None:
    for name, value in (("amount_a", amount_a), ("amount_b", amount_b), ("current_price", current_price)):
        if not math.isfinite(value):
            raise ComputationError(f"{name} is not finite: {value}")
    if amount_a < 0 or amount_b < 0:
        raise ComputationError(f"negative token amounts: ({amount_a}, {amount_b})")


def position_value(amount_a: float, amount_b: float, current_price: float) -> float:
    """포지션 가치 (token B 단위)"""
    _check_inputs(amount_a, amount_b, current_price)
    return amount_a * current_price + amount_b


def compute_delta(
    amount_a: float,
    amount_b: float,
    range_low: float,
    range_high: float,
    current_price: float
) -> float:
    """포지션 델타 계산 (∂V/∂P, token A 단위)

    - 범위 아래: 전부 token A → 델타 = 보유 token A 전체
    - 범위 내: 델타 = 현재 token A 보유량
    - 범위 위: 전부 token B → 델타 = 0

    Raises:
        ComputationError: 입력이 유한하지 않거나 수량이 음수
    """
    _check_inputs(amount_a, amount_b, current_price)
    if not (math.isfinite(range_low) and math.isfinite(range_high)):
        raise ComputationError(f"range is not finite: ({range_low}, {range_high})")

    if current_price >= range_high:
        return 0.0
    return amount_a


def compute_hedge(delta: float) -> Tuple[HedgeSide, float]:
    """델타를 0으로 만드는 선형 헤지 계산

    Returns:
        (side, notional) - notional은 token A 수량
    """
    if not math.isfinite(delta):
        raise ComputationError(f"delta is not finite: {delta}")

    if delta > 0:
        return HedgeSide.SHORT, delta
    if delta < 0:
        return HedgeSide.LONG, -delta
    return HedgeSide.FLAT, 0.0
