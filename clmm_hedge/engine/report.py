"""
Report assembly - 포지션 리포트 생성

Aggregator와 Simulator가 공유하는 유일한 계산 경로.
같은 파라미터의 실제 포지션과 시뮬레이션 포지션은 항상 같은 리포트를 만듭니다.
"""

from typing import Optional, Tuple

from ..constants import TOKEN_A_ALIAS
from ..data.types import LiquidityPosition, Pair, PositionReport
from ..math.curve_math import token_amounts, validate_price
from ..math.hedge_math import compute_delta, compute_hedge, position_value


def _hodl(
    position: LiquidityPosition,
    current_price: float
) -> Tuple[Optional[float], Optional[float]]:
    """진입 시점 보유량을 그대로 들고 있었을 때의 가치와 IL

    IL = V_LP - V_HODL (음수 = 손실)
    """
    if position.entry_price is None:
        return None, None

    rng = position.price_range
    entry_a, entry_b = token_amounts(position.liquidity, rng.low, rng.high, position.entry_price)
    hodl_value = position_value(entry_a, entry_b, current_price)

    amount_a, amount_b = token_amounts(position.liquidity, rng.low, rng.high, current_price)
    lp_value = position_value(amount_a, amount_b, current_price)

    return hodl_value, lp_value - hodl_value


def build_report(
    position: LiquidityPosition,
    pair: Pair,
    current_price: float
) -> PositionReport:
    """포지션과 현재 가격으로 리포트 생성

    Curve Math → Delta → Hedge 순서로 계산합니다.

    Args:
        position: 유동성 포지션
        pair: 포지션의 페어
        current_price: 현재 가격 (token B / token A)

    Returns:
        PositionReport
    """
    validate_price(current_price)
    rng = position.price_range

    amount_a, amount_b = token_amounts(position.liquidity, rng.low, rng.high, current_price)
    delta = compute_delta(amount_a, amount_b, rng.low, rng.high, current_price)
    hedge_side, hedge_notional = compute_hedge(delta)
    value = position_value(amount_a, amount_b, current_price)
    hodl_value, impermanent_loss = _hodl(position, current_price)

    entry_token = None
    if position.entry_token is not None:
        entry_token = pair.token_a.symbol if position.entry_token == TOKEN_A_ALIAS else pair.token_b.symbol

    return PositionReport(
        position_id=position.position_id,
        pair_id=pair.pair_id,
        token_a=pair.token_a.symbol,
        token_b=pair.token_b.symbol,
        decimals_a=pair.token_a.decimals,
        decimals_b=pair.token_b.decimals,
        range_low=rng.low,
        range_high=rng.high,
        current_price=current_price,
        range_status=rng.status(current_price),
        liquidity=position.liquidity,
        amount_a=amount_a,
        amount_b=amount_b,
        value=value,
        delta=delta,
        hedge_side=hedge_side,
        hedge_notional=hedge_notional,
        hedge_notional_value=hedge_notional * current_price,
        entry_price=position.entry_price,
        entry_token=entry_token,
        hodl_value=hodl_value,
        impermanent_loss=impermanent_loss,
    )
