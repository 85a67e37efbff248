"""
CLMM 데이터 타입 정의

페어, 가격 범위, 유동성 포지션, 포지션 리포트를 불변 dataclass로 정의.
모든 가격은 token B / token A 기준, 수량은 human 단위 float입니다.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from ..constants import (
    FEE_TIERS,
    MAX_DISPLAY_DECIMALS,
    PRICE_SIGNIFICANT_DIGITS,
    TOKEN_A_ALIAS,
    TOKEN_B_ALIAS,
)
from ..errors import InvalidRangeError, InvalidTokenError
from ..math.curve_math import validate_range
from ..math.hedge_math import HedgeSide
from ..math.sqrt_price_math import raw_liquidity_to_human
from ..math.tick_math import tick_to_price


@dataclass(frozen=True)
class Token:
    """토큰 정보"""
    symbol: str
    decimals: int
    mint: Optional[str] = None  # 토큰 민트 주소

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        return cls(
            symbol=data["symbol"],
            decimals=int(data["decimals"]),
            mint=data.get("mint"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"symbol": self.symbol, "decimals": self.decimals, "mint": self.mint}


@dataclass(frozen=True)
class Pair:
    """거래 페어 (풀) 정보

    - pair_id: 페어 식별자 (예: "SOL/USDC")
    - token_a: 기준 토큰 (가격의 분모)
    - token_b: numeraire 토큰 (가격의 분자)
    - tick_spacing: 틱 간격
    - fee_rate: 수수료 (1/100 bps, 3000 = 0.30%)
    - pool_address: 온체인 풀 주소 (가격 조회용)
    """
    pair_id: str
    token_a: Token
    token_b: Token
    tick_spacing: int
    fee_rate: int
    pool_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Pair":
        return cls(
            pair_id=data["pair_id"],
            token_a=Token.from_dict(data["token_a"]),
            token_b=Token.from_dict(data["token_b"]),
            tick_spacing=int(data["tick_spacing"]),
            fee_rate=int(data["fee_rate"]),
            pool_address=data.get("pool_address"),
        )

    @property
    def fee_tier(self) -> str:
        """사람이 읽을 수 있는 수수료 표시 (예: "0.30%")"""
        return FEE_TIERS.get(self.fee_rate, f"{self.fee_rate / 10000:.2f}%")

    def resolve_token(self, name: str) -> str:
        """토큰 심볼 또는 별칭을 "A"/"B"로 변환

        Args:
            name: 토큰 심볼 (대소문자 무시) 또는 "A"/"B"

        Raises:
            InvalidTokenError: 페어의 토큰이 아님
        """
        key = name.strip().upper()
        if key in (TOKEN_A_ALIAS, self.token_a.symbol.upper()):
            return TOKEN_A_ALIAS
        if key in (TOKEN_B_ALIAS, self.token_b.symbol.upper()):
            return TOKEN_B_ALIAS
        raise InvalidTokenError(
            f"entry token {name!r} is not one of {self.token_a.symbol}/{self.token_b.symbol}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pair_id": self.pair_id,
            "token_a": self.token_a.to_dict(),
            "token_b": self.token_b.to_dict(),
            "tick_spacing": self.tick_spacing,
            "fee_rate": self.fee_rate,
            "fee_tier": self.fee_tier,
            "pool_address": self.pool_address,
        }


class RangeStatus(str, Enum):
    """현재 가격의 범위 내 위치"""
    BELOW = "below"
    IN_RANGE = "in_range"
    ABOVE = "above"


@dataclass(frozen=True)
class PriceRange:
    """가격 범위 [low, high] (token B / token A)"""
    low: float
    high: float

    def __post_init__(self):
        validate_range(self.low, self.high)

    def status(self, price: float) -> RangeStatus:
        if price <= self.low:
            return RangeStatus.BELOW
        if price >= self.high:
            return RangeStatus.ABOVE
        return RangeStatus.IN_RANGE


@dataclass(frozen=True)
class LiquidityPosition:
    """유동성 포지션

    온체인 포지션 또는 시뮬레이션 요청에서 생성되며 생성 후 변경하지 않습니다.
    입력이 바뀌면 새로 만듭니다.
    """
    position_id: str
    pair_id: str
    price_range: PriceRange
    liquidity: float
    entry_price: Optional[float] = None
    entry_token: Optional[str] = None  # "A" 또는 "B"


@dataclass(frozen=True)
class OnChainPosition:
    """인덱서가 반환하는 Whirlpool 포지션 원본 데이터

    - address: 포지션 계정 주소
    - pair_id: 페어 식별자
    - tick_lower_index / tick_upper_index: 범위 틱
    - liquidity: 온체인 유동성 (u128, 최소 단위)
    """
    address: str
    pair_id: str
    tick_lower_index: int
    tick_upper_index: int
    liquidity: int
    entry_price: Optional[float] = None
    entry_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "OnChainPosition":
        entry_price = data.get("entry_price")
        return cls(
            address=data["address"],
            pair_id=data["pair"],
            tick_lower_index=int(data["tick_lower_index"]),
            tick_upper_index=int(data["tick_upper_index"]),
            liquidity=int(data["liquidity"]),
            entry_price=float(entry_price) if entry_price is not None else None,
            entry_token=data.get("entry_token"),
        )

    def to_position(self, pair: Pair) -> LiquidityPosition:
        """틱/원본 유동성을 human 단위 LiquidityPosition으로 변환"""
        if self.tick_lower_index >= self.tick_upper_index:
            raise InvalidRangeError(
                f"position {self.address}: tick_lower_index {self.tick_lower_index} "
                f">= tick_upper_index {self.tick_upper_index}"
            )

        decimals_a = pair.token_a.decimals
        decimals_b = pair.token_b.decimals
        price_range = PriceRange(
            low=tick_to_price(self.tick_lower_index, decimals_a, decimals_b),
            high=tick_to_price(self.tick_upper_index, decimals_a, decimals_b),
        )
        entry_token = pair.resolve_token(self.entry_token) if self.entry_token else None

        return LiquidityPosition(
            position_id=self.address,
            pair_id=pair.pair_id,
            price_range=price_range,
            liquidity=raw_liquidity_to_human(self.liquidity, decimals_a, decimals_b),
            entry_price=self.entry_price,
            entry_token=entry_token,
        )


def _round(value: Optional[float], decimals: int) -> Optional[float]:
    if value is None:
        return None
    return round(value, min(decimals, MAX_DISPLAY_DECIMALS))


def _round_price(value: Optional[float], decimals: int) -> Optional[float]:
    """가격 반올림: decimals 자리와 유효숫자 PRICE_SIGNIFICANT_DIGITS 중 더 정밀한 쪽"""
    if value is None:
        return None
    places = min(decimals, MAX_DISPLAY_DECIMALS)
    if value != 0 and math.isfinite(value):
        magnitude = math.floor(math.log10(abs(value)))
        places = max(places, PRICE_SIGNIFICANT_DIGITS - 1 - magnitude)
    return round(value, places)


@dataclass(frozen=True)
class PositionReport:
    """포지션 분석 결과

    현재 가격 기준으로 매 요청마다 다시 계산됩니다.
    - value / delta: numeraire(token B) 기준
    - hedge_notional: token A 수량, hedge_notional_value: token B 환산
    - hodl_value / impermanent_loss: 진입 가격을 알 때만 계산
    """
    position_id: str
    pair_id: str
    token_a: str
    token_b: str
    decimals_a: int
    decimals_b: int
    range_low: float
    range_high: float
    current_price: float
    range_status: RangeStatus
    liquidity: float
    amount_a: float
    amount_b: float
    value: float
    delta: float
    hedge_side: HedgeSide
    hedge_notional: float
    hedge_notional_value: float
    entry_price: Optional[float] = None
    entry_token: Optional[str] = None
    hodl_value: Optional[float] = None
    impermanent_loss: Optional[float] = None

    @property
    def impermanent_loss_pct(self) -> Optional[float]:
        if self.hodl_value is None or self.impermanent_loss is None or self.hodl_value <= 0:
            return None
        return self.impermanent_loss / self.hodl_value * 100

    def to_dict(self) -> Dict[str, Any]:
        """표시용 dict (토큰 decimals 기준 반올림)

        반올림은 여기서만 수행합니다.
        """
        da, db = self.decimals_a, self.decimals_b
        il_pct = self.impermanent_loss_pct
        return {
            "position_id": self.position_id,
            "pair": self.pair_id,
            "token_a": self.token_a,
            "token_b": self.token_b,
            "range_low": _round_price(self.range_low, db),
            "range_high": _round_price(self.range_high, db),
            "current_price": _round_price(self.current_price, db),
            "range_status": self.range_status.value,
            "liquidity": self.liquidity,
            "amount_a": _round(self.amount_a, da),
            "amount_b": _round(self.amount_b, db),
            "value": _round(self.value, db),
            "delta": _round(self.delta, da),
            "hedge_side": self.hedge_side.value,
            "hedge_notional": _round(self.hedge_notional, da),
            "hedge_notional_value": _round(self.hedge_notional_value, db),
            "entry_price": _round_price(self.entry_price, db),
            "entry_token": self.entry_token,
            "hodl_value": _round(self.hodl_value, db),
            "impermanent_loss": _round(self.impermanent_loss, db),
            "impermanent_loss_pct": round(il_pct, 4) if il_pct is not None and math.isfinite(il_pct) else None,
        }
