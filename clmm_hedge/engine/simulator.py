"""
Simulator - 가상 포지션 시뮬레이션

페어, 범위, 예치 금액, entry token을 받아 라이브 포지션과 같은
리포트를 만듭니다. 유동성은 진입 가격(기본값: 현재 가격)에서 계산합니다.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..data.registry import PoolRegistry
from ..data.types import LiquidityPosition, PositionReport, PriceRange
from ..errors import ComputationError, EngineError, ValidationError
from ..math.curve_math import liquidity_for_amounts, validate_price, validate_range
from ..math.tick_math import snap_price_to_tick
from .report import build_report

logger = logging.getLogger(__name__)

SIMULATION_POSITION_ID = "simulation"


def parse_number(field: str, value: Any, required: bool = True) -> Optional[float]:
    """필드 값을 float으로 변환 (숫자 또는 숫자 문자열)

    Raises:
        ValidationError: 누락, 숫자가 아님, 유한하지 않음, 0 이하
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(field, "is required")
        return None
    if isinstance(value, bool):
        raise ValidationError(field, f"must be a number (got {value!r})")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"must be a number (got {value!r})") from None

    if not math.isfinite(number):
        raise ValidationError(field, f"must be finite (got {value!r})")
    if number <= 0:
        raise ValidationError(field, f"must be positive (got {value!r})")
    return number


def parse_text(field: str, value: Any) -> str:
    """필수 문자열 필드 검증"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "is required")
    return value.strip()


def parse_flag(field: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", ""):
        return False
    raise ValidationError(field, f"must be a boolean (got {value!r})")


def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return None


@dataclass(frozen=True)
class SimulationRequest:
    """시뮬레이션 요청

    필드별 변환/검증은 parse()에서 한 번만 수행합니다.
    """
    pair: str
    range_low: float
    range_high: float
    amount: float
    entry_token: str
    entry_price: Optional[float] = None
    snap_to_ticks: bool = False

    @classmethod
    def parse(cls, payload: Mapping[str, Any]) -> "SimulationRequest":
        """dict 페이로드를 요청으로 변환 (camelCase / snake_case 모두 허용)

        Raises:
            ValidationError: 필드 이름과 위반 내용 포함
        """
        return cls(
            pair=parse_text("pair", _pick(payload, "pair")),
            range_low=parse_number("rangeLow", _pick(payload, "rangeLow", "range_low")),
            range_high=parse_number("rangeHigh", _pick(payload, "rangeHigh", "range_high")),
            amount=parse_number("amount", _pick(payload, "amount")),
            entry_token=parse_text("entryToken", _pick(payload, "entryToken", "entry_token")),
            entry_price=parse_number("entryPrice", _pick(payload, "entryPrice", "entry_price"), required=False),
            snap_to_ticks=parse_flag("snapToTicks", _pick(payload, "snapToTicks", "snap_to_ticks")),
        )


@dataclass(frozen=True)
class SimulationOutcome:
    """시뮬레이션 결과 (report 또는 error 중 하나)"""
    report: Optional[PositionReport] = None
    error: Optional[EngineError] = None

    @property
    def ok(self) -> bool:
        return self.report is not None


class Simulator:
    """가상 포지션 시뮬레이터

    사용법:
        simulator = Simulator(registry)
        report = simulator.simulate("SOL/USDC", 120, 180, 1000, "USDC", current_price=150)
    """

    def __init__(self, registry: PoolRegistry):
        self.registry = registry

    def simulate(
        self,
        pair: str,
        range_low: float,
        range_high: float,
        amount: float,
        entry_token: str,
        current_price: float,
        entry_price: Optional[float] = None,
        snap_to_ticks: bool = False
    ) -> PositionReport:
        """가상 포지션 리포트 생성

        Args:
            pair: 페어 식별자
            range_low: 하한 가격
            range_high: 상한 가격
            amount: 예치 금액 (entry_token 단위)
            entry_token: 토큰 심볼 또는 "A"/"B"
            current_price: 현재 가격
            entry_price: 진입 가격 (None이면 현재 가격 사용)
            snap_to_ticks: True면 범위를 유효 틱 가격으로 맞춤

        Raises:
            UnknownPairError, ValidationError, InvalidRangeError,
            InvalidTokenError, InvalidPriceError
        """
        position = self.build_position(
            pair, range_low, range_high, amount, entry_token,
            current_price, entry_price, snap_to_ticks
        )
        return build_report(position, self.registry.get(position.pair_id), current_price)

    def build_position(
        self,
        pair: str,
        range_low: float,
        range_high: float,
        amount: float,
        entry_token: str,
        current_price: float,
        entry_price: Optional[float] = None,
        snap_to_ticks: bool = False
    ) -> LiquidityPosition:
        """검증 후 가상 LiquidityPosition 생성 (simulate와 같은 인자)"""
        pair_info = self.registry.get(pair)

        range_low = parse_number("rangeLow", range_low)
        range_high = parse_number("rangeHigh", range_high)
        amount = parse_number("amount", amount)
        validate_range(range_low, range_high)
        token = pair_info.resolve_token(entry_token)
        validate_price(current_price)
        if entry_price is not None:
            entry_price = parse_number("entryPrice", entry_price)

        if snap_to_ticks:
            decimals_a = pair_info.token_a.decimals
            decimals_b = pair_info.token_b.decimals
            range_low = snap_price_to_tick(range_low, pair_info.tick_spacing, decimals_a, decimals_b)
            range_high = snap_price_to_tick(range_high, pair_info.tick_spacing, decimals_a, decimals_b)
            validate_range(range_low, range_high)

        price_at_entry = entry_price if entry_price is not None else current_price
        liquidity = liquidity_for_amounts(amount, range_low, range_high, price_at_entry, token)

        return LiquidityPosition(
            position_id=SIMULATION_POSITION_ID,
            pair_id=pair_info.pair_id,
            price_range=PriceRange(range_low, range_high),
            liquidity=liquidity,
            entry_price=price_at_entry,
            entry_token=token,
        )

    def run(self, request: SimulationRequest, current_price: float) -> SimulationOutcome:
        """요청 실행 (예외 대신 태그된 결과 반환)"""
        try:
            report = self.simulate(
                pair=request.pair,
                range_low=request.range_low,
                range_high=request.range_high,
                amount=request.amount,
                entry_token=request.entry_token,
                current_price=current_price,
                entry_price=request.entry_price,
                snap_to_ticks=request.snap_to_ticks,
            )
        except ComputationError as e:
            logger.exception("[Simulate] Internal computation error for %s", request.pair)
            return SimulationOutcome(error=e)
        except EngineError as e:
            return SimulationOutcome(error=e)
        return SimulationOutcome(report=report)
