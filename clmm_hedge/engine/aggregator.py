"""
Position Aggregator - 라이브 포지션 일괄 분석

포지션별로 오류를 격리합니다. 한 포지션의 실패(가격 없음 등)가
나머지 포지션 처리를 막지 않으며, 결과는 입력 순서를 유지합니다.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from ..data.registry import PoolRegistry
from ..data.types import LiquidityPosition, PositionReport
from ..errors import ComputationError, EngineError, PriceUnavailableError
from .report import build_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionFailure:
    """포지션 단위 실패"""
    index: int
    position_id: str
    pair_id: str
    error: EngineError

    @property
    def error_type(self) -> str:
        return type(self.error).__name__

    def to_dict(self) -> Dict[str, object]:
        return {
            "index": self.index,
            "position_id": self.position_id,
            "pair": self.pair_id,
            "error": self.error_type,
            "message": str(self.error),
        }


@dataclass(frozen=True)
class PositionOutcome:
    """입력 포지션 하나의 결과 (report 또는 failure 중 하나)"""
    index: int
    report: Optional[PositionReport] = None
    failure: Optional[PositionFailure] = None

    @property
    def ok(self) -> bool:
        return self.report is not None


@dataclass(frozen=True)
class AggregateResult:
    """일괄 분석 결과 (입력 순서 유지)"""
    outcomes: tuple

    @property
    def reports(self) -> List[PositionReport]:
        return [o.report for o in self.outcomes if o.report is not None]

    @property
    def errors(self) -> List[PositionFailure]:
        return [o.failure for o in self.outcomes if o.failure is not None]


class PositionAggregator:
    """라이브 포지션 → 리포트 목록

    사용법:
        aggregator = PositionAggregator(registry)
        result = aggregator.report(positions, {"SOL/USDC": 150.0})
    """

    def __init__(self, registry: PoolRegistry):
        self.registry = registry

    def _report_one(
        self,
        position: LiquidityPosition,
        current_prices: Mapping[str, float]
    ) -> PositionReport:
        pair = self.registry.get(position.pair_id)
        price = current_prices.get(position.pair_id)
        if price is None:
            raise PriceUnavailableError(position.pair_id)
        return build_report(position, pair, price)

    def report(
        self,
        positions: Sequence[LiquidityPosition],
        current_prices: Mapping[str, float]
    ) -> AggregateResult:
        """포지션 목록 분석

        Args:
            positions: 유동성 포지션 목록
            current_prices: {pair_id: 현재 가격}

        Returns:
            AggregateResult (성공 리포트 + 포지션별 실패)
        """
        outcomes = []
        for index, position in enumerate(positions):
            try:
                report = self._report_one(position, current_prices)
                outcomes.append(PositionOutcome(index=index, report=report))
                continue
            except EngineError as e:
                if isinstance(e, ComputationError):
                    logger.exception("[Aggregator] Internal computation error for position %s", position.position_id)
                else:
                    logger.warning("[Aggregator] Position %s failed: %s", position.position_id, e)
                error = e
            except Exception as e:
                # 잘못된 입력 타입 등 예상하지 못한 오류도 해당 포지션만 실패 처리
                logger.exception("[Aggregator] Unexpected error for position %s", position.position_id)
                error = ComputationError(f"{type(e).__name__}: {e}")
                error.__cause__ = e

            failure = PositionFailure(
                index=index,
                position_id=position.position_id,
                pair_id=position.pair_id,
                error=error,
            )
            outcomes.append(PositionOutcome(index=index, failure=failure))

        result = AggregateResult(outcomes=tuple(outcomes))
        logger.info(
            "[Aggregator] %d positions: %d reports, %d errors",
            len(positions), len(result.reports), len(result.errors)
        )
        return result
