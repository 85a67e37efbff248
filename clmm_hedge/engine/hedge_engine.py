"""
Hedge Engine - 엔진 진입점

HTTP 계층이 호출하는 세 가지 논리 연산을 제공합니다:
- get_positions_with_hedges: 라이브 포지션 리포트 (포지션별 오류 포함)
- simulate_position: 가상 포지션 리포트
- get_available_pairs: 지원 페어 목록

엔진은 상태를 갖지 않으며 (불변 레지스트리 제외) I/O를 하지 않습니다.
"""

from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from ..data.registry import PoolRegistry
from ..data.types import LiquidityPosition, Pair, PositionReport
from .aggregator import AggregateResult, PositionAggregator
from .profile import exposure_profile
from .simulator import SimulationOutcome, SimulationRequest, Simulator


class HedgeEngine:
    """Position & Hedge 엔진

    사용법:
        engine = HedgeEngine(PoolRegistry.default())
        result = engine.get_positions_with_hedges(positions, prices)
        report = engine.simulate_position("SOL/USDC", 120, 180, 1000, "USDC", 150)
    """

    def __init__(self, registry: PoolRegistry):
        self.registry = registry
        self.aggregator = PositionAggregator(registry)
        self.simulator = Simulator(registry)

    def get_positions_with_hedges(
        self,
        positions: Sequence[LiquidityPosition],
        current_prices: Mapping[str, float]
    ) -> AggregateResult:
        return self.aggregator.report(positions, current_prices)

    def simulate_position(
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
        return self.simulator.simulate(
            pair, range_low, range_high, amount, entry_token,
            current_price, entry_price, snap_to_ticks
        )

    def run_simulation(self, request: SimulationRequest, current_price: float) -> SimulationOutcome:
        return self.simulator.run(request, current_price)

    def simulation_profile(
        self,
        request: SimulationRequest,
        current_price: float,
        price_low: float,
        price_high: float,
        points: int = 50
    ) -> Dict[str, np.ndarray]:
        """시뮬레이션 포지션의 가격별 노출 곡선"""
        position = self.simulator.build_position(
            request.pair, request.range_low, request.range_high, request.amount,
            request.entry_token, current_price, request.entry_price, request.snap_to_ticks
        )
        return exposure_profile(position, price_low, price_high, points)

    def get_available_pairs(self) -> List[Pair]:
        return self.registry.pairs()
