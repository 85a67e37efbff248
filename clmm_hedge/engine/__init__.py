"""
Engine layer for CLMM Hedge Engine

- report: 공통 리포트 생성 경로
- aggregator: 라이브 포지션 일괄 분석
- simulator: 가상 포지션 시뮬레이션
- profile: 가격별 노출 곡선
- hedge_engine: 엔진 진입점
"""

from .report import build_report
from .aggregator import AggregateResult, PositionAggregator, PositionFailure, PositionOutcome
from .simulator import SimulationOutcome, SimulationRequest, Simulator
from .profile import exposure_profile
from .hedge_engine import HedgeEngine
