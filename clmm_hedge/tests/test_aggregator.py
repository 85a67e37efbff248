"""
Position Aggregator 테스트

포지션별 오류 격리와 입력 순서 유지.
"""

import logging
from decimal import Decimal

import pytest

from ..data.types import LiquidityPosition, PriceRange
from ..engine.aggregator import PositionAggregator
from ..errors import ComputationError, PriceUnavailableError, UnknownPairError
from ..math.hedge_math import HedgeSide


def _position(position_id, pair_id="A/B", low=1800.0, high=2200.0, liquidity=5000.0, entry_price=None):
    return LiquidityPosition(
        position_id=position_id,
        pair_id=pair_id,
        price_range=PriceRange(low, high),
        liquidity=liquidity,
        entry_price=entry_price,
    )


class TestPositionAggregator:
    """PositionAggregator 테스트"""

    def test_all_positions_succeed(self, registry):
        positions = [_position("p1"), _position("p2", pair_id="SOL/USDC", low=120.0, high=180.0)]
        result = PositionAggregator(registry).report(positions, {"A/B": 2000.0, "SOL/USDC": 150.0})

        assert [r.position_id for r in result.reports] == ["p1", "p2"]
        assert result.errors == []
        assert all(r.hedge_side == HedgeSide.SHORT for r in result.reports)

    def test_missing_price_fails_only_that_position(self, registry):
        """한 페어 가격 조회 실패 → 성공 1개 + PriceUnavailableError 1개, 입력 순서"""
        positions = [
            _position("sol-1", pair_id="SOL/USDC", low=120.0, high=180.0),
            _position("ab-1"),
        ]
        result = PositionAggregator(registry).report(positions, {"A/B": 2000.0})

        assert len(result.reports) == 1
        assert len(result.errors) == 1
        assert result.reports[0].position_id == "ab-1"

        failure = result.errors[0]
        assert isinstance(failure.error, PriceUnavailableError)
        assert failure.index == 0
        assert failure.position_id == "sol-1"
        assert failure.pair_id == "SOL/USDC"

        # 원래 입력 순서대로 outcome 유지
        assert [o.ok for o in result.outcomes] == [False, True]
        assert [o.index for o in result.outcomes] == [0, 1]

    def test_unknown_pair_is_per_position(self, registry):
        positions = [_position("x", pair_id="X/Y"), _position("ab")]
        result = PositionAggregator(registry).report(positions, {"A/B": 2000.0, "X/Y": 1.0})

        assert isinstance(result.errors[0].error, UnknownPairError)
        assert result.reports[0].position_id == "ab"

    def test_invalid_price_is_per_position(self, registry):
        positions = [_position("bad"), _position("good", pair_id="SOL/USDC", low=120.0, high=180.0)]
        result = PositionAggregator(registry).report(positions, {"A/B": -5.0, "SOL/USDC": 150.0})

        assert result.errors[0].error_type == "InvalidPriceError"
        assert result.reports[0].position_id == "good"

    def test_empty_batch(self, registry):
        result = PositionAggregator(registry).report([], {})
        assert result.reports == []
        assert result.errors == []

    def test_failure_to_dict(self, registry):
        result = PositionAggregator(registry).report([_position("p1")], {})
        data = result.errors[0].to_dict()
        assert data == {
            "index": 0,
            "position_id": "p1",
            "pair": "A/B",
            "error": "PriceUnavailableError",
            "message": "Price unavailable for A/B",
        }

    def test_computation_error_is_logged_and_collected(self, registry, monkeypatch, caplog):
        """내부 오류도 배치를 중단하지 않고 로그에 남음"""
        from ..engine import aggregator as aggregator_module

        calls = {"n": 0}
        real_build_report = aggregator_module.build_report

        def flaky_build_report(position, pair, price):
            calls["n"] += 1
            if position.position_id == "boom":
                raise ComputationError("negative token amounts")
            return real_build_report(position, pair, price)

        monkeypatch.setattr(aggregator_module, "build_report", flaky_build_report)

        with caplog.at_level(logging.ERROR):
            result = PositionAggregator(registry).report(
                [_position("boom"), _position("ok")], {"A/B": 2000.0}
            )

        assert calls["n"] == 2
        assert isinstance(result.errors[0].error, ComputationError)
        assert result.reports[0].position_id == "ok"
        assert "boom" in caplog.text

    def test_malformed_position_does_not_stop_batch(self, registry, caplog):
        """숫자가 아닌 유동성 → 해당 포지션만 ComputationError, 나머지는 정상"""
        positions = [_position("bad", liquidity="5000"), _position("good")]

        with caplog.at_level(logging.ERROR):
            result = PositionAggregator(registry).report(positions, {"A/B": 2000.0})

        assert [o.ok for o in result.outcomes] == [False, True]
        failure = result.errors[0]
        assert failure.position_id == "bad"
        assert isinstance(failure.error, ComputationError)
        assert isinstance(failure.error.__cause__, TypeError)
        assert failure.to_dict()["error"] == "ComputationError"
        assert result.reports[0].position_id == "good"
        assert "bad" in caplog.text

    def test_non_float_price_is_per_position(self, registry):
        """Decimal 가격으로 인한 타입 오류도 배치를 중단하지 않음"""
        positions = [_position("ab"), _position("sol", pair_id="SOL/USDC", low=120.0, high=180.0)]
        result = PositionAggregator(registry).report(
            positions, {"A/B": Decimal("2000"), "SOL/USDC": 150.0}
        )

        assert len(result.outcomes) == 2
        assert isinstance(result.errors[0].error, ComputationError)
        assert result.reports[0].position_id == "sol"

    def test_report_values(self, registry):
        """리포트 값 검증: 가치, 헤지 규모"""
        result = PositionAggregator(registry).report([_position("p1", entry_price=1900.0)], {"A/B": 2000.0})
        report = result.reports[0]

        assert report.value == pytest.approx(report.amount_a * 2000.0 + report.amount_b)
        assert report.delta == report.amount_a
        assert report.hedge_notional == report.amount_a
        assert report.hedge_notional_value == pytest.approx(report.amount_a * 2000.0)
        # 진입 가격이 있으면 IL 계산 (집중화 유동성 IL은 0 이하)
        assert report.hodl_value is not None
        assert report.impermanent_loss <= 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
