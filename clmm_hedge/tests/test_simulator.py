"""
Simulator 테스트

가상 포지션 시뮬레이션, 입력 검증, 실제 포지션과의 일치.
"""

import pytest

from ..data.types import LiquidityPosition, Pair, PriceRange, RangeStatus, Token
from ..engine.report import build_report
from ..engine.simulator import SimulationRequest, Simulator, parse_number
from ..errors import (
    InvalidPriceError,
    InvalidRangeError,
    InvalidTokenError,
    UnknownPairError,
    ValidationError,
)
from ..math.hedge_math import HedgeSide


class TestSimulateScenarios:
    """예시 시나리오"""

    def test_in_range_scenario(self, registry):
        """A/B 1800-2200, B 10000 예치, 가격 2000 → 양쪽 보유, A 숏"""
        report = Simulator(registry).simulate("A/B", 1800, 2200, 10000, "B", current_price=2000)

        assert report.amount_a > 0
        assert report.amount_b > 0
        assert report.hedge_side == HedgeSide.SHORT
        assert report.hedge_notional == report.amount_a
        assert report.value == pytest.approx(10000.0)
        assert report.range_status == RangeStatus.IN_RANGE
        assert report.entry_price == 2000
        assert report.entry_token == "B"

    def test_above_range_scenario(self, registry):
        """같은 범위, 가격 2300 → token A 0, flat"""
        report = Simulator(registry).simulate("A/B", 1800, 2200, 10000, "B", current_price=2300)

        assert report.amount_a == 0.0
        assert report.hedge_side == HedgeSide.FLAT
        assert report.hedge_notional == 0.0
        assert report.range_status == RangeStatus.ABOVE

    def test_above_range_with_entry_price(self, registry):
        """진입은 범위 내, 현재 가격은 범위 위"""
        report = Simulator(registry).simulate(
            "A/B", 1800, 2200, 10000, "B", current_price=2300, entry_price=2000
        )
        assert report.amount_a == 0.0
        assert report.hedge_side == HedgeSide.FLAT
        assert report.entry_price == 2000
        assert report.impermanent_loss < 0

    def test_below_range_all_token_a(self, registry):
        report = Simulator(registry).simulate("A/B", 1800, 2200, 5, "A", current_price=1700)
        assert report.amount_b == 0.0
        assert report.amount_a == pytest.approx(5.0)
        assert report.hedge_side == HedgeSide.SHORT
        assert report.range_status == RangeStatus.BELOW

    def test_entry_token_by_symbol(self, registry):
        by_symbol = Simulator(registry).simulate("SOL/USDC", 120, 180, 1000, "USDC", current_price=150)
        by_alias = Simulator(registry).simulate("SOL/USDC", 120, 180, 1000, "B", current_price=150)
        assert by_symbol == by_alias
        assert by_symbol.entry_token == "USDC"

    def test_entry_token_a_value(self, registry):
        report = Simulator(registry).simulate("SOL/USDC", 120, 180, 10, "SOL", current_price=150)
        assert report.value == pytest.approx(1500.0)


class TestSimulateProperties:
    """순수 함수 성질"""

    def test_idempotent(self, registry):
        simulator = Simulator(registry)
        first = simulator.simulate("A/B", 1800, 2200, 10000, "B", current_price=2000)
        second = simulator.simulate("A/B", 1800, 2200, 10000, "B", current_price=2000)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_matches_real_position(self, engine):
        """같은 파라미터의 실제 포지션과 시뮬레이션 리포트가 동일"""
        simulated = engine.simulate_position("A/B", 1800, 2200, 10000, "B", current_price=2000)

        real = LiquidityPosition(
            position_id=simulated.position_id,
            pair_id="A/B",
            price_range=PriceRange(1800.0, 2200.0),
            liquidity=simulated.liquidity,
            entry_price=2000,
            entry_token="B",
        )
        result = engine.get_positions_with_hedges([real], {"A/B": 2000})
        assert result.reports == [simulated]

    def test_snap_to_ticks_changes_range(self, registry):
        report = Simulator(registry).simulate(
            "SOL/USDC", 121.3, 178.9, 1000, "USDC", current_price=150, snap_to_ticks=True
        )
        assert report.range_low != 121.3
        assert report.range_low == pytest.approx(121.3, rel=0.01)
        assert report.range_high == pytest.approx(178.9, rel=0.01)


class TestSimulateValidation:
    """입력 검증"""

    def test_unknown_pair(self, registry):
        with pytest.raises(UnknownPairError):
            Simulator(registry).simulate("X/Y", 1800, 2200, 10000, "B", current_price=2000)

    def test_inverted_range(self, registry):
        with pytest.raises(InvalidRangeError):
            Simulator(registry).simulate("A/B", 2200, 1800, 10000, "B", current_price=2000)

    def test_equal_range(self, registry):
        with pytest.raises(InvalidRangeError):
            Simulator(registry).simulate("A/B", 2000, 2000, 10000, "B", current_price=2000)

    def test_negative_amount(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            Simulator(registry).simulate("A/B", 1800, 2200, -10, "B", current_price=2000)
        assert exc_info.value.field == "amount"

    @pytest.mark.parametrize("field,args", [
        ("rangeLow", (0, 2200, 100)),
        ("rangeHigh", (1800, float("inf"), 100)),
        ("amount", (1800, 2200, float("nan"))),
    ])
    def test_non_positive_or_non_finite_fields(self, registry, field, args):
        with pytest.raises(ValidationError) as exc_info:
            Simulator(registry).simulate("A/B", *args, "B", current_price=2000)
        assert exc_info.value.field == field

    def test_invalid_entry_token(self, registry):
        with pytest.raises(InvalidTokenError):
            Simulator(registry).simulate("A/B", 1800, 2200, 100, "ETH", current_price=2000)

    def test_invalid_current_price(self, registry):
        with pytest.raises(InvalidPriceError):
            Simulator(registry).simulate("A/B", 1800, 2200, 100, "B", current_price=0)

    def test_invalid_entry_price(self, registry):
        with pytest.raises(ValidationError) as exc_info:
            Simulator(registry).simulate("A/B", 1800, 2200, 100, "B", current_price=2000, entry_price=-1)
        assert exc_info.value.field == "entryPrice"


class TestSimulationRequest:
    """SimulationRequest.parse 테스트"""

    def test_parse_strings(self):
        request = SimulationRequest.parse({
            "pair": "A/B",
            "rangeLow": "1800",
            "rangeHigh": "2200.5",
            "amount": "10000",
            "entryToken": "B",
        })
        assert request == SimulationRequest("A/B", 1800.0, 2200.5, 10000.0, "B")

    def test_parse_snake_case(self):
        request = SimulationRequest.parse({
            "pair": "A/B",
            "range_low": 1800,
            "range_high": 2200,
            "amount": 1,
            "entry_token": "A",
            "entry_price": 1900,
            "snap_to_ticks": "true",
        })
        assert request.entry_price == 1900.0
        assert request.snap_to_ticks is True

    @pytest.mark.parametrize("missing", ["pair", "rangeLow", "rangeHigh", "amount", "entryToken"])
    def test_missing_field(self, missing):
        payload = {"pair": "A/B", "rangeLow": 1800, "rangeHigh": 2200, "amount": 100, "entryToken": "B"}
        del payload[missing]
        with pytest.raises(ValidationError) as exc_info:
            SimulationRequest.parse(payload)
        assert exc_info.value.field == missing

    def test_malformed_number(self):
        with pytest.raises(ValidationError) as exc_info:
            SimulationRequest.parse({
                "pair": "A/B", "rangeLow": "abc", "rangeHigh": 2200, "amount": 100, "entryToken": "B"
            })
        assert exc_info.value.field == "rangeLow"
        assert "must be a number" in str(exc_info.value)

    def test_bool_is_not_a_number(self):
        with pytest.raises(ValidationError):
            parse_number("amount", True)

    def test_run_returns_tagged_outcome(self, registry):
        simulator = Simulator(registry)
        ok = simulator.run(SimulationRequest("A/B", 1800, 2200, 10000, "B"), 2000)
        assert ok.ok and ok.error is None

        failed = simulator.run(SimulationRequest("X/Y", 1800, 2200, 10000, "B"), 2000)
        assert not failed.ok
        assert isinstance(failed.error, UnknownPairError)
        assert failed.report is None


class TestReportDisplay:
    """to_dict 표시 반올림"""

    def test_low_price_keeps_significant_digits(self):
        """1 미만 가격도 유효숫자 유지 (decimals_b 자리 반올림으로 0이 되지 않음)"""
        meme = Pair("MEME/USDC", Token("MEME", 6), Token("USDC", 6), tick_spacing=64, fee_rate=3000)
        position = LiquidityPosition(
            position_id="meme-1",
            pair_id="MEME/USDC",
            price_range=PriceRange(2.0e-5, 3.0e-5),
            liquidity=1000.0,
            entry_price=2.1234567e-5,
        )
        data = build_report(position, meme, 2.3456e-5).to_dict()

        assert data["current_price"] == pytest.approx(2.3456e-5, rel=1e-6)
        assert data["range_low"] == pytest.approx(2.0e-5, rel=1e-6)
        assert data["range_high"] == pytest.approx(3.0e-5, rel=1e-6)
        assert data["entry_price"] == pytest.approx(2.12346e-5, rel=1e-6)

    def test_regular_price_uses_token_decimals(self, registry):
        data = Simulator(registry).simulate(
            "SOL/USDC", 120, 180, 1000, "USDC", current_price=150.123456789
        ).to_dict()
        assert data["current_price"] == 150.123457


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
