"""
Simulation Endpoints

Hypothetical positions: same report as a live position, plus an exposure
profile across a price window.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Request

from app.api.schemas import (
    PositionReportResponse,
    ProfileResponse,
    SimulateProfileRequest,
    SimulateRequest,
)
from clmm_hedge.engine import SimulationRequest

logger = logging.getLogger(__name__)

router = APIRouter()


async def _current_price(request: Request, pair_id: str, current_price: Optional[float]) -> float:
    """Use the supplied price, otherwise fetch it from the pair's pool"""
    if current_price is not None:
        return current_price

    state = request.app.state
    pair = state.engine.registry.get(pair_id)
    return await state.price_source.fetch_current_price(pair)


@router.post("/simulate", response_model=PositionReportResponse)
async def simulate_position(body: SimulateRequest, request: Request):
    """
    Simulate a hypothetical position

    Returns the token split, value, delta and hedge the position would
    have at the current price.
    """
    sim_request = SimulationRequest.parse(body.engine_payload())
    current_price = await _current_price(request, sim_request.pair, body.current_price)

    outcome = request.app.state.engine.run_simulation(sim_request, current_price)
    if not outcome.ok:
        raise outcome.error

    report = outcome.report
    logger.info("[Simulate] %s [%s, %s] @ %s → %s %s",
                report.pair_id, report.range_low, report.range_high, current_price,
                report.hedge_side.value, report.hedge_notional)
    return report.to_dict()


@router.post("/simulate/profile", response_model=ProfileResponse)
async def simulate_profile(body: SimulateProfileRequest, request: Request):
    """
    Exposure profile of a hypothetical position

    Token amounts, value and hedge size across [priceLow, priceHigh].
    """
    sim_request = SimulationRequest.parse(body.engine_payload())
    current_price = await _current_price(request, sim_request.pair, body.current_price)

    profile = request.app.state.engine.simulation_profile(
        sim_request, current_price, body.price_low, body.price_high, body.points
    )

    return {
        "pair": sim_request.pair,
        **{key: values.tolist() for key, values in profile.items()},
    }
