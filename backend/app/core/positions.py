"""
Live position collection

Fetches the wallet's positions and the current price of every pair they
use (concurrently), then hands both to the engine.
"""
import asyncio
import logging
from typing import Dict, List

from clmm_hedge.data.sources import PositionSource, PriceSource
from clmm_hedge.engine import AggregateResult, HedgeEngine
from clmm_hedge.errors import EngineError

logger = logging.getLogger(__name__)


async def fetch_prices(engine: HedgeEngine, price_source: PriceSource, pair_ids: List[str]) -> Dict[str, float]:
    """
    Fetch current prices for the given pairs.

    Pairs whose price is unavailable are left out of the result; the
    aggregator then reports PriceUnavailableError for their positions.
    """
    pairs = [engine.registry.get(pair_id) for pair_id in pair_ids]
    results = await asyncio.gather(
        *(price_source.fetch_current_price(pair) for pair in pairs),
        return_exceptions=True
    )

    prices = {}
    for pair, result in zip(pairs, results):
        if isinstance(result, EngineError):
            logger.warning("[Positions] %s", result)
            continue
        if isinstance(result, Exception):
            logger.warning("[Positions] Price fetch failed for %s: %s: %s",
                           pair.pair_id, type(result).__name__, result)
            continue
        if isinstance(result, BaseException):
            raise result
        prices[pair.pair_id] = result
    return prices


async def collect_positions(
    engine: HedgeEngine,
    position_source: PositionSource,
    price_source: PriceSource,
    wallet: str
) -> AggregateResult:
    """Live positions of a wallet with per-position hedge reports"""
    positions = await position_source.fetch_live_positions(wallet)

    pair_ids = []
    for position in positions:
        if position.pair_id in engine.registry and position.pair_id not in pair_ids:
            pair_ids.append(position.pair_id)

    prices = await fetch_prices(engine, price_source, pair_ids)
    logger.info("[Positions] %d positions, %d/%d prices for %s",
                len(positions), len(prices), len(pair_ids), wallet)

    return engine.get_positions_with_hedges(positions, prices)
