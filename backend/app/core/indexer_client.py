"""
Position indexer client for live Whirlpool positions and pool prices

Endpoints used:
- GET /wallets/{wallet}/positions → raw positions (ticks, u128 liquidity)
- GET /pools/{pool_address}       → {"sqrt_price": "<Q64.64>"}

Raw values are decoded with the engine's tick / sqrt price math before
they reach the engine.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from clmm_hedge.data.registry import PoolRegistry
from clmm_hedge.data.sources import PositionSource, PriceSource
from clmm_hedge.data.types import LiquidityPosition, OnChainPosition, Pair
from clmm_hedge.errors import EngineError, PriceUnavailableError
from clmm_hedge.math.sqrt_price_math import sqrt_price_x64_to_price

logger = logging.getLogger(__name__)


class IndexerClient:
    """Thin async JSON client for the position indexer"""

    def __init__(self, base_url: str, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_json(self, path: str) -> Any:
        """
        GET a path relative to the indexer base URL.

        Raises:
            httpx.HTTPError: network error or non-2xx status
            ValueError: response body is not JSON
        """
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                     transport=self.transport) as client:
            response = await client.get(path)
            response.raise_for_status()
            return response.json()


class IndexerPositionSource(PositionSource):
    """Live positions of a wallet, decoded against the pool registry"""

    def __init__(self, client: IndexerClient, registry: PoolRegistry):
        self.client = client
        self.registry = registry

    async def fetch_live_positions(self, wallet: str) -> List[LiquidityPosition]:
        try:
            data = await self.client.get_json(f"/wallets/{wallet}/positions")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[Indexer] No live positions available for %s: %s", wallet, e)
            return []

        items = data.get("positions", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            logger.warning("[Indexer] Unexpected positions payload for %s: %r", wallet, type(data).__name__)
            return []

        positions = []
        for raw in items:
            position = self._decode(raw)
            if position is not None:
                positions.append(position)

        logger.info("[Indexer] Fetched %d/%d positions for %s", len(positions), len(items), wallet)
        return positions

    def _decode(self, raw: Dict[str, Any]) -> Optional[LiquidityPosition]:
        try:
            onchain = OnChainPosition.from_dict(raw)
            return onchain.to_position(self.registry.get(onchain.pair_id))
        except (KeyError, TypeError, ValueError, EngineError) as e:
            address = raw.get("address") if isinstance(raw, dict) else None
            logger.warning("[Indexer] Skipping position %s: %s", address, e)
            return None


class IndexerPriceSource(PriceSource):
    """Current pool price from the on-chain sqrt price"""

    def __init__(self, client: IndexerClient):
        self.client = client

    async def fetch_current_price(self, pair: Pair) -> float:
        if not pair.pool_address:
            raise PriceUnavailableError(pair.pair_id, "no pool address configured")

        try:
            data = await self.client.get_json(f"/pools/{pair.pool_address}")
            sqrt_price_x64 = int(data["sqrt_price"])
            return sqrt_price_x64_to_price(sqrt_price_x64, pair.token_a.decimals, pair.token_b.decimals)
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.warning("[Indexer] Price fetch failed for %s: %s", pair.pair_id, e)
            raise PriceUnavailableError(pair.pair_id, str(e)) from e
