"""
Live Position Endpoints

Reports token composition, exposure and hedge for every live position of
a wallet. Positions that fail are listed under "errors" and do not fail
the request.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Request

from app.api.schemas import PositionsResponse
from app.core.positions import collect_positions
from clmm_hedge.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/positions", response_model=PositionsResponse)
async def get_positions(request: Request, wallet: Optional[str] = None):
    """
    Live positions with hedges

    Args:
        wallet: Wallet address (defaults to the configured WALLET_ADDRESS)
    """
    state = request.app.state
    wallet = wallet or state.wallet
    if not wallet:
        raise ValidationError("wallet", "is required")

    result = await collect_positions(state.engine, state.position_source, state.price_source, wallet)
    if result.errors:
        logger.info("[Positions] %d of %d positions failed for %s",
                    len(result.errors), len(result.outcomes), wallet)

    return {
        "wallet": wallet,
        "positions": [report.to_dict() for report in result.reports],
        "errors": [failure.to_dict() for failure in result.errors],
    }
