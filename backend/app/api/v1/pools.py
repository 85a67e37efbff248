"""
Pool Endpoints

Lists the pairs the engine supports.
"""
from fastapi import APIRouter, Request

from app.api.schemas import PoolsResponse

router = APIRouter()


@router.get("/pools", response_model=PoolsResponse)
async def list_pools(request: Request):
    """Supported pairs, in registry order"""
    engine = request.app.state.engine
    return {"pairs": [pair.to_dict() for pair in engine.get_available_pairs()]}
