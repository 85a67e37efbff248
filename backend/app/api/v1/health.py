"""
Health Check Endpoint
"""
from fastapi import APIRouter, Request
from datetime import datetime

from app.api.schemas import HealthCheckResponse
from app.config import settings

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request):
    """
    Health check endpoint

    Returns the current health status of the API.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.API_VERSION,
        pairs=len(request.app.state.engine.registry),
        timestamp=datetime.utcnow()
    )
