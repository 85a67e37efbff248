"""
FastAPI Main Application

Position & hedge API for Whirlpool concentrated liquidity positions.
"""
import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.api.schemas import ErrorResponse
from app.api.v1 import health, pools, positions, simulate
from app.core.indexer_client import IndexerClient, IndexerPositionSource, IndexerPriceSource
from clmm_hedge.data.registry import PoolRegistry
from clmm_hedge.data.sources import PositionSource, PriceSource
from clmm_hedge.engine import HedgeEngine
from clmm_hedge.errors import ComputationError, EngineError, PriceUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    """Map engine errors to HTTP responses"""
    if isinstance(exc, ComputationError):
        logger.error("[API] Computation error on %s: %s", request.url.path, exc)
        return _error_response(500, "Internal computation error")
    if isinstance(exc, PriceUnavailableError):
        return _error_response(503, str(exc), exc.pair_id)

    detail = exc.field if isinstance(exc, ValidationError) else type(exc).__name__
    return _error_response(400, str(exc), detail)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies the same way as engine validation errors"""
    errors = exc.errors()
    if not errors:
        return _error_response(400, "Invalid request")

    loc = errors[0].get("loc", ())
    field = str(loc[-1]) if loc else "body"
    return _error_response(400, f"{field}: {errors[0].get('msg', 'invalid value')}", field)


def create_app(
    engine: Optional[HedgeEngine] = None,
    position_source: Optional[PositionSource] = None,
    price_source: Optional[PriceSource] = None,
    wallet: Optional[str] = None
) -> FastAPI:
    """
    Build the API application.

    Args:
        engine: Hedge engine (defaults to one over settings.POOLS_FILE or the built-in pairs)
        position_source: Live position source (defaults to the position indexer)
        price_source: Current price source (defaults to the position indexer)
        wallet: Default wallet for GET /positions (defaults to settings.WALLET_ADDRESS)
    """
    if engine is None:
        registry = PoolRegistry.from_yaml(settings.POOLS_FILE) if settings.POOLS_FILE else PoolRegistry.default()
        engine = HedgeEngine(registry)

    if position_source is None or price_source is None:
        client = IndexerClient(settings.POSITIONS_API_URL, timeout=settings.REQUEST_TIMEOUT)
        if position_source is None:
            position_source = IndexerPositionSource(client, engine.registry)
        if price_source is None:
            price_source = IndexerPriceSource(client)

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.engine = engine
    app.state.position_source = position_source
    app.state.price_source = price_source
    app.state.wallet = wallet if wallet is not None else settings.WALLET_ADDRESS

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EngineError, engine_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(positions.router, prefix="/api/v1", tags=["Positions"])
    app.include_router(simulate.router, prefix="/api/v1", tags=["Simulation"])
    app.include_router(pools.router, prefix="/api/v1", tags=["Pools"])
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "name": settings.API_TITLE,
            "version": settings.API_VERSION,
            "description": settings.API_DESCRIPTION,
            "docs": "/docs",
            "health": "/api/v1/health",
            "timestamp": datetime.utcnow().isoformat()
        }

    @app.on_event("startup")
    async def startup_event():
        """Actions to perform on application startup"""
        logger.info("Starting %s v%s", settings.API_TITLE, settings.API_VERSION)
        logger.info("Pairs: %s", ", ".join(p.pair_id for p in app.state.engine.get_available_pairs()))
        logger.info("Position indexer: %s", settings.POSITIONS_API_URL)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Actions to perform on application shutdown"""
        logger.info("Shutting down %s", settings.API_TITLE)

    return app


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
