"""
API Request/Response Schemas using Pydantic

Defines data models for the position and hedge API endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class SimulateRequest(BaseModel):
    """Request payload for POST /api/v1/simulate endpoint"""
    pair: str = Field(..., description="Pair id (e.g., SOL/USDC)")
    range_low: float = Field(..., alias="rangeLow", description="Range lower price (token B per token A)")
    range_high: float = Field(..., alias="rangeHigh", description="Range upper price (token B per token A)")
    amount: float = Field(..., description="Deposit amount in entry token units")
    entry_token: str = Field(..., alias="entryToken", description="Entry token symbol (or A/B)")
    entry_price: Optional[float] = Field(None, alias="entryPrice", description="Price at deposit (defaults to current price)")
    current_price: Optional[float] = Field(None, alias="currentPrice", description="Current price (fetched from the pool if omitted)")
    snap_to_ticks: bool = Field(default=False, alias="snapToTicks", description="Snap range to initializable ticks")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "pair": "SOL/USDC",
                "rangeLow": 120.0,
                "rangeHigh": 180.0,
                "amount": 1000.0,
                "entryToken": "USDC",
                "currentPrice": 150.0
            }
        }

    def engine_payload(self) -> dict:
        """Fields in the shape SimulationRequest.parse expects"""
        return self.model_dump(by_alias=True, exclude={"current_price"})


class SimulateProfileRequest(SimulateRequest):
    """Request payload for POST /api/v1/simulate/profile endpoint"""
    price_low: float = Field(..., alias="priceLow", description="Lowest price of the profile window")
    price_high: float = Field(..., alias="priceHigh", description="Highest price of the profile window")
    points: int = Field(default=50, description="Number of grid points")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "pair": "SOL/USDC",
                "rangeLow": 120.0,
                "rangeHigh": 180.0,
                "amount": 1000.0,
                "entryToken": "USDC",
                "currentPrice": 150.0,
                "priceLow": 100.0,
                "priceHigh": 200.0,
                "points": 21
            }
        }

    def engine_payload(self) -> dict:
        return self.model_dump(
            by_alias=True,
            exclude={"current_price", "price_low", "price_high", "points"}
        )


class PositionReportResponse(BaseModel):
    """Token composition, exposure and hedge of one position"""
    position_id: str = Field(..., description="Position address (or 'simulation')")
    pair: str = Field(..., description="Pair id")
    token_a: str = Field(..., description="Base token symbol")
    token_b: str = Field(..., description="Numeraire token symbol")
    range_low: float = Field(..., description="Range lower price")
    range_high: float = Field(..., description="Range upper price")
    current_price: float = Field(..., description="Price the report was computed at")
    range_status: str = Field(..., description="below, in_range or above")
    liquidity: float = Field(..., description="Position liquidity (human units)")
    amount_a: float = Field(..., description="Token A held")
    amount_b: float = Field(..., description="Token B held")
    value: float = Field(..., description="Position value in token B")
    delta: float = Field(..., description="Token A exposure")
    hedge_side: str = Field(..., description="short, long or flat")
    hedge_notional: float = Field(..., description="Hedge size in token A")
    hedge_notional_value: float = Field(..., description="Hedge size in token B")
    entry_price: Optional[float] = Field(None, description="Entry price")
    entry_token: Optional[str] = Field(None, description="Entry token symbol")
    hodl_value: Optional[float] = Field(None, description="Value of the entry holdings at the current price")
    impermanent_loss: Optional[float] = Field(None, description="LP value minus HODL value (token B)")
    impermanent_loss_pct: Optional[float] = Field(None, description="Impermanent loss as % of HODL value")

    class Config:
        json_schema_extra = {
            "example": {
                "position_id": "simulation",
                "pair": "SOL/USDC",
                "token_a": "SOL",
                "token_b": "USDC",
                "range_low": 120.0,
                "range_high": 180.0,
                "current_price": 150.0,
                "range_status": "in_range",
                "liquidity": 106.96,
                "amount_a": 3.35,
                "amount_b": 497.6,
                "value": 1000.0,
                "delta": 3.35,
                "hedge_side": "short",
                "hedge_notional": 3.35,
                "hedge_notional_value": 502.4,
                "entry_price": 150.0,
                "entry_token": "USDC",
                "hodl_value": 1000.0,
                "impermanent_loss": 0.0,
                "impermanent_loss_pct": 0.0
            }
        }


class PositionErrorResponse(BaseModel):
    """A position that could not be reported"""
    index: int = Field(..., description="Position index in the fetched list")
    position_id: str = Field(..., description="Position address")
    pair: str = Field(..., description="Pair id")
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")


class PositionsResponse(BaseModel):
    """Response payload for GET /api/v1/positions endpoint"""
    wallet: str = Field(..., description="Wallet address")
    positions: List[PositionReportResponse] = Field(..., description="Reports of positions that succeeded")
    errors: List[PositionErrorResponse] = Field(..., description="Positions that failed")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class ProfileResponse(BaseModel):
    """Response payload for POST /api/v1/simulate/profile endpoint"""
    pair: str = Field(..., description="Pair id")
    price: List[float] = Field(..., description="Price grid")
    amount_a: List[float] = Field(..., description="Token A held at each price")
    amount_b: List[float] = Field(..., description="Token B held at each price")
    value: List[float] = Field(..., description="Position value at each price")
    delta: List[float] = Field(..., description="Hedge size (token A) at each price")


class TokenInfo(BaseModel):
    symbol: str
    decimals: int
    mint: Optional[str] = None


class PairInfo(BaseModel):
    """Supported pair"""
    pair_id: str = Field(..., description="Pair id")
    token_a: TokenInfo
    token_b: TokenInfo
    tick_spacing: int = Field(..., description="Tick spacing")
    fee_rate: int = Field(..., description="Fee rate in hundredths of a bip")
    fee_tier: str = Field(..., description="Fee tier label")
    pool_address: Optional[str] = Field(None, description="Whirlpool address")

    class Config:
        json_schema_extra = {
            "example": {
                "pair_id": "SOL/USDC",
                "token_a": {"symbol": "SOL", "decimals": 9, "mint": None},
                "token_b": {"symbol": "USDC", "decimals": 6, "mint": None},
                "tick_spacing": 64,
                "fee_rate": 3000,
                "fee_tier": "0.30%",
                "pool_address": None
            }
        }


class PoolsResponse(BaseModel):
    """Response payload for GET /api/v1/pools endpoint"""
    pairs: List[PairInfo] = Field(..., description="Supported pairs")


class HealthCheckResponse(BaseModel):
    """Response payload for GET /api/v1/health endpoint"""
    status: str = Field(..., description="Health status (healthy or unhealthy)")
    version: str = Field(..., description="API version")
    pairs: int = Field(..., description="Number of supported pairs")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "pairs": 3,
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


class ErrorResponse(BaseModel):
    """Error response payload"""
    status: str = Field(default="error", description="Response status")
    message: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "error",
                "message": "amount: must be positive (got -10.0)",
                "detail": "amount",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
