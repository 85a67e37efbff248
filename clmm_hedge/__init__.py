"""
CLMM Position & Hedge Engine

집중화 유동성(Whirlpool / Uniswap V3) 포지션의 토큰 구성과
델타를 계산하고, 델타를 상쇄하는 선형 헤지 규모를 산출하는 라이브러리.
"""

__version__ = "0.1.0"
__author__ = "Zekiya"

from .constants import Q64, FEE_TIERS, TICK_SPACINGS
from .errors import (
    EngineError,
    InvalidRangeError,
    InvalidPriceError,
    InvalidTokenError,
    UnknownPairError,
    ValidationError,
    PriceUnavailableError,
    ComputationError,
)
