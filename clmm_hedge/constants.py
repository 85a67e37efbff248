"""
CLMM 상수 정의

집중화 유동성(Whirlpool / Uniswap V3) 계산에 쓰이는 상수들:
- Q64: Whirlpool sqrt price 인코딩 (2^64)
- FEE_TIERS: 지원되는 수수료 티어 (fee_rate, 1/100 bps 단위)
- TICK_SPACINGS: 각 수수료 티어별 틱 간격
- DEFAULT_PAIRS: 기본 풀 레지스트리
"""

from typing import Dict, List, Any

# Fixed-point 인코딩 상수
Q64: int = 2 ** 64

# 수수료 티어 (fee_rate, Whirlpool 기준 1/100 bps)
# 3000 = 0.30%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 8,
    3000: 64,
    10000: 128,
}

# 틱 범위 상수 (Whirlpool)
MIN_TICK: int = -443636
MAX_TICK: int = 443636

SQRT_RATIO_BASE: float = 1.0001

# 표시용 반올림 상한 (토큰 decimals와 비교해 작은 값 사용)
MAX_DISPLAY_DECIMALS: int = 9

# 가격 표시 최소 유효숫자 (1 미만 가격이 decimals 반올림으로 사라지지 않도록)
PRICE_SIGNIFICANT_DIGITS: int = 6

# 토큰 별칭 (entry token으로 "A"/"B" 허용)
TOKEN_A_ALIAS: str = "A"
TOKEN_B_ALIAS: str = "B"

# 기본 풀 레지스트리
DEFAULT_PAIRS: List[Dict[str, Any]] = [
    {
        "pair_id": "SOL/USDC",
        "token_a": {"symbol": "SOL", "decimals": 9,
                    "mint": "So11111111111111111111111111111111111111112"},
        "token_b": {"symbol": "USDC", "decimals": 6,
                    "mint": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"},
        "tick_spacing": 64,
        "fee_rate": 3000,
        "pool_address": "HJPjoWUrhoZzkNfRpHuieeFk9WcZWjwy6PBjZ81ngndJ",
    },
    {
        "pair_id": "SOL/USDT",
        "token_a": {"symbol": "SOL", "decimals": 9,
                    "mint": "So11111111111111111111111111111111111111112"},
        "token_b": {"symbol": "USDT", "decimals": 6,
                    "mint": "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"},
        "tick_spacing": 8,
        "fee_rate": 500,
        "pool_address": "FwewVm8u6tFPGewAyHmWAqad9hmF7mvqxK4mJ7iNqqGC",
    },
    {
        "pair_id": "JUP/USDC",
        "token_a": {"symbol": "JUP", "decimals": 6,
                    "mint": "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"},
        "token_b": {"symbol": "USDC", "decimals": 6,
                    "mint": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"},
        "tick_spacing": 128,
        "fee_rate": 10000,
        "pool_address": None,
    },
]
