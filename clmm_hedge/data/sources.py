"""
Data Sources - 외부 데이터 조회 인터페이스

엔진은 I/O를 하지 않습니다. 라이브 포지션과 현재 가격은
이 인터페이스를 구현한 수집기(collaborator)가 제공합니다.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from ..errors import PriceUnavailableError
from .types import LiquidityPosition, Pair


class PositionSource(ABC):
    """지갑의 라이브 포지션 조회"""

    @abstractmethod
    async def fetch_live_positions(self, wallet: str) -> List[LiquidityPosition]:
        """지갑의 포지션 목록

        네트워크/파싱 오류는 빈 목록으로 처리합니다 (예외를 던지지 않음).
        """


class PriceSource(ABC):
    """페어 현재 가격 조회"""

    @abstractmethod
    async def fetch_current_price(self, pair: Pair) -> float:
        """현재 가격 (token B / token A)

        Raises:
            PriceUnavailableError: 가격을 얻을 수 없는 경우
        """


class StaticPositionSource(PositionSource):
    """메모리 기반 포지션 소스 (테스트/오프라인용)"""

    def __init__(self, positions: Optional[Dict[str, Sequence[LiquidityPosition]]] = None):
        self._positions = {wallet: list(items) for wallet, items in (positions or {}).items()}

    async def fetch_live_positions(self, wallet: str) -> List[LiquidityPosition]:
        return list(self._positions.get(wallet, []))


class StaticPriceSource(PriceSource):
    """메모리 기반 가격 소스 (테스트/오프라인용)"""

    def __init__(self, prices: Optional[Dict[str, float]] = None):
        self._prices = dict(prices or {})

    async def fetch_current_price(self, pair: Pair) -> float:
        if pair.pair_id not in self._prices:
            raise PriceUnavailableError(pair.pair_id, "no static price configured")
        return self._prices[pair.pair_id]
