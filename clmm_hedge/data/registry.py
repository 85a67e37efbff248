"""
Pool Registry - 지원 페어 카탈로그

프로세스 시작 시 한 번 구성되는 불변 레지스트리.
전역 상태 대신 엔진 생성 시 명시적으로 전달합니다.
"""

from types import MappingProxyType
from typing import Iterable, List, Dict, Any

import yaml

from ..constants import DEFAULT_PAIRS
from ..errors import UnknownPairError
from .types import Pair


class PoolRegistry:
    """지원 페어 레지스트리

    사용법:
        registry = PoolRegistry.default()
        pair = registry.get("SOL/USDC")
    """

    def __init__(self, pairs: Iterable[Pair]):
        """
        Args:
            pairs: 페어 목록 (pair_id 중복 불가)

        Raises:
            ValueError: pair_id가 중복된 경우
        """
        by_id: Dict[str, Pair] = {}
        for pair in pairs:
            if pair.pair_id in by_id:
                raise ValueError(f"duplicate pair id: {pair.pair_id}")
            by_id[pair.pair_id] = pair
        self._pairs = MappingProxyType(by_id)

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> "PoolRegistry":
        return cls(Pair.from_dict(item) for item in items)

    @classmethod
    def from_yaml(cls, path: str) -> "PoolRegistry":
        """YAML 파일에서 레지스트리 로드

        파일 형식:
            pairs:
              - pair_id: SOL/USDC
                token_a: {symbol: SOL, decimals: 9}
                token_b: {symbol: USDC, decimals: 6}
                tick_spacing: 64
                fee_rate: 3000
        """
        with open(path, "r") as f:
            config = yaml.safe_load(f) or {}
        return cls.from_dicts(config.get("pairs", []))

    @classmethod
    def default(cls) -> "PoolRegistry":
        """기본 Whirlpool 페어 레지스트리"""
        return cls.from_dicts(DEFAULT_PAIRS)

    def get(self, pair_id: str) -> Pair:
        """페어 조회

        Raises:
            UnknownPairError: 등록되지 않은 페어
        """
        try:
            return self._pairs[pair_id]
        except KeyError:
            raise UnknownPairError(pair_id) from None

    def pairs(self) -> List[Pair]:
        """등록 순서대로 전체 페어 반환"""
        return list(self._pairs.values())

    def __contains__(self, pair_id: object) -> bool:
        return pair_id in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)
