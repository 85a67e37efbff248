"""
엔진 오류 정의

Position & Hedge 엔진이 발생시키는 오류 계층.
시뮬레이션 검증 오류는 호출자에게 그대로 전달되고,
Aggregator에서는 포지션별로 수집됩니다.
"""

from typing import Optional


class EngineError(Exception):
    """엔진 오류 기본 클래스"""
    pass


class InvalidRangeError(EngineError):
    """가격 범위 오류 (low >= high, 0 이하 또는 유한하지 않은 경계)"""
    pass


class InvalidPriceError(EngineError):
    """현재 가격 오류 (0 이하 또는 유한하지 않은 값)"""
    pass


class InvalidTokenError(EngineError):
    """entry token이 페어의 두 토큰 중 하나가 아님"""
    pass


class UnknownPairError(EngineError):
    """레지스트리에 없는 페어"""

    def __init__(self, pair_id: str):
        self.pair_id = pair_id
        super().__init__(f"Unknown pair: {pair_id}")


class ValidationError(EngineError):
    """요청 필드 검증 오류

    Attributes:
        field: 위반된 필드 이름
        reason: 위반 내용
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class PriceUnavailableError(EngineError):
    """페어의 현재 가격을 얻을 수 없음 (배치에서는 해당 포지션만 실패)"""

    def __init__(self, pair_id: str, detail: Optional[str] = None):
        self.pair_id = pair_id
        self.detail = detail
        message = f"Price unavailable for {pair_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ComputationError(EngineError):
    """내부 일관성 오류 (도달하면 안 되는 상태)"""
    pass
