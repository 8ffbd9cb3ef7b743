"""
KZG 오류 타입
==============

커밋먼트 스킴에서 발생하는 모든 실패는 KZGError의 하위 클래스로 표현된다.
검증 실패(페어링 불일치)는 오류가 아니라 False 반환이다.
"""


class KZGError(Exception):
    """Base exception class."""


class InvalidInput(KZGError, ValueError):
    """SRS 차수 한도를 넘는 다항식, 점/값 개수 불일치 등 잘못된 입력."""


class DivisionByZeroPolynomial(KZGError, ZeroDivisionError):
    """제수 다항식이 비어 있거나 영 다항식일 때."""


class DuplicateEvaluationPoint(KZGError, ValueError):
    """보간/배치 열기에서 같은 평가 점이 두 번 이상 나타날 때."""


class SerializationError(KZGError, ValueError):
    """바이트 인코딩이 잘못되어 복원할 수 없을 때."""
