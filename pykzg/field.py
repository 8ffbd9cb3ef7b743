"""
스칼라 필드(Scalar Field)
==========================

KZG 스킴의 모든 다항식 계수와 평가 점은 페어링 곡선의 스칼라 필드 원소이다.

**지원 필드**:
  - FR_BN128: bn128 곡선 위수 (≈ 2^254) 위의 소수체
  - FR_BLS12_381: BLS12-381 곡선 위수 (≈ 2^255) 위의 소수체

py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 그대로 사용한다.
주의: py_ecc는 0의 역원을 0으로 반환하므로, 0으로 나누기는 호출 측에서 먼저 검사해야 한다.

사용 예시:
    >>> from pykzg.field import FR
    >>> a = FR(3)
    >>> b = FR(7)
    >>> a * b        # FR(21)
    >>> FR(1) / a    # 3의 모듈러 역원
"""

import secrets

from py_ecc.fields import bn128_FQ, bls12_381_FQ
from py_ecc import optimized_bn128, optimized_bls12_381


class FR_BN128(bn128_FQ):
    """bn128 스칼라 필드 원소."""
    field_modulus = optimized_bn128.curve_order


class FR_BLS12_381(bls12_381_FQ):
    """BLS12-381 스칼라 필드 원소."""
    field_modulus = optimized_bls12_381.curve_order


# 기본 스칼라 필드 (기본 곡선 BLS12-381과 일치)
FR = FR_BLS12_381

# 스칼라의 고정 바이트 크기 (두 곡선 모두 256비트 이하)
SCALAR_SIZE = 32


def to_field(value, field):
    """정수 또는 필드 원소를 주어진 필드의 원소로 변환한다."""
    if isinstance(value, field):
        return value
    return field(int(value))


def random_scalar(field):
    """0이 아닌 균등 난수 필드 원소를 반환한다."""
    return field(secrets.randbelow(field.field_modulus - 1) + 1)
