"""
단일 점 KZG 커밋/열기
======================

다항식 p(x)를 G1 점 C = p(τ)·G1 하나로 묶고, 한 점 z에서의 값 y = p(z)를
G1 점 π 하나로 증명한다. τ는 SRS 안에 거듭제곱 형태로만 남아 있다.

**흐름**:
  commit          C = Σᵢ cᵢ·crs_g1[i]
  create_witness  q(x) = (p(x) - y) / (x - z),  π = commit(q)
  verify_opening  e(π, g2_tau - z·G2) == e(C - y·G1, G2)

p(z) ≠ y이면 (x - z)가 p(x) - y를 나누지 못하므로 위 등식을 만족하는
π를 τ 없이 만들 수 없다.

사용 예시:
    >>> C = commit([2, 3, 5, 1], srs)
    >>> proof = create_witness([2, 3, 5, 1], 7, srs)
    >>> verify_opening(C, proof, 7, 611, srs)  # True
"""

import logging

from pykzg.errors import InvalidInput
from pykzg.field import to_field
from pykzg.polynomial import Polynomial, poly_div

logger = logging.getLogger(__name__)


def _as_polynomial(poly, srs):
    if isinstance(poly, Polynomial):
        if poly.field is srs.curve.Fr:
            return poly
        return Polynomial([int(c) for c in poly.coeffs], field=srs.curve.Fr)
    return Polynomial(list(poly), field=srs.curve.Fr)


def _check_degree(poly, bases, srs):
    if len(poly) > len(bases):
        raise InvalidInput(
            f"polynomial has {len(poly)} coefficients but the SRS supports "
            f"at most {srs.max_degree + 1}"
        )


def commit(poly, srs):
    """crs_g1 위의 MSM으로 p(τ)·G1을 계산한다.

    poly는 Polynomial 또는 계수 리스트이며 SRS 곡선의 스칼라 필드로 읽는다.
    영 다항식은 G1 항등원으로 커밋된다.

    Raises:
        InvalidInput: len(poly) > max_degree + 1
    """
    poly = _as_polynomial(poly, srs)
    _check_degree(poly, srs.g1_powers, srs)
    logger.debug("committing to polynomial with %d coefficients", len(poly))
    return srs.curve.msm(srs.g1_powers, poly.coeffs)


def commit_g2(poly, srs):
    """다항식을 G2 powers에 커밋한다: Σᵢ cᵢ · [τⁱ]₂ = p(τ) · G2.

    배치 검증에서 소거 다항식 Z(x)의 커밋먼트를 만들 때 사용한다.
    """
    poly = _as_polynomial(poly, srs)
    _check_degree(poly, srs.g2_powers, srs)
    return srs.curve.msm(srs.g2_powers, poly.coeffs)


def create_witness(poly, point, srs):
    """z에서의 열기 증명 π = commit((p(x) - p(z)) / (x - z))를 만든다.

    y = p(z)를 상수항에서 빼면 z가 근이 되므로 (x - z)로 나눈 나머지는 0이다.

    Args:
        poly: Polynomial 또는 계수 리스트
        point: 평가 점 z (정수 또는 필드 원소)
        srs: SRS

    Raises:
        InvalidInput: len(poly) > max_degree + 1
    """
    poly = _as_polynomial(poly, srs)
    _check_degree(poly, srs.g1_powers, srs)
    Fr = srs.curve.Fr
    point = to_field(point, Fr)

    # y = p(z)
    value = poly.evaluate(point)

    # p(x) - y: 상수항만 바뀐다
    numerator = poly.with_constant(poly.coeffs[0] - value if len(poly) else -value)

    # (x - z)
    divisor = Polynomial([-point, Fr.one()], field=Fr)

    # q(x) = (p(x) - y) / (x - z), 나머지는 항상 0
    quotient, _ = poly_div(numerator, divisor)

    logger.debug("created opening proof for a polynomial of length %d", len(poly))
    return commit(quotient, srs)


def verify_opening(commitment, proof, point, value, srs):
    """KZG 열기 증명을 검증한다.

    검증 방정식 (페어링):
        e(π, τ·G2 - z·G2) == e(C - y·G1, G2)

    Args:
        commitment: 다항식 커밋먼트 C (G1 점)
        proof: 열기 증명 π (G1 점)
        point: 평가 점 z
        value: 주장하는 평가값 y = p(z)
        srs: SRS

    Returns:
        bool: 검증 성공 여부. 불일치는 오류가 아니라 False이다.

    Raises:
        InvalidInput: commitment/proof가 G1 부분군의 점이 아닐 때
    """
    curve = srs.curve
    curve.check_g1(commitment, "commitment")
    curve.check_g1(proof, "proof")
    point = to_field(point, curve.Fr)
    value = to_field(value, curve.Fr)

    # [τ - z]₂ = τ·G2 - z·G2
    tau_minus_z_g2 = curve.sub(srs.g2_tau, curve.mul(srs.g2, point))

    # C - y·G1
    c_minus_y = curve.sub(commitment, curve.mul(srs.g1, value))

    lhs = curve.pairing(proof, tau_minus_z_g2)
    rhs = curve.pairing(c_minus_y, srs.g2)
    result = lhs == rhs
    logger.debug("opening proof verification %s", "passed" if result else "failed")
    return result
