"""
KZG 배치 열기 (Multi-Point Opening)
====================================

여러 점 S = {z₁, ..., z_k} 에서의 평가값을 G1 점 하나로 증명한다.

**구성**:
  - 소거 다항식 Z(x) = Π (x - zᵢ): S의 모든 점에서 0
  - Lagrange 다항식 L(x): 모든 i에 대해 L(zᵢ) = p(zᵢ)
  - p(x) - L(x)는 S의 모든 점에서 0이므로 Z(x)로 나누어 떨어진다
  - 증명 π = q(τ)·G1, q(x) = (p(x) - L(x)) / Z(x)

**검증**:
  e(π, Z(τ)·G2) == e(C - L(τ)·G1, G2)

  Z(τ)·G2는 crs_g2에 Z를 커밋하여 얻으므로 k ≤ d 여야 한다.

단일 점 {z}에 대해서는 Z(x) = x - z, L(x) = p(z) 이므로
create_multi_witness(p, [z]) 와 create_witness(p, z) 는 같은 증명을 만든다.

**복잡도**: 나이브 곱셈/보간으로 점 개수 k에 대해 O(k²).
"""

import logging

from pykzg.errors import InvalidInput
from pykzg.field import to_field
from pykzg.kzg import _as_polynomial, _check_degree, commit, commit_g2
from pykzg.polynomial import Polynomial, interpolate, poly_div

logger = logging.getLogger(__name__)


def _check_points(points, srs):
    if not points:
        raise InvalidInput("a batch opening needs at least one evaluation point")
    if len(points) > srs.max_degree:
        raise InvalidInput(
            f"{len(points)} evaluation points exceed the SRS degree {srs.max_degree}"
        )


def get_lagrange(poly, points, field=None):
    """p를 각 점에서 평가하고 보간한 L(x)를 p와 같은 길이로 맞춰 반환한다.

    p - L 뺄셈 전에 두 다항식의 길이를 정렬하기 위해 0으로 채운다.
    poly가 계수 리스트이면 field (생략 시 계수에서 추론) 위의 다항식으로 읽는다.

    Raises:
        DuplicateEvaluationPoint: 같은 점이 반복될 때
    """
    if not isinstance(poly, Polynomial):
        poly = Polynomial(list(poly), field=field)
    field = poly.field
    points = [to_field(z, field) for z in points]
    values = [poly.evaluate(z) for z in points]
    return interpolate(points, values, field).resize(len(poly))


def create_multi_witness(poly, points, srs):
    """여러 점에서의 평가를 한 번에 증명하는 배치 열기 증명을 생성한다.

    Args:
        poly: 열어볼 다항식 p(x)
        points: 서로 다른 평가 점들
        srs: SRS

    Returns:
        G1 점: 배치 열기 증명 π

    Raises:
        InvalidInput: 점이 없거나 SRS 차수보다 많을 때, 다항식이 너무 길 때
        DuplicateEvaluationPoint: 같은 점이 반복될 때
    """
    poly = _as_polynomial(poly, srs)
    _check_degree(poly, srs.g1_powers, srs)
    points = [to_field(z, srs.curve.Fr) for z in points]
    _check_points(points, srs)

    # Z(x) = Π (x - zᵢ)
    vanishing = Polynomial.vanishing(points, srs.curve.Fr)

    # L(x): p를 S 위에서 보간
    lagrange = get_lagrange(poly, points)

    # q(x) = (p(x) - L(x)) / Z(x)
    quotient, _ = poly_div(poly - lagrange, vanishing)

    logger.debug("created batch opening proof for %d points", len(points))
    return commit(quotient, srs)


def verify_multi_opening(commitment, proof, points, values, srs):
    """배치 열기 증명을 검증한다.

    검증 방정식:
        e(π, [Z(τ)]₂) == e(C - [L(τ)]₁, G2)

    Args:
        commitment: 다항식 커밋먼트 C
        proof: 배치 열기 증명 π
        points: 평가 점들
        values: 각 점에서 주장하는 평가값들
        srs: SRS

    Returns:
        bool: 검증 성공 여부

    Raises:
        InvalidInput: 점/값 개수 불일치, 점이 없거나 너무 많을 때, 잘못된 G1 점
        DuplicateEvaluationPoint: 같은 점이 반복될 때
    """
    curve = srs.curve
    Fr = curve.Fr
    points = [to_field(z, Fr) for z in points]
    values = [to_field(v, Fr) for v in values]
    if len(points) != len(values):
        raise InvalidInput(
            f"got {len(points)} evaluation points but {len(values)} values"
        )
    _check_points(points, srs)
    curve.check_g1(commitment, "commitment")
    curve.check_g1(proof, "proof")

    # [Z(τ)]₂
    vanishing = Polynomial.vanishing(points, Fr)
    commitment_z = commit_g2(vanishing, srs)

    # [L(τ)]₁
    lagrange = interpolate(points, values, Fr)
    commitment_l = commit(lagrange, srs)

    lhs = curve.pairing(proof, commitment_z)
    rhs = curve.pairing(curve.sub(commitment, commitment_l), srs.g2)
    result = lhs == rhs
    logger.debug(
        "batch opening verification for %d points %s",
        len(points), "passed" if result else "failed",
    )
    return result
