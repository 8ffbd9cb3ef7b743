"""
KZG E2E 데모: p(x) = 2 + 3x + 5x² + x³
=========================================

이 스크립트는 KZG 커밋먼트 스킴의 전체 흐름을 시연한다.

실행:
    python -m pykzg.example [curve]

흐름:
    1. SRS 생성 (trusted setup)
    2. 다항식 커밋
    3. 단일 점 열기 증명 생성/검증 (z = 7, p(7) = 611)
    4. 조작된 평가값으로 검증 (611 → 612)
    5. 배치 열기 증명 생성/검증
    6. 직렬화 왕복 후 검증
"""

import sys

from pykzg.scheme import KZG
from pykzg.serialization import (
    deserialize_proof,
    deserialize_srs,
    serialize_proof,
    serialize_srs,
)


def main(curve=None):
    kzg = KZG(curve=curve, degree=3)

    print("=" * 60)
    print("  KZG Polynomial Commitment Demo")
    print(f"  곡선: {kzg.curve.name}, 다항식: 2 + 3x + 5x² + x³")
    print("=" * 60)

    # ── 1. SRS 생성 ──
    print("\n[1] SRS 생성 (trusted setup)...")
    srs = kzg.generate(seed=12345)
    print(f"    최대 다항식 차수: {srs.max_degree}")
    print(f"    G1 powers 수: {len(srs.g1_powers)}, G2 powers 수: {len(srs.g2_powers)}")

    # ── 2. 커밋 ──
    print("\n[2] 다항식 커밋...")
    poly = kzg.polynomial([2, 3, 5, 1])
    commitment = kzg.commit(poly)
    print(f"    C = p(τ)·G1 ({len(serialize_proof(commitment, kzg.curve))} bytes 압축)")

    # ── 3. 단일 점 열기 ──
    print("\n[3] 단일 점 열기 (z = 7)...")
    value = kzg.evaluate(poly, 7)
    proof = kzg.open(poly, 7)
    ok = kzg.verify(7, value, commitment, proof)
    print(f"    p(7) = {int(value)}")
    print(f"    검증 결과: {'성공 ✓' if ok else '실패 ✗'}")

    # ── 4. 조작된 평가값 ──
    print("\n[4] 조작된 평가값으로 검증 (p(7) = 612 주장)...")
    forged = kzg.verify(7, value + 1, commitment, proof)
    print(f"    검증 결과: {'성공 ✓' if forged else '실패 ✗ (예상대로 실패)'}")

    # ── 5. 배치 열기 ──
    print("\n[5] 배치 열기 (z ∈ {1, 2, 3})...")
    points = [1, 2, 3]
    values = [kzg.evaluate(poly, z) for z in points]
    multi_proof = kzg.multi_open(poly, points)
    batch_ok = kzg.verify_multi(points, values, commitment, multi_proof)
    print(f"    값: {[int(v) for v in values]}")
    print(f"    검증 결과: {'성공 ✓' if batch_ok else '실패 ✗'}")

    # ── 6. 직렬화 왕복 ──
    print("\n[6] 직렬화 왕복 후 검증...")
    srs_bytes = serialize_srs(srs)
    proof_bytes = serialize_proof(proof, kzg.curve)
    remote = KZG.from_srs(deserialize_srs(srs_bytes, kzg.curve))
    remote_ok = remote.verify(7, value, commitment, deserialize_proof(proof_bytes, kzg.curve))
    print(f"    SRS {len(srs_bytes)} bytes, 증명 {len(proof_bytes)} bytes")
    print(f"    검증 결과: {'성공 ✓' if remote_ok else '실패 ✗'}")

    result = ok and not forged and batch_ok and remote_ok
    print("\n" + "=" * 60)
    if result:
        print("  데모 완료: 모든 검사 통과!")
    else:
        print("  데모 완료: 일부 검사 실패")
    print("=" * 60)

    return result


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
