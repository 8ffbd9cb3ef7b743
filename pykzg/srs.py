"""
Structured Reference String (SRS)
==================================

KZG 커밋먼트에 필요한 공개 파라미터를 생성한다.

**SRS란?**
  비밀 값 τ ("toxic waste")의 거듭제곱을 두 그룹에 숨긴 것이다.

  SRS = {
      crs_g1: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      crs_g2: [G2, τ·G2, τ²·G2, ..., τ^d·G2]
      g2_tau: τ·G2
  }

  crs_g2 전체가 필요한 이유: 배치 검증에서 소거 다항식 Z(x)를 G2에 커밋한다.

**보안**:
  τ를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  τ는 setup 호출 안에서만 존재하며 반환값, repr, 로그 어디에도 남지 않는다.
  실제 시스템에서는 MPC 세레모니로 τ를 생성해야 하며,
  여기서는 단일 참여자 설정만 제공한다.

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42)
    >>> len(srs.g1_powers)  # 17 (0차부터 16차까지)
"""

import hashlib
import logging
import secrets

from pykzg.curve import get_curve
from pykzg.errors import InvalidInput

logger = logging.getLogger(__name__)


class ToxicWaste:
    """setup 한 번에만 쓰이는 비밀 스칼라 τ의 범위(scope).

    with 블록을 벗어나면 (정상 종료든 예외든) 참조를 지운다.
    파이썬 정수는 불변이라 메모리를 덮어쓸 수는 없지만,
    τ에 대한 참조가 이 객체 밖으로 새지 않도록 한다.
    """

    __slots__ = ("_value",)

    def __init__(self, value):
        self._value = value

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.discard()
        return False

    def __repr__(self):
        return "ToxicWaste(<discarded>)" if self._value is None else "ToxicWaste(<secret>)"

    @property
    def value(self):
        if self._value is None:
            raise InvalidInput("toxic waste has already been discarded")
        return self._value

    def discard(self):
        self._value = None

    def __reduce__(self):
        raise TypeError("toxic waste cannot be pickled")


class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    생성 후에는 변경되지 않으므로 여러 스레드에서 동기화 없이 공유할 수 있다.

    속성:
        g1_powers: (G1, τ·G1, ..., τ^d·G1)
        g2_powers: (G2, τ·G2, ..., τ^d·G2)
        g2_tau: τ·G2
        max_degree: 지원하는 최대 다항식 차수 d
        curve: PairingCurve
    """

    def __init__(self, g1_powers, g2_powers, g2_tau, curve=None):
        g1_powers = tuple(g1_powers)
        g2_powers = tuple(g2_powers)
        if not g1_powers or len(g1_powers) != len(g2_powers):
            raise InvalidInput(
                f"SRS needs equally long, non-empty G1/G2 power sequences "
                f"({len(g1_powers)} != {len(g2_powers)})"
            )
        curve = get_curve(curve)
        # crs_g1[0] = G1, crs_g2[0] = G2, g2_tau = crs_g2[1]
        if not (curve.eq(g1_powers[0], curve.G1) and curve.eq(g2_powers[0], curve.G2)):
            raise InvalidInput("SRS power sequences must start at the curve generators")
        if len(g2_powers) > 1 and not curve.eq(g2_tau, g2_powers[1]):
            raise InvalidInput("g2_tau does not match the first G2 power")
        self.curve = curve
        self.g1_powers = g1_powers
        self.g2_powers = g2_powers
        self.g2_tau = g2_tau
        self.max_degree = len(g1_powers) - 1

    # crs_g1 / crs_g2 / degree 별칭
    @property
    def crs_g1(self):
        return self.g1_powers

    @property
    def crs_g2(self):
        return self.g2_powers

    @property
    def degree(self):
        return self.max_degree

    @property
    def g1(self):
        return self.g1_powers[0]

    @property
    def g2(self):
        return self.g2_powers[0]

    def __repr__(self):
        return f"SRS(curve={self.curve.name}, max_degree={self.max_degree})"

    def __eq__(self, other):
        if not isinstance(other, SRS):
            return NotImplemented
        eq = self.curve.eq
        return (
            self.curve is other.curve
            and self.max_degree == other.max_degree
            and all(eq(a, b) for a, b in zip(self.g1_powers, other.g1_powers))
            and all(eq(a, b) for a, b in zip(self.g2_powers, other.g2_powers))
            and eq(self.g2_tau, other.g2_tau)
        )

    __hash__ = None

    @classmethod
    def generate(cls, max_degree, seed=None, curve=None):
        """비밀 τ를 뽑아 SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수.
            seed: 결정론적 생성을 위한 시드 (테스트/데모용).
                  None이면 secrets 모듈로 τ를 뽑는다.
            curve: 곡선 이름 또는 PairingCurve (기본: BLS12-381)

        Returns:
            SRS: 생성된 구조화 참조 문자열

        예시:
            >>> srs = SRS.generate(max_degree=3, seed=1234)
        """
        curve = get_curve(curve)
        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau_int = int.from_bytes(h, "big") % (curve.order - 1) + 1
        else:
            tau_int = secrets.randbelow(curve.order - 1) + 1
        secret = ToxicWaste(curve.Fr(tau_int))
        del tau_int
        return setup(secret, max_degree, curve)


def setup(secret, degree, curve=None):
    """신뢰 설정(trusted setup): τ의 거듭제곱을 G1, G2에 숨긴다.

    for i in 0..=degree:
        crs_g1[i] = G1 · τⁱ
        crs_g2[i] = G2 · τⁱ
    g2_tau = G2 · τ

    τ는 이 함수 안에서만 사용되고 반환 전에 (예외 경로 포함) 폐기된다.

    Args:
        secret: 비밀 스칼라 τ (정수, 필드 원소, 또는 ToxicWaste)
        degree: 최대 다항식 차수 d (0 이상)
        curve: 곡선 이름 또는 PairingCurve

    Returns:
        SRS

    Raises:
        InvalidInput: degree < 0 이거나 τ = 0 인 경우
    """
    curve = get_curve(curve)
    waste = secret if isinstance(secret, ToxicWaste) else ToxicWaste(secret)
    del secret
    with waste:
        if degree < 0:
            raise InvalidInput(f"SRS degree must be non-negative, got {degree}")
        tau = curve.Fr(int(waste.value))
        if tau == 0:
            raise InvalidInput("trusted setup secret must be non-zero")

        g1_powers = []
        g2_powers = []
        tau_power = curve.Fr.one()  # τ^0 = 1
        for _ in range(degree + 1):
            g1_powers.append(curve.mul(curve.G1, tau_power))
            g2_powers.append(curve.mul(curve.G2, tau_power))
            tau_power = tau_power * tau
        g2_tau = curve.mul(curve.G2, tau)
        del tau, tau_power

    logger.debug("generated SRS on %s with max degree %d", curve.name, degree)
    return SRS(g1_powers, g2_powers, g2_tau, curve)
