"""
페어링 곡선 능력(Capability) 인터페이스
========================================

KZG 알고리즘은 특정 곡선에 묶이지 않는다. 필요한 것은 세 가지 능력뿐이다.

  (a) 스칼라 필드 산술  → self.Fr (py_ecc FQ 서브클래스)
  (b) 두 덧셈 그룹 G1, G2 → add / neg / mul / eq / 항등원 Z1, Z2
  (c) 쌍선형 페어링 e: G1 × G2 → GT

PairingCurve가 이 세 능력과 각 원소의 정규(canonical) 바이트 인코딩을 하나로 묶는다.
구체 곡선은 py_ecc의 optimized 모듈을 감싸는 BN128, BLS12_381 두 가지이다.

**점 표현**:
  optimized 모듈의 점은 사영(projective) 좌표 (x, y, z) 튜플이다.
  같은 점도 좌표가 다를 수 있으므로 비교는 반드시 curve.eq()를 사용한다.

사용 예시:
    >>> from pykzg.curve import get_curve
    >>> curve = get_curve("bn128")
    >>> P = curve.mul(curve.G1, 5)            # 5·G1
    >>> e1 = curve.pairing(P, curve.G2)       # e(5·G1, G2)
    >>> e1 == curve.pairing(curve.G1, curve.mul(curve.G2, 5))  # True
"""

from py_ecc import optimized_bn128, optimized_bls12_381
from py_ecc.bls.point_compression import (
    compress_G1,
    compress_G2,
    decompress_G1,
    decompress_G2,
)

from pykzg.errors import InvalidInput, SerializationError
from pykzg.field import FR_BN128, FR_BLS12_381


class PairingCurve:
    """KZG가 사용하는 곡선 능력의 묶음.

    속성:
        name: 레지스트리 이름
        Fr: 스칼라 필드 클래스
        order: 그룹 위수 (= 스칼라 필드 크기)
        G1, G2: 각 그룹의 생성자
        Z1, Z2: 각 그룹의 항등원 (무한원점)
        coord_size: 기저체 좌표 하나의 바이트 크기
    """

    name = None
    coord_size = None

    def __init__(self, backend, scalar_field):
        self._ec = backend
        self.Fr = scalar_field
        self.order = backend.curve_order
        self.field_modulus = backend.field_modulus
        self.G1 = backend.G1
        self.G2 = backend.G2
        self.Z1 = backend.Z1
        self.Z2 = backend.Z2

    def __repr__(self):
        return f"PairingCurve({self.name})"

    # ─── 그룹 연산 ───

    def add(self, p1, p2):
        """p1 + p2 (같은 그룹)."""
        return self._ec.add(p1, p2)

    def neg(self, point):
        """-point."""
        return self._ec.neg(point)

    def sub(self, p1, p2):
        """p1 - p2."""
        return self._ec.add(p1, self._ec.neg(p2))

    def mul(self, point, scalar):
        """스칼라 곱셈: scalar · point. scalar는 정수 또는 필드 원소."""
        return self._ec.multiply(point, int(scalar) % self.order)

    def eq(self, p1, p2):
        """사영 좌표와 무관한 점 동등 비교."""
        return self._ec.eq(p1, p2)

    def is_identity(self, point):
        return self._ec.is_inf(point)

    def identity_like(self, point):
        """point와 같은 그룹의 항등원."""
        return self.Z2 if isinstance(point[0], self._ec.FQ2) else self.Z1

    def msm(self, points, scalars):
        """다중 스칼라 곱셈 (multi-scalar multiplication).

        Σᵢ scalars[i] · points[i]

        각 항은 독립적이고 그룹 덧셈은 교환/결합법칙을 만족하므로
        순서와 무관하게 누적할 수 있다. 계수가 0인 항은 건너뛴다.
        """
        result = None
        for point, scalar in zip(points, scalars):
            if int(scalar) % self.order == 0:
                continue
            term = self.mul(point, scalar)
            result = term if result is None else self._ec.add(result, term)
        if result is None:
            return self.identity_like(points[0]) if points else self.Z1
        return result

    def pairing(self, p, q):
        """쌍선형 페어링 e(P, Q), P ∈ G1, Q ∈ G2.

        주의:
            py_ecc.pairing의 인자 순서는 (G2, G1)이다.
        """
        return self._ec.pairing(q, p)

    # ─── 멤버십 검사 ───

    def _well_formed(self, point, coord_type):
        return (
            isinstance(point, tuple)
            and len(point) == 3
            and all(isinstance(c, coord_type) for c in point)
        )

    def is_on_g1_curve(self, point):
        """point가 G1 곡선 방정식을 만족하는 사영 점인지 확인한다."""
        return self._well_formed(point, self._ec.FQ) and self._ec.is_on_curve(point, self._ec.b)

    def is_on_g2_curve(self, point):
        """point가 G2 (twist) 곡선 방정식을 만족하는 사영 점인지 확인한다."""
        return self._well_formed(point, self._ec.FQ2) and self._ec.is_on_curve(point, self._ec.b2)

    def in_g1(self, point):
        """곡선 위에 있고 위수 order의 부분군에 속하는지 확인한다."""
        return self.is_on_g1_curve(point) and self._ec.is_inf(self._ec.multiply(point, self.order))

    def in_g2(self, point):
        return self.is_on_g2_curve(point) and self._ec.is_inf(self._ec.multiply(point, self.order))

    def check_g1(self, point, what="G1 point"):
        """검증 입력 검사: G1 부분군의 점이 아니면 InvalidInput."""
        if not self.in_g1(point):
            raise InvalidInput(f"{what} is not a point in {self.name} G1")
        return point

    def check_g2(self, point, what="G2 point"):
        if not self.in_g2(point):
            raise InvalidInput(f"{what} is not a point in {self.name} G2")
        return point

    # ─── 정규 바이트 인코딩 ───

    def _int_to_bytes(self, value):
        return int(value).to_bytes(self.coord_size, "big")

    def _read_coord(self, data):
        value = int.from_bytes(data, "big")
        if value >= self.field_modulus:
            raise SerializationError("coordinate is not a canonical base field element")
        return value

    def _fq2_to_bytes(self, element):
        c0, c1 = element.coeffs
        return self._int_to_bytes(c1) + self._int_to_bytes(c0)

    def _expect_length(self, data, size, what):
        if len(data) != size:
            raise SerializationError(f"{what} encoding must be {size} bytes, got {len(data)}")

    def _finish_g1(self, point):
        if not self.in_g1(point):
            raise SerializationError(f"decoded point is not in {self.name} G1")
        return point

    def _finish_g2(self, point):
        if not self.in_g2(point):
            raise SerializationError(f"decoded point is not in {self.name} G2")
        return point

    def g1_size(self, compress=True):
        return self.coord_size if compress else 2 * self.coord_size

    def g2_size(self, compress=True):
        return 2 * self.coord_size if compress else 4 * self.coord_size

    def encode_g1(self, point, compress=True):
        """G1 점 → 고정 크기 바이트."""
        if compress:
            return self._compress_g1(point)
        if self.is_identity(point):
            return self._uncompressed_identity(self.g1_size(False))
        x, y = self._ec.normalize(point)
        return self._int_to_bytes(x) + self._int_to_bytes(y)

    def decode_g1(self, data, compress=True):
        """고정 크기 바이트 → G1 점. 잘못된 인코딩이면 SerializationError."""
        data = bytes(data)
        self._expect_length(data, self.g1_size(compress), "G1")
        if compress:
            return self._finish_g1(self._decompress_g1(data))
        if self._is_uncompressed_identity(data):
            return self.Z1
        size = self.coord_size
        FQ = self._ec.FQ
        x = self._read_coord(data[:size])
        y = self._read_coord(data[size:])
        point = (FQ(x), FQ(y), FQ.one())
        if not self._ec.is_on_curve(point, self._ec.b):
            raise SerializationError(f"decoded point is not on the {self.name} G1 curve")
        return self._finish_g1(point)

    def encode_g2(self, point, compress=True):
        """G2 점 → 고정 크기 바이트. FQ2 원소는 c1 ‖ c0 순서."""
        if compress:
            return self._compress_g2(point)
        if self.is_identity(point):
            return self._uncompressed_identity(self.g2_size(False))
        x, y = self._ec.normalize(point)
        return self._fq2_to_bytes(x) + self._fq2_to_bytes(y)

    def decode_g2(self, data, compress=True):
        data = bytes(data)
        self._expect_length(data, self.g2_size(compress), "G2")
        if compress:
            return self._finish_g2(self._decompress_g2(data))
        if self._is_uncompressed_identity(data):
            return self.Z2
        size = self.coord_size
        x1, x0, y1, y0 = (
            self._read_coord(data[i * size:(i + 1) * size]) for i in range(4)
        )
        FQ2 = self._ec.FQ2
        point = (FQ2([x0, x1]), FQ2([y0, y1]), FQ2.one())
        if not self._ec.is_on_curve(point, self._ec.b2):
            raise SerializationError(f"decoded point is not on the {self.name} G2 curve")
        return self._finish_g2(point)

    # 곡선별 구현
    def _uncompressed_identity(self, size):
        raise NotImplementedError

    def _is_uncompressed_identity(self, data):
        raise NotImplementedError

    def _compress_g1(self, point):
        raise NotImplementedError

    def _decompress_g1(self, data):
        raise NotImplementedError

    def _compress_g2(self, point):
        raise NotImplementedError

    def _decompress_g2(self, data):
        raise NotImplementedError


# ─────────────────────────────────────────────────────────────────────
# BLS12-381
# ─────────────────────────────────────────────────────────────────────

class BLS12381Curve(PairingCurve):
    """BLS12-381: 압축 형식은 ZCash 플래그 규약 (py_ecc.bls.point_compression).

    비압축 형식의 무한원점은 0x40 플래그 뒤에 0 바이트가 이어진다.
    """

    name = "bls12_381"
    coord_size = 48
    INFINITY_FLAG = 0x40

    def __init__(self):
        super().__init__(optimized_bls12_381, FR_BLS12_381)

    def _uncompressed_identity(self, size):
        return bytes([self.INFINITY_FLAG]) + bytes(size - 1)

    def _is_uncompressed_identity(self, data):
        if data[0] & self.INFINITY_FLAG:
            if data[0] != self.INFINITY_FLAG or any(data[1:]):
                raise SerializationError("malformed point at infinity")
            return True
        return False

    def _compress_g1(self, point):
        return compress_G1(point).to_bytes(self.coord_size, "big")

    def _decompress_g1(self, data):
        try:
            return decompress_G1(int.from_bytes(data, "big"))
        except ValueError as exc:
            raise SerializationError(str(exc)) from exc

    def _compress_g2(self, point):
        z1, z2 = compress_G2(point)
        return z1.to_bytes(self.coord_size, "big") + z2.to_bytes(self.coord_size, "big")

    def _decompress_g2(self, data):
        size = self.coord_size
        z1 = int.from_bytes(data[:size], "big")
        z2 = int.from_bytes(data[size:], "big")
        try:
            return decompress_G2((z1, z2))
        except ValueError as exc:
            raise SerializationError(str(exc)) from exc


# ─────────────────────────────────────────────────────────────────────
# BN128 (alt_bn128)
# ─────────────────────────────────────────────────────────────────────

def _sqrt_fq(a, p):
    """p ≡ 3 (mod 4)인 소수체의 제곱근. 제곱잉여가 아니면 None."""
    a %= p
    root = pow(a, (p + 1) // 4, p)
    return root if root * root % p == a else None


def _sqrt_fq2(a0, a1, p):
    """FQ2 = FQ[i]/(i² + 1) 원소 a0 + a1·i 의 제곱근 (x0, x1).

    노름 n = a0² + a1² 의 제곱근을 이용한다:
        x0² = (a0 ± √n) / 2,  x1 = a1 / (2·x0)
    """
    if a1 % p == 0:
        root = _sqrt_fq(a0, p)
        if root is not None:
            return root, 0
        root = _sqrt_fq(-a0, p)
        return (0, root) if root is not None else None
    norm_root = _sqrt_fq(a0 * a0 + a1 * a1, p)
    if norm_root is None:
        return None
    inv2 = pow(2, p - 2, p)
    for candidate in ((a0 + norm_root) * inv2, (a0 - norm_root) * inv2):
        x0 = _sqrt_fq(candidate, p)
        if x0:
            x1 = a1 * inv2 * pow(x0, p - 2, p) % p
            return x0, x1
    return None


class BN128Curve(PairingCurve):
    """bn128: 첫 바이트 상위 두 비트가 플래그 (0x80: y 부호, 0x40: 무한원점).

    기저체 위수가 254비트이므로 32바이트 좌표의 상위 두 비트는 항상 비어 있다.
    비압축 형식의 무한원점은 전부 0인 바이트열이다 (EIP-196 규약).
    """

    name = "bn128"
    coord_size = 32
    SIGN_FLAG = 0x80
    INFINITY_FLAG = 0x40
    FLAG_MASK = 0xC0

    def __init__(self):
        super().__init__(optimized_bn128, FR_BN128)

    def _uncompressed_identity(self, size):
        return bytes(size)

    def _is_uncompressed_identity(self, data):
        return not any(data)

    def _is_lexicographically_largest(self, value):
        return value > (self.field_modulus - 1) // 2

    def _with_flags(self, body, flags):
        return bytes([body[0] | flags]) + body[1:]

    def _split_flags(self, data):
        flags = data[0] & self.FLAG_MASK
        body = bytes([data[0] & ~self.FLAG_MASK & 0xFF]) + data[1:]
        if flags & self.INFINITY_FLAG:
            if flags != self.INFINITY_FLAG or any(body):
                raise SerializationError("malformed point at infinity")
        return flags, body

    def _compress_g1(self, point):
        if self.is_identity(point):
            return self._with_flags(bytes(self.coord_size), self.INFINITY_FLAG)
        x, y = self._ec.normalize(point)
        flags = self.SIGN_FLAG if self._is_lexicographically_largest(int(y)) else 0
        return self._with_flags(self._int_to_bytes(x), flags)

    def _decompress_g1(self, data):
        flags, body = self._split_flags(data)
        if flags & self.INFINITY_FLAG:
            return self.Z1
        p = self.field_modulus
        x = self._read_coord(body)
        y = _sqrt_fq(x ** 3 + int(self._ec.b), p)
        if y is None:
            raise SerializationError("x coordinate is not on the bn128 G1 curve")
        if self._is_lexicographically_largest(y) != bool(flags & self.SIGN_FLAG):
            y = p - y
        FQ = self._ec.FQ
        return (FQ(x), FQ(y), FQ.one())

    def _compress_g2(self, point):
        if self.is_identity(point):
            return self._with_flags(bytes(2 * self.coord_size), self.INFINITY_FLAG)
        x, y = self._ec.normalize(point)
        y_re, y_im = (int(c) for c in y.coeffs)
        sign = y_im if y_im else y_re
        flags = self.SIGN_FLAG if self._is_lexicographically_largest(sign) else 0
        return self._with_flags(self._fq2_to_bytes(x), flags)

    def _decompress_g2(self, data):
        flags, body = self._split_flags(data)
        if flags & self.INFINITY_FLAG:
            return self.Z2
        size = self.coord_size
        x1 = self._read_coord(body[:size])
        x0 = self._read_coord(body[size:])
        FQ2 = self._ec.FQ2
        x = FQ2([x0, x1])
        rhs = x ** 3 + self._ec.b2
        root = _sqrt_fq2(*(int(c) for c in rhs.coeffs), self.field_modulus)
        if root is None:
            raise SerializationError("x coordinate is not on the bn128 G2 curve")
        y = FQ2(list(root))
        y_re, y_im = (int(c) for c in y.coeffs)
        sign = y_im if y_im else y_re
        if self._is_lexicographically_largest(sign) != bool(flags & self.SIGN_FLAG):
            y = -y
        point = (x, y, FQ2.one())
        if not self._ec.is_on_curve(point, self._ec.b2):
            raise SerializationError("x coordinate is not on the bn128 G2 curve")
        return point


# ─────────────────────────────────────────────────────────────────────
# 레지스트리
# ─────────────────────────────────────────────────────────────────────

BN128 = BN128Curve()
BLS12_381 = BLS12381Curve()

CURVES = {curve.name: curve for curve in (BN128, BLS12_381)}

DEFAULT_CURVE = BLS12_381


def get_curve(curve=None):
    """곡선 이름 또는 PairingCurve 인스턴스를 PairingCurve로 변환한다.

    Args:
        curve: None (기본 곡선), "bn128", "bls12_381", 또는 PairingCurve

    Raises:
        InvalidInput: 알 수 없는 곡선 이름
    """
    if curve is None:
        return DEFAULT_CURVE
    if isinstance(curve, PairingCurve):
        return curve
    try:
        return CURVES[str(curve).lower()]
    except KeyError:
        raise InvalidInput(f"unknown curve: {curve!r}") from None
