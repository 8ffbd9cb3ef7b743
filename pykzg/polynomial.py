"""
다항식(Polynomial) 산술
========================

KZG 커밋먼트/열기 증명에 필요한 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  인덱스 i의 계수가 xⁱ의 계수이고, 차수(degree)는 len(coeffs) - 1 이다.
  최고차 0 계수를 자동으로 제거하지 않는다 (길이가 곧 SRS 차수 검사 기준).

**연산**:
  - poly_add / poly_mul: 덧셈, 합성곱(convolution) 곱셈
  - poly_div: 긴 나눗셈 → (몫, 나머지)
  - poly_eval: Horner 평가
  - interpolate: Lagrange 보간

필드에 독립적이다: 계수는 py_ecc FQ 서브클래스라면 무엇이든 된다.

사용 예시:
    >>> from pykzg.polynomial import Polynomial
    >>> p = Polynomial([2, 3, 5, 1])   # 2 + 3x + 5x² + x³
    >>> p.evaluate(7)                   # FR(611)
"""

from pykzg.errors import DivisionByZeroPolynomial, DuplicateEvaluationPoint, InvalidInput
from pykzg.field import FR


def _infer_field(values, field):
    if field is not None:
        return field
    for v in values:
        if hasattr(v, "field_modulus"):
            return type(v)
    return FR


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """스칼라 필드 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    KZG에서의 역할:
    - 커밋 대상 다항식 p(x)
    - 몫 다항식 q(x) = (p(x) - y) / (x - z): 열기 증명
    - 소거 다항식 Z(x) = Π(x - zᵢ): 배치 열기
    - Lagrange 다항식 L(x): 배치 열기에서 주장된 값들을 보간

    예시:
        >>> p = Polynomial([1, 2])  # 1 + 2x
        >>> q = Polynomial([3, 4])  # 3 + 4x
        >>> p + q                   # 4 + 6x
        >>> p * q                   # 3 + 10x + 8x²
    """

    def __init__(self, coeffs=None, field=None):
        """다항식 생성.

        Args:
            coeffs: 정수 또는 필드 원소의 리스트 [c₀, c₁, ...].
                    None이면 영 다항식 [0]을 생성한다. 빈 리스트도 허용한다.
            field: 스칼라 필드 클래스. 생략하면 계수에서 추론하고,
                   추론할 수 없으면 기본 FR을 사용한다.
        """
        if coeffs is None:
            coeffs = [0]
        coeffs = list(coeffs)
        self.field = _infer_field(coeffs, field)
        self.coeffs = [c if isinstance(c, self.field) else self.field(int(c)) for c in coeffs]

    @property
    def degree(self):
        """len(coeffs) - 1. 최고차 0 계수도 차수에 포함된다."""
        return len(self.coeffs) - 1

    def is_zero(self):
        """모든 계수가 0인지 (빈 다항식 포함) 확인."""
        return all(c == 0 for c in self.coeffs)

    def trim(self):
        """최고차 0 계수를 제거한 새 다항식. 영 다항식은 [0]."""
        coeffs = list(self.coeffs)
        _trim(coeffs)
        return Polynomial(coeffs or [self.field.zero()], field=self.field)

    def resize(self, length):
        """길이를 length로 맞춘 새 다항식 (0으로 채우거나 뒤쪽을 잘라냄)."""
        coeffs = list(self.coeffs[:length])
        coeffs.extend(self.field.zero() for _ in range(length - len(coeffs)))
        return Polynomial(coeffs, field=self.field)

    def with_constant(self, constant):
        """상수항만 constant로 바꾼 새 다항식."""
        coeffs = list(self.coeffs) or [self.field.zero()]
        coeffs[0] = constant
        return Polynomial(coeffs, field=self.field)

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        p(x) = c₀ + x(c₁ + x(c₂ + ...))

        예시:
            >>> Polynomial([1, 2, 3]).evaluate(2)  # 1 + 4 + 12 = 17
        """
        return poly_eval(self, point)

    def __call__(self, point):
        return poly_eval(self, point)

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            return other
        return Polynomial([other], field=self.field)

    def __add__(self, other):
        """다항식 덧셈: p(x) + q(x)."""
        return poly_add(self, self._coerce(other))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        """다항식 뺄셈: p(x) - q(x)."""
        return poly_add(self, -self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other).__sub__(self)

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs], field=self.field)

    def __mul__(self, other):
        """다항식 곱셈 또는 스칼라곱."""
        if isinstance(other, Polynomial):
            return poly_mul(self, other)
        scalar = other if isinstance(other, self.field) else self.field(int(other))
        return Polynomial([c * scalar for c in self.coeffs], field=self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __divmod__(self, other):
        return poly_div(self, other)

    def __floordiv__(self, other):
        return poly_div(self, other)[0]

    def __mod__(self, other):
        return poly_div(self, other)[1]

    def __eq__(self, other):
        """최고차 0 계수를 무시한 동등 비교."""
        if not isinstance(other, Polynomial):
            if isinstance(other, int) or hasattr(other, "field_modulus"):
                other = self._coerce(other)
            else:
                return NotImplemented
        a = list(self.coeffs)
        b = list(other.coeffs)
        _trim(a)
        _trim(b)
        return a == b

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __len__(self):
        return len(self.coeffs)

    def __iter__(self):
        return iter(self.coeffs)

    def __getitem__(self, index):
        return self.coeffs[index]

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    @classmethod
    def zero(cls, field=None):
        """영 다항식 p(x) = 0."""
        field = field or FR
        return cls([field.zero()], field=field)

    @classmethod
    def one(cls, field=None):
        """상수 다항식 p(x) = 1."""
        field = field or FR
        return cls([field.one()], field=field)

    @classmethod
    def vanishing(cls, points, field=None):
        """소거 다항식 Z(x) = Π (x - zᵢ).

        주어진 모든 점에서 정확히 0이 되는 모닉(monic) 다항식이다.
        k개의 점이면 길이 k+1.

        예시:
            >>> Polynomial.vanishing([1, 2])  # (x-1)(x-2) = 2 - 3x + x²
        """
        field = _infer_field(points, field)
        result = cls.one(field)
        for z in points:
            z = z if isinstance(z, field) else field(int(z))
            result = poly_mul(result, cls([-z, field.one()], field=field))
        return result


def _trim(coeffs):
    while coeffs and coeffs[-1] == 0:
        coeffs.pop()


# ─────────────────────────────────────────────────────────────────────
# 기본 연산
# ─────────────────────────────────────────────────────────────────────

def poly_add(p1, p2):
    """계수별 합. 결과 길이 = max(len(p1), len(p2)), 없는 계수는 0."""
    field = p1.field
    zero = field.zero()
    length = max(len(p1.coeffs), len(p2.coeffs))
    result = []
    for i in range(length):
        a = p1.coeffs[i] if i < len(p1.coeffs) else zero
        b = p2.coeffs[i] if i < len(p2.coeffs) else zero
        result.append(a + b)
    return Polynomial(result, field=field)


def poly_mul(p1, p2):
    """합성곱 곱셈: O(n²) 나이브 곱셈.

    결과 길이 = len(p1) + len(p2) - 1. 빈 다항식과의 곱은 빈 다항식.
    """
    field = p1.field
    if not p1.coeffs or not p2.coeffs:
        return Polynomial([], field=field)
    result = [field.zero()] * (len(p1.coeffs) + len(p2.coeffs) - 1)
    for i, a in enumerate(p1.coeffs):
        if a == 0:
            continue
        for j, b in enumerate(p2.coeffs):
            result[i + j] = result[i + j] + a * b
    return Polynomial(result, field=field)


def poly_eval(poly, point):
    """Σ coeff[i] · pointⁱ (Horner)."""
    field = poly.field
    if not isinstance(point, field):
        point = field(int(point))
    result = field.zero()
    for coeff in reversed(poly.coeffs):
        result = result * point + coeff
    return result


def poly_div(numerator, denominator):
    """다항식 긴 나눗셈: numerator = denominator · q + r.

    나머지의 최고차 항을 제수 최고차 계수의 역원으로 소거하고,
    매 단계마다 나머지의 최고차 0 계수를 잘라낸다.
    나머지 길이가 제수 길이보다 짧아지면 멈춘다.

    KZG에서의 사용:
    - 단일 열기: (p(x) - y) / (x - z)
    - 배치 열기: (p(x) - L(x)) / Z(x)

    Args:
        numerator: 피제수 다항식
        denominator: 제수 다항식

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        DivisionByZeroPolynomial: 제수가 비어 있거나 영 다항식인 경우

    예시:
        >>> q, r = poly_div(Polynomial([-1, 0, 1]), Polynomial([-1, 1]))
        >>> q  # x + 1
        >>> r  # 0
    """
    field = numerator.field
    divisor = list(denominator.coeffs)
    _trim(divisor)
    if not divisor:
        raise DivisionByZeroPolynomial("cannot divide by the zero polynomial")

    remainder = list(numerator.coeffs)
    if len(remainder) < len(divisor):
        return Polynomial.zero(field), Polynomial(remainder or [field.zero()], field=field)

    quotient = [field.zero()] * (len(remainder) - len(divisor) + 1)
    lead_inv = field.one() / divisor[-1]

    _trim(remainder)
    while len(remainder) >= len(divisor):
        shift = len(remainder) - len(divisor)
        coeff = remainder[-1] * lead_inv
        quotient[shift] = coeff
        for j, d in enumerate(divisor):
            remainder[shift + j] = remainder[shift + j] - coeff * d
        _trim(remainder)

    return Polynomial(quotient, field=field), Polynomial(remainder or [field.zero()], field=field)


# ─────────────────────────────────────────────────────────────────────
# Lagrange 보간
# ─────────────────────────────────────────────────────────────────────

def lagrange_basis(domain, i, field=None):
    """i번째 Lagrange 기저 다항식 L_i(x)를 계수 형태로 반환한다.

    L_i(x) = ∏_{j≠i} (x - d_j) / (d_i - d_j)

    성질: L_i(d_j) = δ_{ij} (크로네커 델타)

    Raises:
        DuplicateEvaluationPoint: d_i - d_j = 0 (같은 점이 반복됨)
    """
    field = _infer_field(domain, field)
    domain = [d if isinstance(d, field) else field(int(d)) for d in domain]
    result = Polynomial.one(field)
    denominator = field.one()

    for j, d_j in enumerate(domain):
        if j == i:
            continue
        diff = domain[i] - d_j
        if diff == 0:
            raise DuplicateEvaluationPoint(f"evaluation point {int(d_j)} appears more than once")
        result = poly_mul(result, Polynomial([-d_j, field.one()], field=field))
        denominator = denominator * diff

    return result * (field.one() / denominator)


def interpolate(points, values, field=None):
    """Lagrange 보간: 모든 i에 대해 p(points[i]) = values[i]인 최소 차수 다항식.

    p(x) = Σᵢ values[i] · L_i(x)

    결과 길이는 len(points) 이다 (점이 없으면 영 다항식).

    Raises:
        InvalidInput: len(points) != len(values)
        DuplicateEvaluationPoint: 같은 점이 반복될 때

    예시:
        >>> p = interpolate([1, 2, 3], [2, 5, 10])  # x² + 1
        >>> p.evaluate(4)  # FR(17)
    """
    points = list(points)
    values = list(values)
    if len(points) != len(values):
        raise InvalidInput(
            f"interpolation needs as many values as points ({len(points)} != {len(values)})"
        )
    field = _infer_field(points + values, field)
    if not points:
        return Polynomial.zero(field)

    result = Polynomial([field.zero()] * len(points), field=field)
    for i, value in enumerate(values):
        value = value if isinstance(value, field) else field(int(value))
        result = result + lagrange_basis(points, i, field) * value
    return result
