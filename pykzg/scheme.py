"""
KZG 스킴 객체
==============

SRS 하나를 들고 setup / commit / open / multi_open / verify / verify_multi 를
메서드로 제공하는 얇은 파사드(facade). 곡선 선택은 생성자에서 한 번만 한다.

사용 예시:
    >>> kzg = KZG(curve="bls12_381", degree=3)
    >>> kzg.setup(secret)                 # 또는 KZG.from_srs(SRS.generate(3))
    >>> C = kzg.commit([2, 3, 5, 1])
    >>> pi = kzg.open([2, 3, 5, 1], 7)
    >>> kzg.verify(7, 611, C, pi)         # True
"""

from pykzg import kzg, multiproof
from pykzg.curve import get_curve
from pykzg.errors import InvalidInput
from pykzg.field import to_field
from pykzg.polynomial import Polynomial
from pykzg.srs import SRS, setup


class KZG:
    """곡선과 SRS에 묶인 KZG 커밋먼트 스킴."""

    def __init__(self, curve=None, degree=None, srs=None):
        if srs is not None:
            if curve is not None and get_curve(curve) is not srs.curve:
                raise InvalidInput(
                    f"curve {get_curve(curve).name} does not match the SRS curve {srs.curve.name}"
                )
            if degree is not None and degree != srs.max_degree:
                raise InvalidInput(
                    f"degree {degree} does not match the SRS degree {srs.max_degree}"
                )
            curve = srs.curve
            degree = srs.max_degree
        self.curve = get_curve(curve)
        self.degree = degree
        self._srs = srs

    @classmethod
    def from_srs(cls, srs):
        return cls(srs=srs)

    def __repr__(self):
        state = "ready" if self._srs is not None else "no setup"
        return f"KZG(curve={self.curve.name}, degree={self.degree}, {state})"

    @property
    def srs(self):
        if self._srs is None:
            raise InvalidInput("KZG instance has no SRS; call setup() first")
        return self._srs

    @property
    def g1(self):
        return self.srs.g1

    @property
    def g2(self):
        return self.srs.g2

    @property
    def g2_tau(self):
        return self.srs.g2_tau

    @property
    def crs_g1(self):
        return self.srs.g1_powers

    @property
    def crs_g2(self):
        return self.srs.g2_powers

    def setup(self, secret):
        """신뢰 설정. 비밀 τ는 SRS 생성 직후 폐기된다."""
        if self.degree is None:
            raise InvalidInput("KZG instance needs a degree bound before setup()")
        self._srs = setup(secret, self.degree, self.curve)
        return self._srs

    def generate(self, seed=None):
        """τ를 직접 뽑아 설정한다 (seed는 테스트/데모용)."""
        if self.degree is None:
            raise InvalidInput("KZG instance needs a degree bound before generate()")
        self._srs = SRS.generate(self.degree, seed=seed, curve=self.curve)
        return self._srs

    def polynomial(self, coeffs):
        return Polynomial(coeffs, field=self.curve.Fr)

    def evaluate(self, poly, point):
        poly = poly if isinstance(poly, Polynomial) else self.polynomial(poly)
        return poly.evaluate(to_field(point, poly.field))

    def commit(self, poly):
        return kzg.commit(poly, self.srs)

    def open(self, poly, point):
        return kzg.create_witness(poly, point, self.srs)

    def multi_open(self, poly, points):
        return multiproof.create_multi_witness(poly, points, self.srs)

    def verify(self, point, value, commitment, proof):
        return kzg.verify_opening(commitment, proof, point, value, self.srs)

    def verify_multi(self, points, values, commitment, proof):
        return multiproof.verify_multi_opening(commitment, proof, points, values, self.srs)
