"""pykzg: KZG 다항식 커밋먼트 스킴 (단일/배치 열기) over py_ecc."""

from pykzg.curve import BLS12_381, BN128, DEFAULT_CURVE, PairingCurve, get_curve
from pykzg.errors import (
    DivisionByZeroPolynomial,
    DuplicateEvaluationPoint,
    InvalidInput,
    KZGError,
    SerializationError,
)
from pykzg.field import FR, FR_BLS12_381, FR_BN128
from pykzg.kzg import commit, create_witness, verify_opening
from pykzg.multiproof import create_multi_witness, get_lagrange, verify_multi_opening
from pykzg.polynomial import Polynomial, interpolate, poly_add, poly_div, poly_eval, poly_mul
from pykzg.scheme import KZG
from pykzg.srs import SRS, setup

__version__ = "0.1.0"
