"""
공용 픽스처.

py_ecc의 페어링과 G2 스칼라 곱셈은 순수 파이썬이라 느리므로
SRS는 세션 범위로 한 번만 만든다.
"""

import pytest

from pykzg.curve import BLS12_381, BN128
from pykzg.srs import SRS


@pytest.fixture(scope="session")
def srs_small():
    """Default-curve (BLS12-381) SRS with max_degree=8."""
    return SRS.generate(max_degree=8, seed=42)


@pytest.fixture(scope="session")
def srs_bn128():
    """bn128 SRS with max_degree=8."""
    return SRS.generate(max_degree=8, seed=42, curve=BN128)


@pytest.fixture(scope="session")
def srs_degree3():
    """Degree bound 3 SRS for the 2 + 3x + 5x² + x³ scenario."""
    return SRS.generate(max_degree=3, seed=7, curve=BLS12_381)


@pytest.fixture(scope="session", params=["bls12_381", "bn128"])
def any_srs(request, srs_small, srs_bn128):
    """SRS on each supported curve."""
    return srs_small if request.param == "bls12_381" else srs_bn128
