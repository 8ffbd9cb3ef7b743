"""
KZG 데이터 직렬화/역직렬화
===========================

SRS, 커밋먼트, 증명, 다항식을 신뢰 경계 너머(예: 별도 실행 환경)로 옮기기 위한
정규(canonical) 고정 크기 바이트 인코딩.

**형식**:
  - 스칼라: 32바이트 빅엔디언 (압축/비압축 동일), 필드 위수 이상이면 거부
  - G1/G2 점: 곡선별 압축/비압축 형식 (pykzg.curve 참고)
  - 리스트: 8바이트 리틀엔디언 길이 + 고정 크기 원소들
  - SRS: G1 powers 리스트 ‖ G2 powers 리스트 ‖ g2_tau

페이로드 타입마다 Codec 하나가 있고, Serializable 래퍼 하나가 모든 Codec을 감싼다.
역직렬화 실패는 모두 SerializationError 이다.

사용 예시:
    >>> data = serialize_srs(srs)
    >>> deserialize_srs(data, curve=srs.curve) == srs  # True
"""

import struct

from pykzg.curve import get_curve
from pykzg.errors import InvalidInput, SerializationError
from pykzg.field import SCALAR_SIZE
from pykzg.polynomial import Polynomial
from pykzg.srs import SRS

LENGTH_PREFIX = struct.Struct("<Q")


class _Reader:
    """바이트열을 앞에서부터 정확한 크기만큼 읽는다."""

    def __init__(self, data):
        self._data = memoryview(bytes(data))
        self._pos = 0

    @property
    def remaining(self):
        return len(self._data) - self._pos

    def read(self, size):
        if size > self.remaining:
            raise SerializationError(
                f"truncated input: need {size} bytes, {self.remaining} left"
            )
        chunk = self._data[self._pos:self._pos + size].tobytes()
        self._pos += size
        return chunk

    def finish(self):
        if self.remaining:
            raise SerializationError(f"{self.remaining} trailing bytes after payload")


# ─────────────────────────────────────────────────────────────────────
# Codec
# ─────────────────────────────────────────────────────────────────────

class Codec:
    """한 페이로드 타입의 인코딩 규칙. 곡선에 묶인다."""

    def __init__(self, curve=None):
        self.curve = get_curve(curve)

    def size(self, compress=True):
        """고정 크기 (가변 길이 타입이면 None)."""
        return None

    def encode(self, value, compress=True):
        raise NotImplementedError

    def decode(self, reader, compress=True):
        raise NotImplementedError


class ScalarCodec(Codec):
    # ─── FR ───

    def size(self, compress=True):
        return SCALAR_SIZE

    def encode(self, value, compress=True):
        return (int(value) % self.curve.order).to_bytes(SCALAR_SIZE, "big")

    def decode(self, reader, compress=True):
        value = int.from_bytes(reader.read(SCALAR_SIZE), "big")
        if value >= self.curve.order:
            raise SerializationError("scalar is not a canonical field element")
        return self.curve.Fr(value)


class G1Codec(Codec):
    # ─── G1 point (커밋먼트, 증명) ───

    def size(self, compress=True):
        return self.curve.g1_size(compress)

    def encode(self, value, compress=True):
        return self.curve.encode_g1(value, compress)

    def decode(self, reader, compress=True):
        return self.curve.decode_g1(reader.read(self.size(compress)), compress)


class G2Codec(Codec):
    # ─── G2 point ───

    def size(self, compress=True):
        return self.curve.g2_size(compress)

    def encode(self, value, compress=True):
        return self.curve.encode_g2(value, compress)

    def decode(self, reader, compress=True):
        return self.curve.decode_g2(reader.read(self.size(compress)), compress)


class ListCodec(Codec):
    """길이 접두사 + 고정 크기 원소의 리스트."""

    def __init__(self, item, curve=None):
        super().__init__(curve if curve is not None else item.curve)
        self.item = item

    def encode(self, value, compress=True):
        items = list(value)
        parts = [LENGTH_PREFIX.pack(len(items))]
        parts.extend(self.item.encode(v, compress) for v in items)
        return b"".join(parts)

    def decode(self, reader, compress=True):
        (count,) = LENGTH_PREFIX.unpack(reader.read(LENGTH_PREFIX.size))
        if count * self.item.size(compress) > reader.remaining:
            raise SerializationError(f"list claims {count} items but the input is too short")
        return [self.item.decode(reader, compress) for _ in range(count)]


class PolynomialCodec(ListCodec):
    # ─── Polynomial (계수 리스트) ───

    def __init__(self, curve=None):
        super().__init__(ScalarCodec(curve))

    def encode(self, value, compress=True):
        coeffs = value.coeffs if isinstance(value, Polynomial) else value
        return super().encode(coeffs, compress)

    def decode(self, reader, compress=True):
        return Polynomial(super().decode(reader, compress), field=self.curve.Fr)


class SRSCodec(Codec):
    # ─── SRS ───

    def __init__(self, curve=None):
        super().__init__(curve)
        self._g1_list = ListCodec(G1Codec(self.curve))
        self._g2_list = ListCodec(G2Codec(self.curve))
        self._g2 = G2Codec(self.curve)

    def encode(self, value, compress=True):
        if value.curve is not self.curve:
            raise InvalidInput(f"SRS is on {value.curve.name}, codec is on {self.curve.name}")
        return (
            self._g1_list.encode(value.g1_powers, compress)
            + self._g2_list.encode(value.g2_powers, compress)
            + self._g2.encode(value.g2_tau, compress)
        )

    def decode(self, reader, compress=True):
        g1_powers = self._g1_list.decode(reader, compress)
        g2_powers = self._g2_list.decode(reader, compress)
        g2_tau = self._g2.decode(reader, compress)
        try:
            return SRS(g1_powers, g2_powers, g2_tau, self.curve)
        except InvalidInput as exc:
            raise SerializationError(str(exc)) from exc


# ─────────────────────────────────────────────────────────────────────
# 범용 래퍼
# ─────────────────────────────────────────────────────────────────────

class Serializable:
    """페이로드와 그 Codec을 함께 들고 다니는 범용 직렬화 래퍼.

    예시:
        >>> wrapped = Serializable(G1Codec("bn128"), commitment)
        >>> data = wrapped.to_bytes()
        >>> Serializable.from_bytes(G1Codec("bn128"), data).payload
    """

    def __init__(self, codec, payload):
        self.codec = codec
        self.payload = payload

    def __repr__(self):
        return f"Serializable({type(self.codec).__name__}, {self.payload!r})"

    def to_bytes(self, compress=True):
        return self.codec.encode(self.payload, compress)

    def to_hex(self, compress=True):
        return self.to_bytes(compress).hex()

    @classmethod
    def from_bytes(cls, codec, data, compress=True):
        reader = _Reader(data)
        payload = codec.decode(reader, compress)
        reader.finish()
        return cls(codec, payload)

    @classmethod
    def from_hex(cls, codec, text, compress=True):
        try:
            data = bytes.fromhex(text)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"invalid hex payload: {exc}") from exc
        return cls.from_bytes(codec, data, compress)


# ─────────────────────────────────────────────────────────────────────
# 편의 함수
# ─────────────────────────────────────────────────────────────────────

def _dump(codec, value, compress):
    return Serializable(codec, value).to_bytes(compress)


def _load(codec, data, compress):
    return Serializable.from_bytes(codec, data, compress).payload


def serialize_fr(value, curve=None, compress=True):
    """FR → 32 bytes"""
    return _dump(ScalarCodec(curve), value, compress)


def deserialize_fr(data, curve=None, compress=True):
    """32 bytes → FR"""
    return _load(ScalarCodec(curve), data, compress)


def serialize_g1(point, curve=None, compress=True):
    return _dump(G1Codec(curve), point, compress)


def deserialize_g1(data, curve=None, compress=True):
    return _load(G1Codec(curve), data, compress)


def serialize_g2(point, curve=None, compress=True):
    return _dump(G2Codec(curve), point, compress)


def deserialize_g2(data, curve=None, compress=True):
    return _load(G2Codec(curve), data, compress)


def serialize_poly(poly, curve=None, compress=True):
    """Polynomial 또는 점 리스트 → 길이 접두사 + 스칼라들"""
    return _dump(PolynomialCodec(curve), poly, compress)


def deserialize_poly(data, curve=None, compress=True):
    return _load(PolynomialCodec(curve), data, compress)


def serialize_points(points, curve=None, compress=True):
    """평가 점 리스트 → bytes"""
    return _dump(ListCodec(ScalarCodec(curve)), points, compress)


def deserialize_points(data, curve=None, compress=True):
    return _load(ListCodec(ScalarCodec(curve)), data, compress)


def serialize_srs(srs, compress=True):
    return _dump(SRSCodec(srs.curve), srs, compress)


def deserialize_srs(data, curve=None, compress=True):
    return _load(SRSCodec(curve), data, compress)


# 커밋먼트와 증명은 모두 G1 점 하나
serialize_commitment = serialize_g1
deserialize_commitment = deserialize_g1
serialize_proof = serialize_g1
deserialize_proof = deserialize_g1
