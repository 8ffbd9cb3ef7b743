"""
Tests for canonical encodings: serialization.py (and curve.encode_*/decode_*)

Covers:
- scalar / G1 / G2 / polynomial / SRS round trips on both curves
- compressed and uncompressed sizes
- point at infinity
- rejection of malformed input (truncation, trailing bytes, bad flags,
  non-canonical coordinates, off-curve points, bad hex)
"""

import pytest

from pykzg.curve import BLS12_381, BN128
from pykzg.errors import InvalidInput, SerializationError
from pykzg.kzg import commit, create_witness, verify_opening
from pykzg.polynomial import Polynomial
from pykzg.srs import setup
from pykzg.serialization import (
    G1Codec,
    G2Codec,
    ListCodec,
    SRSCodec,
    Serializable,
    deserialize_commitment,
    deserialize_fr,
    deserialize_g1,
    deserialize_g2,
    deserialize_points,
    deserialize_poly,
    deserialize_proof,
    deserialize_srs,
    serialize_commitment,
    serialize_fr,
    serialize_g1,
    serialize_g2,
    serialize_points,
    serialize_poly,
    serialize_proof,
    serialize_srs,
)


@pytest.fixture(params=[BN128, BLS12_381], ids=lambda c: c.name)
def curve(request):
    return request.param


SIZES = {
    # curve: (g1 compressed, g1 uncompressed, g2 compressed, g2 uncompressed)
    "bn128": (32, 64, 64, 128),
    "bls12_381": (48, 96, 96, 192),
}


# ─────────────────────────────────────────────────────────────────────
# 스칼라
# ─────────────────────────────────────────────────────────────────────

class TestScalar:
    def test_roundtrip(self, curve):
        value = curve.Fr(123456789)
        data = serialize_fr(value, curve)
        assert len(data) == 32
        assert deserialize_fr(data, curve) == value

    def test_big_endian(self):
        assert serialize_fr(1, BN128) == bytes(31) + b"\x01"

    def test_reduces_before_encoding(self, curve):
        assert serialize_fr(curve.order + 5, curve) == serialize_fr(5, curve)

    def test_non_canonical_rejected(self, curve):
        with pytest.raises(SerializationError):
            deserialize_fr(curve.order.to_bytes(32, "big"), curve)

    def test_wrong_length(self, curve):
        with pytest.raises(SerializationError):
            deserialize_fr(bytes(31), curve)
        with pytest.raises(SerializationError):
            deserialize_fr(bytes(33), curve)


# ─────────────────────────────────────────────────────────────────────
# 그룹 원소
# ─────────────────────────────────────────────────────────────────────

class TestPoints:
    @pytest.mark.parametrize("compress", [True, False])
    def test_g1_roundtrip(self, curve, compress):
        point = curve.mul(curve.G1, 987654321)
        data = serialize_g1(point, curve, compress)
        assert curve.eq(deserialize_g1(data, curve, compress), point)

    @pytest.mark.parametrize("compress", [True, False])
    def test_g1_negated_roundtrip(self, curve, compress):
        """Sign flag distinguishes P and -P."""
        point = curve.neg(curve.mul(curve.G1, 31))
        data = serialize_g1(point, curve, compress)
        assert curve.eq(deserialize_g1(data, curve, compress), point)
        assert data != serialize_g1(curve.neg(point), curve, compress)

    @pytest.mark.parametrize("compress", [True, False])
    def test_g2_roundtrip(self, curve, compress):
        for point in (curve.mul(curve.G2, 77), curve.neg(curve.mul(curve.G2, 77))):
            data = serialize_g2(point, curve, compress)
            assert curve.eq(deserialize_g2(data, curve, compress), point)

    @pytest.mark.parametrize("compress", [True, False])
    def test_identity_roundtrip(self, curve, compress):
        g1 = deserialize_g1(serialize_g1(curve.Z1, curve, compress), curve, compress)
        g2 = deserialize_g2(serialize_g2(curve.Z2, curve, compress), curve, compress)
        assert curve.is_identity(g1)
        assert curve.is_identity(g2)

    def test_sizes(self, curve):
        g1c, g1u, g2c, g2u = SIZES[curve.name]
        assert len(serialize_g1(curve.G1, curve)) == g1c
        assert len(serialize_g1(curve.G1, curve, compress=False)) == g1u
        assert len(serialize_g2(curve.G2, curve)) == g2c
        assert len(serialize_g2(curve.G2, curve, compress=False)) == g2u

    def test_canonical(self, curve):
        """Equal points in different projective coordinates encode identically."""
        a = curve.mul(curve.G1, 10)
        b = curve.add(curve.mul(curve.G1, 4), curve.mul(curve.G1, 6))
        assert serialize_g1(a, curve) == serialize_g1(b, curve)
        assert serialize_g1(a, curve, compress=False) == serialize_g1(b, curve, compress=False)

    def test_bn128_uncompressed_identity_is_zero(self):
        assert serialize_g1(BN128.Z1, BN128, compress=False) == bytes(64)

    def test_bls_identity_flag(self):
        assert serialize_g1(BLS12_381.Z1, BLS12_381)[0] == 0xC0
        assert serialize_g1(BLS12_381.Z1, BLS12_381, compress=False) == b"\x40" + bytes(95)

    def test_commitment_and_proof_aliases(self, srs_small):
        poly = Polynomial([2, 3, 5, 1], field=srs_small.curve.Fr)
        C = commit(poly, srs_small)
        proof = create_witness(poly, 7, srs_small)
        C2 = deserialize_commitment(serialize_commitment(C))
        proof2 = deserialize_proof(serialize_proof(proof))
        assert verify_opening(C2, proof2, 7, 611, srs_small)


class TestMalformedPoints:
    """잘못된 인코딩은 모두 SerializationError."""

    def test_truncated(self, curve):
        data = serialize_g1(curve.G1, curve)
        with pytest.raises(SerializationError):
            deserialize_g1(data[:-1], curve)

    def test_trailing_bytes(self, curve):
        data = serialize_g2(curve.G2, curve)
        with pytest.raises(SerializationError):
            deserialize_g2(data + b"\x00", curve)

    def test_off_curve_uncompressed(self, curve):
        size = curve.coord_size
        # (1, 1) is on neither y² = x³ + 3 nor y² = x³ + 4
        data = (1).to_bytes(size, "big") + (1).to_bytes(size, "big")
        with pytest.raises(SerializationError):
            deserialize_g1(data, curve, compress=False)

    def test_non_canonical_coordinate(self, curve):
        size = curve.coord_size
        data = curve.field_modulus.to_bytes(size, "big") + (2).to_bytes(size, "big")
        with pytest.raises(SerializationError):
            deserialize_g1(data, curve, compress=False)

    def test_g2_off_curve_uncompressed(self, curve):
        data = bytes(curve.g2_size(False) - 1) + b"\x01"
        with pytest.raises(SerializationError):
            deserialize_g2(data, curve, compress=False)

    def test_bn128_bad_infinity_flags(self):
        data = bytearray(serialize_g1(BN128.Z1, BN128))
        data[0] |= 0x80
        with pytest.raises(SerializationError):
            deserialize_g1(bytes(data), BN128)

    def test_bn128_infinity_with_payload(self):
        data = bytearray(serialize_g1(BN128.Z1, BN128))
        data[-1] = 1
        with pytest.raises(SerializationError):
            deserialize_g1(bytes(data), BN128)

    def test_bn128_compressed_out_of_range(self):
        data = b"\x3f" + b"\xff" * 31
        with pytest.raises(SerializationError):
            deserialize_g1(data, BN128)

    def test_bls_missing_compression_flag(self):
        data = bytearray(serialize_g1(BLS12_381.G1, BLS12_381))
        data[0] &= 0x7F
        with pytest.raises(SerializationError):
            deserialize_g1(bytes(data), BLS12_381)

    def test_bls_compressed_out_of_range(self):
        data = b"\x9f" + b"\xff" * 47
        with pytest.raises(SerializationError):
            deserialize_g1(data, BLS12_381)

    def test_bls_malformed_uncompressed_infinity(self):
        data = b"\x40" + bytes(94) + b"\x01"
        with pytest.raises(SerializationError):
            deserialize_g1(data, BLS12_381, compress=False)

    def test_wrong_curve(self):
        data = serialize_g1(BLS12_381.G1, BLS12_381)
        with pytest.raises(SerializationError):
            deserialize_g1(data, BN128)


# ─────────────────────────────────────────────────────────────────────
# 리스트, 다항식
# ─────────────────────────────────────────────────────────────────────

class TestLists:
    def test_points_roundtrip(self, curve):
        points = [curve.Fr(1), curve.Fr(2), curve.Fr(curve.order - 1)]
        data = serialize_points(points, curve)
        assert len(data) == 8 + 3 * 32
        assert data[:8] == (3).to_bytes(8, "little")
        assert deserialize_points(data, curve) == points

    def test_empty_list(self, curve):
        data = serialize_points([], curve)
        assert data == bytes(8)
        assert deserialize_points(data, curve) == []

    def test_poly_roundtrip(self, curve):
        poly = Polynomial([2, 3, 5, 1, 0], field=curve.Fr)
        restored = deserialize_poly(serialize_poly(poly, curve), curve)
        assert restored.field is curve.Fr
        assert len(restored) == 5
        assert restored == poly

    def test_poly_from_list(self):
        assert serialize_poly([1, 2], BN128) == serialize_poly(Polynomial([1, 2], field=BN128.Fr), BN128)

    def test_length_prefix_too_large(self, curve):
        data = bytearray(serialize_points([1, 2], curve))
        data[:8] = (2 ** 64 - 1).to_bytes(8, "little")
        with pytest.raises(SerializationError):
            deserialize_points(bytes(data), curve)

    def test_truncated_prefix(self, curve):
        with pytest.raises(SerializationError):
            deserialize_points(b"\x01\x00", curve)

    def test_list_of_g1_points(self, curve):
        codec = ListCodec(G1Codec(curve))
        points = [curve.G1, curve.Z1, curve.mul(curve.G1, 3)]
        restored = Serializable.from_bytes(codec, Serializable(codec, points).to_bytes()).payload
        assert all(curve.eq(a, b) for a, b in zip(restored, points))


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class TestSRSSerialization:
    @pytest.mark.parametrize("compress", [True, False])
    def test_roundtrip(self, any_srs, compress):
        data = serialize_srs(any_srs, compress=compress)
        restored = deserialize_srs(data, any_srs.curve, compress=compress)
        assert restored == any_srs
        assert restored.max_degree == any_srs.max_degree

    def test_size(self, srs_small):
        n = srs_small.max_degree + 1
        expected = 8 + n * 48 + 8 + n * 96 + 96
        assert len(serialize_srs(srs_small)) == expected

    def test_restored_srs_verifies(self, srs_bn128):
        restored = deserialize_srs(serialize_srs(srs_bn128), BN128)
        poly = Polynomial([1, 2, 3], field=BN128.Fr)
        C = commit(poly, srs_bn128)
        proof = create_witness(poly, 5, srs_bn128)
        assert verify_opening(C, proof, 5, poly.evaluate(5), restored)

    def test_truncated(self, srs_bn128):
        data = serialize_srs(srs_bn128)
        with pytest.raises(SerializationError):
            deserialize_srs(data[:-1], BN128)

    def test_trailing(self, srs_bn128):
        data = serialize_srs(srs_bn128)
        with pytest.raises(SerializationError):
            deserialize_srs(data + b"\x00", BN128)

    def test_mismatched_power_counts(self):
        g1_list = ListCodec(G1Codec(BN128)).encode([BN128.G1, BN128.G1])
        g2_list = ListCodec(G2Codec(BN128)).encode([BN128.G2])
        data = g1_list + g2_list + G2Codec(BN128).encode(BN128.G2)
        with pytest.raises(SerializationError):
            deserialize_srs(data, BN128)

    def _encode_parts(self, g1_powers, g2_powers, g2_tau):
        return (
            ListCodec(G1Codec(BN128)).encode(g1_powers)
            + ListCodec(G2Codec(BN128)).encode(g2_powers)
            + G2Codec(BN128).encode(g2_tau)
        )

    def test_inconsistent_g2_tau_rejected(self):
        """g2_tau = 6·G2 while crs_g2[1] = 5·G2."""
        data = self._encode_parts(
            [BN128.G1, BN128.mul(BN128.G1, 5)],
            [BN128.G2, BN128.mul(BN128.G2, 5)],
            BN128.mul(BN128.G2, 6),
        )
        with pytest.raises(SerializationError):
            deserialize_srs(data, BN128)

    def test_wrong_generator_rejected(self):
        data = self._encode_parts(
            [BN128.mul(BN128.G1, 2), BN128.mul(BN128.G1, 5)],
            [BN128.G2, BN128.mul(BN128.G2, 5)],
            BN128.mul(BN128.G2, 5),
        )
        with pytest.raises(SerializationError):
            deserialize_srs(data, BN128)

    def test_consistent_parts_accepted(self):
        data = self._encode_parts(
            [BN128.G1, BN128.mul(BN128.G1, 5)],
            [BN128.G2, BN128.mul(BN128.G2, 5)],
            BN128.mul(BN128.G2, 5),
        )
        assert deserialize_srs(data, BN128) == setup(5, 1, BN128)

    def test_codec_curve_mismatch(self, srs_bn128):
        with pytest.raises(InvalidInput):
            SRSCodec(BLS12_381).encode(srs_bn128)


# ─────────────────────────────────────────────────────────────────────
# Serializable / hex
# ─────────────────────────────────────────────────────────────────────

class TestSerializable:
    def test_hex_roundtrip(self):
        codec = G1Codec("bn128")
        point = BN128.mul(BN128.G1, 5)
        text = Serializable(codec, point).to_hex()
        assert BN128.eq(Serializable.from_hex(codec, text).payload, point)

    def test_bad_hex(self):
        with pytest.raises(SerializationError):
            Serializable.from_hex(G1Codec("bn128"), "zz")

    def test_odd_length_hex(self):
        with pytest.raises(SerializationError):
            Serializable.from_hex(G1Codec("bn128"), "abc")

    def test_repr(self):
        assert repr(Serializable(G1Codec("bn128"), None)) == "Serializable(G1Codec, None)"
