import pytest
from coincurve import PrivateKey, PublicKey

from ecfield import ECPoint, from_public_key, reference_multiply, to_public_key


@pytest.mark.parametrize("k", [1, 2, 3, 7, 255, 2**200 + 12345])
def test_reference_multiply_agrees_with_group_law(secp_curve, k):
    assert reference_multiply(k) == secp_curve.scalar_multiply_generator(k)


def test_generator_matches_secret_one(secp_curve):
    expected = PrivateKey((1).to_bytes(32, "big")).public_key
    assert to_public_key(secp_curve.G).format() == expected.format()
    assert from_public_key(expected) == secp_curve.G


def test_public_key_round_trip(secp_curve):
    P = secp_curve.scalar_multiply_generator(42)
    pk = to_public_key(P)
    assert isinstance(pk, PublicKey)
    assert from_public_key(pk) == P


def test_infinity_has_no_public_key():
    with pytest.raises(ValueError):
        to_public_key(ECPoint.infinity())


def test_reference_multiply_reduces_by_the_order(secp_curve):
    assert reference_multiply(0).is_infinity()
    assert reference_multiply(secp_curve.order).is_infinity()
    assert reference_multiply(int(secp_curve.order) + 1) == secp_curve.G
