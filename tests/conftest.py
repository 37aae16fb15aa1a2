import pytest

from ecfield import Curve, ECPoint, bn128, secp256k1

# y^2 = x^3 + 2x + 3 over F_97, G = (3, 6) of order 5; 97 = 1 mod 4, so square roots
# go through Tonelli-Shanks
TOY_MODULUS = 97


@pytest.fixture(scope="session")
def bn128_curve():
    return bn128()


@pytest.fixture(scope="session")
def secp_curve():
    return secp256k1()


@pytest.fixture(scope="session")
def toy_curve():
    return Curve(a=2, b=3, modulus=TOY_MODULUS, order=5, G=ECPoint(3, 6), name="toy97")


@pytest.fixture(scope="session")
def toy_points(toy_curve):
    points = []
    for x in range(TOY_MODULUS):
        for y in range(TOY_MODULUS):
            p = ECPoint(x, y)
            if toy_curve.is_on_curve(p):
                points.append(p)
    assert points
    return points
