"""
Bridge between secp256k1 points and libsecp256k1.

``coincurve`` wraps Bitcoin Core's libsecp256k1.  These helpers convert
between :class:`~ecfield.curve.ECPoint` and ``coincurve.PublicKey`` and
expose libsecp256k1's scalar multiplication as an independent reference
for the pure-Python group law.

Install
-------
    pip install coincurve>=18.0.0
"""

from __future__ import annotations

from coincurve import PrivateKey as _SK, PublicKey as _PK

from .curve import ECPoint
from .encoding import decode_point, encode_point
from .presets import secp256k1
from .uint import IntoUInt, to_uint

_SECP256K1 = secp256k1()


def to_public_key(point: ECPoint) -> _PK:
    """secp256k1 point as a ``coincurve.PublicKey``."""
    if point.is_infinity():
        raise ValueError("libsecp256k1 public keys cannot be the point at infinity")
    return _PK(encode_point(_SECP256K1, point, compressed=True))


def from_public_key(public_key: _PK) -> ECPoint:
    return decode_point(_SECP256K1, public_key.format(compressed=False))


def reference_multiply(scalar: IntoUInt) -> ECPoint:
    """``scalar · G`` on secp256k1, computed by libsecp256k1."""
    k = to_uint(scalar) % _SECP256K1.order
    if k.is_zero():
        return ECPoint.infinity()
    return from_public_key(_SK(k.to_bytes()).public_key)
