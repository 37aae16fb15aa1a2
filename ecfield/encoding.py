"""
SEC 1 point encoding and hash-to-curve.

Encodings (SEC 1 v2 §2.3.3), with coordinates big-endian and padded to
the byte length of the field modulus:

    infinity       0x00
    compressed     0x02 | 0x03 (parity of y)  ‖  X
    uncompressed   0x04  ‖  X  ‖  Y

Decompression recovers *y* with :meth:`Field.sqrt` and checks the
root, since the  m ≡ 3 (mod 4)  shortcut does not.

``hash_to_point`` is try-and-increment: hash a counter until the digest
is an x-coordinate with  x³ + a·x + b  a square, then take the even
root.  Nobody knows the discrete log of the result with respect to *G*
(a NUMS point).
"""

from __future__ import annotations

import hashlib

from .curve import Curve, ECPoint
from .errors import HashToCurveError, NoSquareRoot, NotOnCurveError, PointDecodingError
from .uint import U256, IntoUInt

_PREFIX_INFINITY = 0x00
_PREFIX_EVEN = 0x02
_PREFIX_ODD = 0x03
_PREFIX_UNCOMPRESSED = 0x04

_HASH_TO_CURVE_ATTEMPTS = 256


def coordinate_size(curve: Curve) -> int:
    """Bytes per coordinate: ``ceil(bits(m) / 8)``."""
    return (curve.modulus.bit_length() + 7) // 8


def encode_point(curve: Curve, p: ECPoint, compressed: bool = True) -> bytes:
    if p.is_infinity():
        return bytes([_PREFIX_INFINITY])
    size = coordinate_size(curve)
    x = p.x.to_bytes(size)
    if compressed:
        prefix = _PREFIX_ODD if p.y.is_odd() else _PREFIX_EVEN
        return bytes([prefix]) + x
    return bytes([_PREFIX_UNCOMPRESSED]) + x + p.y.to_bytes(size)


def decode_point(curve: Curve, data: bytes) -> ECPoint:
    """
    Parse a SEC 1 encoding.

    Raises
    ------
    PointDecodingError
        Unknown prefix byte, wrong length, or a coordinate not below
        the modulus.
    NotOnCurveError
        The coordinates do not satisfy the curve equation.
    """
    if not data:
        raise PointDecodingError("empty point encoding")
    prefix, body = data[0], data[1:]
    size = coordinate_size(curve)

    if prefix == _PREFIX_INFINITY:
        if body:
            raise PointDecodingError("infinity encoding must be a single 0x00 byte")
        return ECPoint.infinity()

    if prefix in (_PREFIX_EVEN, _PREFIX_ODD):
        if len(body) != size:
            raise PointDecodingError(f"compressed point needs {size + 1} bytes, got {len(data)}")
        x = _coordinate(curve, body)
        return lift_x(curve, x, odd=prefix == _PREFIX_ODD)

    if prefix == _PREFIX_UNCOMPRESSED:
        if len(body) != 2 * size:
            raise PointDecodingError(f"uncompressed point needs {2 * size + 1} bytes, got {len(data)}")
        x = _coordinate(curve, body[:size])
        y = _coordinate(curve, body[size:])
        return curve.point(x, y)

    raise PointDecodingError(f"unknown point prefix 0x{prefix:02x}")


def lift_x(curve: Curve, x: IntoUInt, odd: bool = False) -> ECPoint:
    """The curve point with abscissa *x* and the requested *y* parity."""
    f = curve.field
    x = f.reduce(x)
    rhs = f.add(f.add(f.mul(f.square(x), x), f.mul(curve.a, x)), curve.b)
    try:
        y = f.sqrt(rhs)
    except NoSquareRoot as e:
        raise NotOnCurveError(f"no point with x = {x.value}") from e
    if not f.eq(f.square(y), rhs):
        raise NotOnCurveError(f"no point with x = {x.value}")
    if y.is_odd() != odd:
        y = f.add_inv(y)
        if y.is_odd() != odd:
            # y = 0 has no odd root
            raise NotOnCurveError(f"no point with x = {x.value} and odd y")
    return ECPoint(x, y)


def hash_to_point(curve: Curve, data: bytes, tag: bytes = b"ecfield/hash_to_point/v1") -> ECPoint:
    """
    Deterministically map *data* to a curve point with even *y*.

    Candidate i is  x_i = SHA-256(SHA-256(tag) ‖ data ‖ i)  reduced to
    the coordinate width; the first x_i below the modulus that lifts to
    the curve wins.
    """
    size = coordinate_size(curve)
    tag_hash = hashlib.sha256(tag).digest()
    for counter in range(_HASH_TO_CURVE_ATTEMPTS):
        digest = hashlib.sha256(tag_hash + data + counter.to_bytes(4, "big")).digest()
        x_int = int.from_bytes(digest[:size], "big")
        if x_int >= curve.modulus.value:
            continue
        try:
            return lift_x(curve, U256(x_int), odd=False)
        except NotOnCurveError:
            continue
    raise HashToCurveError(f"no curve point after {_HASH_TO_CURVE_ATTEMPTS} attempts")


def _coordinate(curve: Curve, raw: bytes) -> U256:
    v = U256.from_bytes(raw)
    if v >= curve.modulus:
        raise PointDecodingError("coordinate is not below the field modulus")
    return v
