"""
ecfield: modular arithmetic and elliptic-curve groups over 256-bit fields.

Two layers, the second built entirely on the first:

- **Field engine** (:class:`Field`): add, sub, mul, exp, inverse and
  square root modulo a fixed-width modulus, overflow-safe through a
  512-bit intermediate.
- **Point group** (:class:`Curve`, :class:`ECPoint`): chord-and-tangent
  addition, doubling and double-and-add scalar multiplication, with an
  explicit point at infinity.

Not constant-time: do not sign with it as-is.

Quick start
-----------
::

    from ecfield import Field, secp256k1

    f = Field(101)
    assert f.div(10, 20) == 51

    curve = secp256k1()
    P = curve.scalar_multiply_generator(7)
    assert curve.is_on_curve(P)
    assert curve.scalar_multiply(curve.order, curve.G).is_infinity()
"""

import logging

__version__ = "0.1.0"

# ── fixed-width integers ────────────────────────────────────────────────
from .uint import UInt, U256, U512, to_uint

# ── engines ─────────────────────────────────────────────────────────────
from .field import Field
from .curve import Curve, ECPoint

# ── presets ─────────────────────────────────────────────────────────────
from .presets import (
    CurveParams,
    BN128,
    SECP256K1,
    CURVES,
    build_curve,
    curve_by_name,
    bn128,
    secp256k1,
)

# ── collaborators ───────────────────────────────────────────────────────
from .number import NumberMod, num_mod
from .galois import GaloisField, is_probable_prime
from .encoding import coordinate_size, encode_point, decode_point, lift_x, hash_to_point
from .interop import to_public_key, from_public_key, reference_multiply

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    EcFieldError,
    ConstructionError,
    InvalidModulusError,
    UnknownCurveError,
    NegativeValueError,
    WidthOverflowError,
    InvalidLiteralError,
    NoInverseExists,
    NoSquareRoot,
    OrderSearchExhausted,
    ModulusMismatchError,
    PointDecodingError,
    NotOnCurveError,
    HashToCurveError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # version
    "__version__",
    # integers
    "UInt", "U256", "U512", "to_uint",
    # engines
    "Field", "Curve", "ECPoint",
    # presets
    "CurveParams", "BN128", "SECP256K1", "CURVES",
    "build_curve", "curve_by_name", "bn128", "secp256k1",
    # collaborators
    "NumberMod", "num_mod", "GaloisField", "is_probable_prime",
    "coordinate_size", "encode_point", "decode_point", "lift_x", "hash_to_point",
    "to_public_key", "from_public_key", "reference_multiply",
    # errors
    "EcFieldError", "ConstructionError", "InvalidModulusError",
    "UnknownCurveError", "NegativeValueError", "WidthOverflowError",
    "InvalidLiteralError", "NoInverseExists", "NoSquareRoot",
    "OrderSearchExhausted", "ModulusMismatchError", "PointDecodingError",
    "NotOnCurveError", "HashToCurveError",
]
