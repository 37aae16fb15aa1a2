"""
Short-Weierstrass elliptic curves over a prime field.

A curve  y² = x³ + a·x + b  (mod m)  is configured once from its raw
coefficients, field modulus, subgroup order and generator *G*, and
derives a :class:`~ecfield.field.Field` from the modulus.  Every group
operation is written purely in terms of that field's operations.

Points are either affine ``(x, y)`` or the point at infinity *O*, the
group identity.  Addition follows the chord-and-tangent law:

    chord     λ = (y₂ - y₁) / (x₂ - x₁)
    tangent   λ = (3·x₁² + a) / (2·y₁)
    x₃ = λ² - x₁ - x₂        y₃ = λ·(x₁ - x₃) - y₁

with *O* handled explicitly, and the vertical chord (same *x*, different
*y*) producing *O*.

Example
-------
::

    from ecfield import bn128

    curve = bn128()
    G3 = curve.scalar_multiply_generator(3)
    assert G3 == curve.add_points(curve.point_doubling(curve.G), curve.G)

References
----------
- SEC 1 v2 §2.2.1  Elliptic curves over F_p
- Hankerson, Menezes, Vanstone.  "Guide to Elliptic Curve
  Cryptography", Algorithm 3.26 (right-to-left binary method).
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional, Tuple

from .errors import NoInverseExists, NotOnCurveError
from .field import Field
from .uint import U256, IntoUInt, to_uint

logger = logging.getLogger(__name__)


# ── ECPoint ─────────────────────────────────────────────────────────────
class ECPoint:
    """
    A curve point: affine ``(x, y)`` or the point at infinity.

    The identity is a flag rather than a coordinate pair, so that no
    affine value (not even ``(0, 0)``) is mistaken for it.

    ``==`` compares the stored coordinates as given; use
    :meth:`Curve.eq` to compare modulo the field, or build points with
    :meth:`Curve.point`, which reduces them first.
    """

    __slots__ = ("_x", "_y", "_inf")

    def __init__(
        self,
        x: IntoUInt = 0,
        y: IntoUInt = 0,
        *,
        infinity: bool = False,
    ) -> None:
        self._inf: bool = infinity
        self._x: U256 = U256.zero() if infinity else to_uint(x)
        self._y: U256 = U256.zero() if infinity else to_uint(y)

    @classmethod
    def infinity(cls) -> ECPoint:
        """Point at infinity, the additive identity."""
        return cls(infinity=True)

    def is_infinity(self) -> bool:
        return self._inf

    @property
    def x(self) -> U256:
        if self._inf:
            raise ValueError("the point at infinity has no affine coordinates")
        return self._x

    @property
    def y(self) -> U256:
        if self._inf:
            raise ValueError("the point at infinity has no affine coordinates")
        return self._y

    def to_tuple(self) -> Tuple[int, int]:
        return int(self.x), int(self.y)

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, ECPoint):
            return NotImplemented
        if self._inf or o._inf:
            return self._inf and o._inf
        return self._x == o._x and self._y == o._y

    def __hash__(self) -> int:
        return hash(("inf",)) if self._inf else hash((self._x, self._y))

    def __repr__(self) -> str:
        if self._inf:
            return "ECPoint(∞)"
        return f"ECPoint({self._x!r}, {self._y!r})"


# ── Curve ───────────────────────────────────────────────────────────────
class Curve:
    """
    Short-Weierstrass curve  y² = x³ + a·x + b  over  Z_modulus.

    Parameters are stored verbatim (as ``U256``); nothing is validated
    beyond the modulus being non-zero, which :class:`Field` enforces at
    construction.

    Parameters
    ----------
    a, b : int, str or U256
        Curve coefficients.
    modulus : int, str or U256
        Field modulus *m*; a ``Field(modulus)`` is derived from it.
    order : int, str or U256
        Order of the subgroup generated by *G*.
    G : ECPoint
        Generator point.
    name : str, optional
        Label used in ``repr``.
    """

    __slots__ = ("_a", "_b", "_modulus", "_order", "_G", "_field", "_name")

    def __init__(
        self,
        a: IntoUInt,
        b: IntoUInt,
        modulus: IntoUInt,
        order: IntoUInt,
        G: ECPoint,
        name: Optional[str] = None,
    ) -> None:
        self._field = Field(modulus)
        self._modulus = self._field.modulus
        self._a = to_uint(a)
        self._b = to_uint(b)
        self._order = to_uint(order)
        self._G = G
        self._name = name
        logger.debug("Curve %s constructed over %r", name or "<anonymous>", self._field)

    # configuration ----------------------------------------------------------
    @property
    def a(self) -> U256:
        return self._a

    @property
    def b(self) -> U256:
        return self._b

    @property
    def modulus(self) -> U256:
        return self._modulus

    @property
    def order(self) -> U256:
        return self._order

    @property
    def G(self) -> ECPoint:  # noqa: N802
        return self._G

    @property
    def field(self) -> Field:
        return self._field

    @property
    def name(self) -> Optional[str]:
        return self._name

    # points -----------------------------------------------------------------
    def point(self, x: IntoUInt, y: IntoUInt) -> ECPoint:
        """Affine point, checked against the curve equation."""
        p = ECPoint(self._field.reduce(x), self._field.reduce(y))
        if not self.is_on_curve(p):
            raise NotOnCurveError(f"({x}, {y}) is not on {self!r}")
        return p

    def is_on_curve(self, p: ECPoint) -> bool:
        """Check  y² ≡ x³ + a·x + b.  Infinity is on every curve."""
        if p.is_infinity():
            return True
        f = self._field
        rhs = f.add(f.add(f.mul(f.square(p.x), p.x), f.mul(self._a, p.x)), self._b)
        return f.eq(f.square(p.y), rhs)

    def negate(self, p: ECPoint) -> ECPoint:
        if p.is_infinity():
            return p
        return ECPoint(p.x, self._field.add_inv(p.y))

    def random_scalar(self) -> U256:
        """Uniform in [1, order - 1] from the OS CSPRNG."""
        if self._order <= 1:
            raise ValueError("curve order must be at least 2 to sample a scalar")
        return U256(secrets.randbelow(self._order.value - 1) + 1)

    # group law --------------------------------------------------------------
    def eq(self, p1: ECPoint, p2: ECPoint) -> bool:
        """Coordinate-wise equality modulo *m*."""
        if p1.is_infinity() or p2.is_infinity():
            return p1.is_infinity() and p2.is_infinity()
        f = self._field
        return f.eq(p1.x, p2.x) and f.eq(p1.y, p2.y)

    def add_points(self, p1: ECPoint, p2: ECPoint) -> ECPoint:
        """``p1 + p2``: tangent when the points are equal, chord otherwise."""
        if self.eq(p1, p2):
            return self.point_doubling(p1)
        return self.point_addition(p1, p2)

    def point_addition(self, p1: ECPoint, p2: ECPoint) -> ECPoint:
        """
        Chord addition of two distinct points.

        Raises
        ------
        NoInverseExists
            When *p1* and *p2* are the same affine point: the chord is
            undefined, use :meth:`add_points`.
        """
        if p1.is_infinity():
            return p2
        if p2.is_infinity():
            return p1
        f = self._field
        if f.eq(p1.x, p2.x):
            if not f.eq(p1.y, p2.y):
                return ECPoint.infinity()
            raise NoInverseExists("chord through a single point; use add_points")

        slope = f.div(f.sub(p2.y, p1.y), f.sub(p2.x, p1.x))
        x3 = f.sub(f.sub(f.square(slope), p1.x), p2.x)
        y3 = f.sub(f.mul(slope, f.sub(p1.x, x3)), p1.y)
        return ECPoint(x3, y3)

    def point_doubling(self, p: ECPoint) -> ECPoint:
        """
        Tangent doubling ``2·p``.

        Raises
        ------
        NoInverseExists
            When ``p.y == 0`` (vertical tangent).
        """
        if p.is_infinity():
            return p
        f = self._field
        slope = f.div(f.add(f.mul(f.square(p.x), 3), self._a), f.mul(p.y, 2))
        x3 = f.sub(f.square(slope), f.mul(p.x, 2))
        y3 = f.sub(f.mul(slope, f.sub(p.x, x3)), p.y)
        return ECPoint(x3, y3)

    def scalar_multiply(self, scalar: IntoUInt, start: ECPoint) -> ECPoint:
        """
        ``scalar · start`` by double-and-add, least significant bit
        first: O(log₂ scalar) point operations.
        """
        k = to_uint(scalar)
        r = ECPoint.infinity()
        a = start
        while not k.is_zero():
            if k.is_odd():
                r = self.add_points(r, a)
            k = k >> 1
            # the addend after the top bit is never used
            if not k.is_zero():
                a = self.point_doubling(a)
        return r

    def scalar_multiply_generator(self, scalar: IntoUInt) -> ECPoint:
        return self.scalar_multiply(scalar, self._G)

    def __repr__(self) -> str:
        if self._name:
            return f"Curve({self._name})"
        return f"Curve(a={self._a.value}, b={self._b.value}, modulus={self._modulus!r})"
