"""
Modular arithmetic over a fixed 256-bit modulus.

``Field`` is the engine every curve operation is built from.  It holds a
single modulus *m* and exposes the ring operations on ``U256`` residues:

    add  sub  mul  square  exp  add_inv  inv  div  eq  sqrt

Every operand is reduced modulo *m* first and every result lies in
``[0, m)``.  Operands may be given as ``U256``, ``int`` or integer text;
see :func:`ecfield.uint.to_uint`.

Overflow
--------
Sums and products of two 256-bit residues can exceed 256 bits when *m*
is close to ``2**256``.  ``add``, ``sub`` and ``mul`` first try the
native width (``checked_*``) and only on overflow redo the operation in
the double-width ``U512`` before reducing back.

Example
-------
::

    >>> f = Field(101)
    >>> f.div(10, 20)
    U256(0x33)
    >>> f.mul(10, f.inv(10))
    U256(0x1)

Algorithms are variable-time and not hardened against side channels.
"""

from __future__ import annotations

import logging
from typing import Tuple

from .errors import ConstructionError, NoInverseExists, NoSquareRoot, OrderSearchExhausted
from .uint import U256, IntoUInt, to_uint

logger = logging.getLogger(__name__)


class Field:
    """Residue ring  Z_m  (a field when *m* is prime).  Immutable."""

    __slots__ = ("_m",)

    def __init__(self, modulus: IntoUInt) -> None:
        m = to_uint(modulus)
        if m.is_zero():
            raise ConstructionError("modulus cannot be zero")
        self._m = m
        logger.debug("Field constructed with %d-bit modulus", m.bit_length())

    @property
    def modulus(self) -> U256:
        return self._m

    def reduce(self, a: IntoUInt) -> U256:
        """``a mod m``."""
        return to_uint(a) % self._m

    # ring operations --------------------------------------------------------
    def add(self, a: IntoUInt, b: IntoUInt) -> U256:
        a, b = self.reduce(a), self.reduce(b)
        s = a.checked_add(b)
        if s is not None:
            return s % self._m
        return ((a.widen() + b.widen()) % self._m.widen()).narrow()

    def sub(self, a: IntoUInt, b: IntoUInt) -> U256:
        a, b = self.reduce(a), self.reduce(b)
        if b > a:
            # m + a - b, widened when m + a does not fit
            s = self._m.checked_add(a)
            if s is not None:
                return (s - b) % self._m
            return ((self._m.widen() + a.widen() - b.widen()) % self._m.widen()).narrow()
        return (a - b) % self._m

    def mul(self, a: IntoUInt, b: IntoUInt) -> U256:
        a, b = self.reduce(a), self.reduce(b)
        p = a.checked_mul(b)
        if p is not None:
            return p % self._m
        return ((a.widen() * b.widen()) % self._m.widen()).narrow()

    def square(self, a: IntoUInt) -> U256:
        return self.mul(a, a)

    def exp(self, base: IntoUInt, exponent: IntoUInt) -> U256:
        """
        ``base ** exponent mod m`` by square-and-multiply, least
        significant bit first.  Costs O(log exponent) multiplications.
        """
        result = U256.one() % self._m
        base = self.reduce(base)
        e = to_uint(exponent)
        while not e.is_zero():
            if e.is_odd():
                result = self.mul(result, base)
            base = self.square(base)
            e = e >> 1
        return result

    def add_inv(self, a: IntoUInt) -> U256:
        """Additive inverse  -a  (``0`` stays ``0``)."""
        a = self.reduce(a)
        if a.is_zero():
            return a
        return self._m - a

    def inv(self, a: IntoUInt) -> U256:
        """
        Multiplicative inverse via the extended Euclidean algorithm.

        Only the Bézout coefficient of *a* is tracked, and it is kept
        as a residue: every update goes through :meth:`mul` and
        :meth:`sub`, so no intermediate ever goes negative or leaves
        the 256-bit width.

        Raises
        ------
        NoInverseExists
            If ``gcd(a, m) != 1`` (including ``a ≡ 0``) or ``m == 1``.
        """
        if self._m == 1:
            raise NoInverseExists("no inverse exists modulo 1")
        r = self.reduce(a)
        m = self._m
        x0, x1 = U256.zero(), U256.one()
        while r > 1:
            if m.is_zero():
                break
            q, rem = divmod(r, m)
            r, m = m, rem
            x0, x1 = self.sub(x1, self.mul(q, x0)), x0
        if r != 1:
            raise NoInverseExists(f"{int(to_uint(a))} has no inverse modulo {self._m}")
        return x1

    def div(self, a: IntoUInt, b: IntoUInt) -> U256:
        """``a * b^-1``; raises ``NoInverseExists`` exactly when ``inv(b)`` does."""
        return self.mul(a, self.inv(b))

    def eq(self, a: IntoUInt, b: IntoUInt) -> bool:
        return self.reduce(a) == self.reduce(b)

    # square roots -----------------------------------------------------------
    def legendre(self, a: IntoUInt) -> int:
        """Euler's criterion: ``1`` residue, ``0`` zero, ``-1`` non-residue."""
        t = self.exp(a, (self._m - 1) // 2)
        if t == 1:
            return 1
        if t.is_zero():
            return 0
        return -1

    def sqrt(self, a: IntoUInt) -> U256:
        r"""
        A square root of *a* modulo *m*.

        For  m ≡ 3 (mod 4)  the root is  a^((m+1)/4)  directly; this is
        a correct root whenever one exists and is returned unchecked.
        Otherwise Tonelli–Shanks:

        1. ``m - 1 = s · 2^e`` with *s* odd, *q* a non-residue.
        2. ``x = a^((s+1)/2)``, ``b = a^s``, ``g = q^s``, ``r = e``.
        3. Find the least *k* < *r* with ``b^(2^k) = 1``.  Stop with *x*
           when *k* is 0, else ``x *= g^(2^(r-k-1))``,
           ``g = g^(2^(r-k))``, ``b *= g``, ``r = k`` and repeat
           (stopping early once *b* is 1).

        Raises
        ------
        NoSquareRoot
            *a* is a quadratic non-residue.
        OrderSearchExhausted
            The order of *b* is not a power of two below the bound
            (only possible for a composite modulus).
        """
        a = self.reduce(a)
        if self._m % 4 == 3:
            return self.exp(a, self._m // 4 + 1)
        if self._m == 2:
            return a

        symbol = self.legendre(a)
        if symbol == -1:
            raise NoSquareRoot(f"{int(a)} is not a square modulo {self._m}")
        if symbol == 0:
            return U256.zero()

        s, e = _split_power_of_two(self._m - 1)
        q = self._find_non_residue()

        x = self.exp(a, (s + 1) // 2)
        b = self.exp(a, s)
        g = self.exp(q, s)
        r = e
        while True:
            k = self._power_of_two_order(b, r)
            if k == 0:
                return x
            x = self.mul(x, self.exp(g, 1 << (r - k - 1)))
            g = self.exp(g, 1 << (r - k))
            b = self.mul(b, g)
            if b == 1:
                return x
            r = k

    def _find_non_residue(self) -> U256:
        # least non-residue of a prime p is below 2·ln(p)^2 (under GRH)
        bits = self._m.bit_length()
        bound = min(self._m.value, bits * bits + 3)
        target = self._m - 1
        exponent = (self._m - 1) // 2
        for q in range(2, bound):
            if self.exp(q, exponent) == target:
                logger.debug("Tonelli-Shanks non-residue q=%d", q)
                return U256(q)
        raise NoSquareRoot(f"no quadratic non-residue found modulo {self._m}")

    def _power_of_two_order(self, b: U256, r: int) -> int:
        """Least k in [0, r) with b^(2^k) == 1, by repeated squaring."""
        limit = min(r, self._m.bit_length() + 1)
        t = b
        for k in range(limit):
            if t == 1:
                return k
            t = self.square(t)
        raise OrderSearchExhausted(
            f"order of {int(b)} is not a power of two below 2^{limit}"
        )

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Field):
            return NotImplemented
        return self._m == o._m

    def __hash__(self) -> int:
        return hash(("Field", self._m))

    def __repr__(self) -> str:
        return f"Field({self._m.value})"


# ── internal helpers ────────────────────────────────────────────────────
def _split_power_of_two(n: U256) -> Tuple[U256, int]:
    """Write n = s · 2^e with s odd; returns (s, e)."""
    e = 0
    while not n.is_zero() and not n.is_odd():
        n = n >> 1
        e += 1
    return n, e
