"""
Prime-field validation.

``GaloisField`` accepts a modulus only if it is prime, and then hands
out residues of that field.  Primality is decided by Miller–Rabin,
computed through the public :class:`~ecfield.field.Field` operations
(``exp``, ``mul``, ``add_inv``, ``eq``).

The fixed witnesses 2..37 make the test deterministic below
3.3·10^24; above that each extra random witness lowers the error
probability by a factor of at least 4.
"""

from __future__ import annotations

import logging
import secrets

from .errors import InvalidModulusError
from .field import Field
from .number import NumberMod
from .uint import U256, IntoUInt, to_uint

logger = logging.getLogger(__name__)

_SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_probable_prime(n: IntoUInt, rounds: int = 20) -> bool:
    """
    Miller–Rabin primality test.

    Parameters
    ----------
    n : int, str or U256
        Candidate.
    rounds : int
        Number of random witnesses on top of the fixed ones.
    """
    n = to_uint(n)
    if n < 2:
        return False
    for p in _SMALL_PRIMES:
        if n == p:
            return True
        if (n % p).is_zero():
            return False

    f = Field(n)
    d, s = n.value - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    witnesses = list(_SMALL_PRIMES)
    witnesses += [secrets.randbelow(n.value - 3) + 2 for _ in range(rounds)]
    return all(_is_strong_probable_prime(f, w, d, s) for w in witnesses)


def _is_strong_probable_prime(f: Field, witness: int, d: int, s: int) -> bool:
    minus_one = f.add_inv(1)
    x = f.exp(witness, d)
    if f.eq(x, 1) or f.eq(x, minus_one):
        return True
    for _ in range(s - 1):
        x = f.mul(x, x)
        if f.eq(x, minus_one):
            return True
    return False


class GaloisField:
    """
    The prime field GF(p).

    Raises
    ------
    InvalidModulusError
        If the modulus is not prime (this includes 0 and 1).
    """

    __slots__ = ("_field",)

    def __init__(self, modulus: IntoUInt, rounds: int = 20) -> None:
        m = to_uint(modulus)
        if not is_probable_prime(m, rounds):
            logger.debug("rejected composite modulus %d", m.value)
            raise InvalidModulusError(f"{m.value} is not prime")
        self._field = Field(m)

    @property
    def field(self) -> Field:
        return self._field

    @property
    def modulus(self) -> U256:
        return self._field.modulus

    def gf(self, value: IntoUInt) -> NumberMod:
        """Residue of this field."""
        return NumberMod(value, self._field)

    def __repr__(self) -> str:
        return f"GaloisField({self.modulus.value})"
