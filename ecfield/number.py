"""
Operator-overloaded residues.

``NumberMod`` tags a value with its modulus and forwards each operator
to the field engine, so modular expressions read like ordinary Python::

    >>> a, b = num_mod(5, 7), num_mod(3, 7)
    >>> a + b
    NumberMod(1, mod 7)
    >>> a / b
    NumberMod(4, mod 7)

It only calls the public :class:`~ecfield.field.Field` operations
(``add sub mul div add_inv exp eq``) and never looks at field internals.
The modulus is taken as given; validate it first with
:class:`~ecfield.galois.GaloisField` when a prime is required.
"""

from __future__ import annotations

from typing import Union

from .errors import ModulusMismatchError
from .field import Field
from .uint import U256, IntoUInt, to_uint


class NumberMod:
    """A residue ``value mod modulus``.  Immutable."""

    __slots__ = ("_v", "_field")

    def __init__(self, value: IntoUInt, modulus: Union[IntoUInt, Field]) -> None:
        self._field = modulus if isinstance(modulus, Field) else Field(modulus)
        self._v = self._field.reduce(value)

    @property
    def value(self) -> U256:
        return self._v

    @property
    def modulus(self) -> U256:
        return self._field.modulus

    @property
    def field(self) -> Field:
        return self._field

    def _wrap(self, v: U256) -> NumberMod:
        return NumberMod(v, self._field)

    def _c(self, o) -> U256:
        """Value of a same-modulus operand; ints are lifted into the field."""
        if isinstance(o, NumberMod):
            if o._field != self._field:
                raise ModulusMismatchError(
                    f"cannot combine residues mod {self.modulus.value} "
                    f"and mod {o.modulus.value}"
                )
            return o._v
        return to_uint(o)

    # arithmetic -------------------------------------------------------------
    def __add__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.add(self._v, self._c(o)))

    def __radd__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.add(self._c(o), self._v))

    def __sub__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.sub(self._v, self._c(o)))

    def __rsub__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.sub(self._c(o), self._v))

    def __mul__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.mul(self._v, self._c(o)))

    def __rmul__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.mul(self._c(o), self._v))

    def __truediv__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.div(self._v, self._c(o)))

    def __rtruediv__(self, o) -> NumberMod:
        if not _is_operand(o):
            return NotImplemented
        return self._wrap(self._field.div(self._c(o), self._v))

    def __neg__(self) -> NumberMod:
        return self._wrap(self._field.add_inv(self._v))

    def __pow__(self, e: int) -> NumberMod:
        if e < 0:
            return self._wrap(self._field.exp(self._field.div(1, self._v), -e))
        return self._wrap(self._field.exp(self._v, e))

    def inv(self) -> NumberMod:
        return self._wrap(self._field.div(1, self._v))

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, NumberMod):
            return self._field == o._field and self._field.eq(self._v, o._v)
        if isinstance(o, int) and not isinstance(o, bool) and o >= 0:
            return self._field.eq(self._v, o)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._v, self.modulus))

    def __int__(self) -> int:
        return self._v.value

    def __repr__(self) -> str:
        return f"NumberMod({self._v.value}, mod {self.modulus.value})"


def num_mod(value: IntoUInt, modulus: IntoUInt) -> NumberMod:
    """Shorthand for ``NumberMod(value, modulus)``."""
    return NumberMod(value, modulus)


def _is_operand(o: object) -> bool:
    if isinstance(o, bool):
        return False
    return isinstance(o, (NumberMod, int, U256))
