"""
Fixed-width unsigned integers.

``U256`` is the canonical residue type of the field engine and ``U512``
is its double-width companion, used only for intermediate sums and
products that would overflow 256 bits.

Python integers never overflow, so the width is enforced here: every
constructor rejects negative values and values wider than ``BITS``,
and the ``checked_*`` methods report native-width overflow by returning
``None`` instead of a result.

Conversions are explicit and total::

    U256(42)                  # from int
    U256.from_str("1234")     # decimal text
    U256.from_hex("0xfffe")   # hexadecimal text
    U256.from_bytes(b"\\x01")  # big-endian bytes
    to_uint("0x10")           # any of the above, dispatched on type
"""

from __future__ import annotations

import re
from typing import Optional, Type, TypeVar, Union

from .errors import InvalidLiteralError, NegativeValueError, WidthOverflowError

T = TypeVar("T", bound="UInt")

_DEC_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


class UInt:
    """Unsigned integer of fixed width ``BITS``.  Immutable."""

    __slots__ = ("_v",)

    BITS = 0

    def __init__(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{type(self).__name__} needs an int, got {type(value).__name__}"
            )
        if value < 0:
            raise NegativeValueError(
                f"negative value cannot be converted to {type(self).__name__}"
            )
        if value.bit_length() > self.BITS:
            raise WidthOverflowError(
                f"value needs {value.bit_length()} bits, "
                f"{type(self).__name__} holds {self.BITS}"
            )
        self._v = value

    # constructors -----------------------------------------------------------
    @classmethod
    def from_int(cls: Type[T], value: int) -> T:
        return cls(value)

    @classmethod
    def from_str(cls: Type[T], text: str) -> T:
        """Parse a decimal literal such as ``"115792089237316195..."``."""
        s = text.strip()
        if s.startswith("-") and _DEC_RE.fullmatch(s[1:]):
            raise NegativeValueError(f"negative literal {text!r}")
        if not _DEC_RE.fullmatch(s):
            raise InvalidLiteralError(f"not a decimal integer: {text!r}")
        return cls(int(s))

    @classmethod
    def from_hex(cls: Type[T], text: str) -> T:
        """Parse a hexadecimal literal, with or without a ``0x`` prefix."""
        s = text.strip()
        if s.startswith("-"):
            raise NegativeValueError(f"negative literal {text!r}")
        if s[:2] in ("0x", "0X"):
            s = s[2:]
        if not _HEX_RE.fullmatch(s):
            raise InvalidLiteralError(f"not a hexadecimal integer: {text!r}")
        return cls(int(s, 16))

    @classmethod
    def from_bytes(cls: Type[T], data: bytes) -> T:
        """Big-endian decoding; at most ``BITS // 8`` bytes."""
        if len(data) > cls.BITS // 8:
            raise WidthOverflowError(
                f"{cls.__name__} takes at most {cls.BITS // 8} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def zero(cls: Type[T]) -> T:
        return cls(0)

    @classmethod
    def one(cls: Type[T]) -> T:
        return cls(1)

    @classmethod
    def max_value(cls: Type[T]) -> T:
        return cls((1 << cls.BITS) - 1)

    # serialisation ----------------------------------------------------------
    def to_bytes(self, length: Optional[int] = None) -> bytes:
        return self._v.to_bytes(self.BITS // 8 if length is None else length, "big")

    @property
    def value(self) -> int:
        return self._v

    def bit_length(self) -> int:
        return self._v.bit_length()

    def is_zero(self) -> bool:
        return self._v == 0

    def is_odd(self) -> bool:
        return bool(self._v & 1)

    # checked arithmetic (None on overflow) ----------------------------------
    def checked_add(self: T, o: Union[UInt, int]) -> Optional[T]:
        v = self._v + _raw(o)
        return type(self)(v) if v.bit_length() <= self.BITS else None

    def checked_sub(self: T, o: Union[UInt, int]) -> Optional[T]:
        v = self._v - _raw(o)
        return type(self)(v) if v >= 0 else None

    def checked_mul(self: T, o: Union[UInt, int]) -> Optional[T]:
        v = self._v * _raw(o)
        return type(self)(v) if v.bit_length() <= self.BITS else None

    # exact arithmetic (raises when the result leaves the width) -------------
    def __add__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        r = self.checked_add(o)
        if r is None:
            raise WidthOverflowError(f"{type(self).__name__} addition overflow")
        return r

    def __sub__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        r = self.checked_sub(o)
        if r is None:
            raise WidthOverflowError(f"{type(self).__name__} subtraction underflow")
        return r

    def __mul__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        r = self.checked_mul(o)
        if r is None:
            raise WidthOverflowError(f"{type(self).__name__} multiplication overflow")
        return r

    def __floordiv__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        return type(self)(self._v // _raw(o))

    def __mod__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        return type(self)(self._v % _raw(o))

    def __divmod__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        q, r = divmod(self._v, _raw(o))
        return type(self)(q), type(self)(r)

    def __rshift__(self: T, n: int) -> T:
        return type(self)(self._v >> n)

    def __and__(self: T, o):
        if not _is_operand(o):
            return NotImplemented
        return type(self)(self._v & _raw(o))

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, UInt):
            return self._v == o._v
        if isinstance(o, int) and not isinstance(o, bool):
            return self._v == o
        return NotImplemented

    def __lt__(self, o) -> bool:
        if not _is_operand(o):
            return NotImplemented
        return self._v < _raw(o)

    def __le__(self, o) -> bool:
        if not _is_operand(o):
            return NotImplemented
        return self._v <= _raw(o)

    def __gt__(self, o) -> bool:
        if not _is_operand(o):
            return NotImplemented
        return self._v > _raw(o)

    def __ge__(self, o) -> bool:
        if not _is_operand(o):
            return NotImplemented
        return self._v >= _raw(o)

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __int__(self) -> int:
        return self._v

    def __index__(self) -> int:
        return self._v

    def __str__(self) -> str:
        return str(self._v)

    def __repr__(self) -> str:
        h = hex(self._v)
        name = type(self).__name__
        return f"{name}({h[:10]}…)" if len(h) > 14 else f"{name}({h})"


class U256(UInt):
    """256-bit residue type."""

    __slots__ = ()

    BITS = 256

    def widen(self) -> U512:
        return U512(self._v)


class U512(UInt):
    """Double-width intermediate for sums and products of two ``U256``."""

    __slots__ = ()

    BITS = 512

    def narrow(self) -> U256:
        """Back to 256 bits; the high half must be zero."""
        return U256(self._v)


IntoUInt = Union[UInt, int, str]


def to_uint(value: IntoUInt, cls: Type[T] = U256) -> T:  # type: ignore[assignment]
    """
    Convert ``value`` to ``cls`` (``U256`` by default).

    Accepts another ``UInt``, a non-negative ``int``, or text: decimal,
    or hexadecimal when prefixed with ``0x``.  ``bool`` is refused even
    though it is an ``int`` subclass.

    Raises
    ------
    NegativeValueError
        ``value`` is negative.
    WidthOverflowError
        ``value`` does not fit into ``cls.BITS`` bits.
    InvalidLiteralError
        ``value`` is text but not an integer literal.
    TypeError
        ``value`` has an unsupported type.
    """
    if isinstance(value, cls):
        return value
    if isinstance(value, UInt):
        return cls(value.value)
    if isinstance(value, bool):
        raise TypeError("bool is not an integer literal")
    if isinstance(value, int):
        return cls(value)
    if isinstance(value, str):
        s = value.strip()
        if s[:2] in ("0x", "0X") or s[:3] in ("-0x", "-0X"):
            return cls.from_hex(s)
        return cls.from_str(s)
    raise TypeError(f"cannot convert {type(value).__name__} to {cls.__name__}")


# ── internal helpers ────────────────────────────────────────────────────
def _is_operand(o: object) -> bool:
    return isinstance(o, UInt) or (isinstance(o, int) and not isinstance(o, bool))


def _raw(o: Union[UInt, int]) -> int:
    if isinstance(o, UInt):
        return o.value
    if o < 0:
        raise NegativeValueError("negative operand")
    return o
