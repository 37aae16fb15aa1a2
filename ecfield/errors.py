"""
Exception hierarchy for ecfield.

Every failure in the field and curve engines is raised to the immediate
caller.  Each class also derives from the built-in exception that plain
Python code would raise for the same condition, so callers can catch
either ``NoInverseExists`` or ``ZeroDivisionError``.
"""

from __future__ import annotations


class EcFieldError(Exception):
    """Base class for all ecfield errors."""


# ── construction ────────────────────────────────────────────────────────
class ConstructionError(EcFieldError, ValueError):
    """A field or curve was built from an invalid modulus (e.g. zero)."""


class InvalidModulusError(ConstructionError):
    """The modulus is not prime, so it does not define a Galois field."""


class UnknownCurveError(EcFieldError, KeyError):
    """No named curve preset matches the requested name."""


# ── integer conversion ──────────────────────────────────────────────────
class NegativeValueError(EcFieldError, ValueError):
    """A negative number cannot become an unsigned fixed-width integer."""


class WidthOverflowError(EcFieldError, OverflowError):
    """A value does not fit into the fixed bit width."""


class InvalidLiteralError(EcFieldError, ValueError):
    """Text is not a valid decimal or hexadecimal integer literal."""


# ── field arithmetic ────────────────────────────────────────────────────
class NoInverseExists(EcFieldError, ZeroDivisionError):
    """
    The value has no multiplicative inverse: ``gcd(value, m) != 1``
    or ``m == 1``.  Also raised by point addition and doubling when the
    slope denominator is zero.
    """


class NoSquareRoot(EcFieldError, ValueError):
    """The value is a quadratic non-residue modulo the field modulus."""


class OrderSearchExhausted(NoSquareRoot):
    """Tonelli–Shanks found no power-of-two order within its bound."""


class ModulusMismatchError(EcFieldError, ValueError):
    """Two residues under different moduli were combined."""


# ── points ──────────────────────────────────────────────────────────────
class PointDecodingError(EcFieldError, ValueError):
    """Malformed SEC 1 point encoding (length or prefix byte)."""


class NotOnCurveError(EcFieldError, ValueError):
    """Coordinates do not satisfy the curve equation."""


class HashToCurveError(EcFieldError, RuntimeError):
    """Try-and-increment ran out of candidates."""
