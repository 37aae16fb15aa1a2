"""
Named curve parameters.

Each preset is plain data, ``CurveParams(a, b, modulus, order, G)``,
handed unchanged to :class:`~ecfield.curve.Curve`.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
- EIP-196          alt_bn128 (BN254) as used on Ethereum
"""

from __future__ import annotations

from typing import Dict, NamedTuple, Optional, Tuple, Union

from .curve import Curve, ECPoint
from .errors import UnknownCurveError

Coordinate = Union[int, str]


class CurveParams(NamedTuple):
    """Raw domain parameters of a short-Weierstrass curve."""

    a: Coordinate
    b: Coordinate
    modulus: Coordinate
    order: Coordinate
    G: Tuple[Coordinate, Coordinate]


# ── presets ─────────────────────────────────────────────────────────────
BN128 = CurveParams(
    a=0,
    b=3,
    modulus="21888242871839275222246405745257275088696311157297823662689037894645226208583",
    order="21888242871839275222246405745257275088548364400416034343698204186575808495617",
    G=(1, 2),
)

SECP256K1 = CurveParams(
    a=0,
    b=7,
    modulus="0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F",
    order="0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141",
    G=(
        "55066263022277343669578718895168534326250603453777594175500187360389116729240",
        "32670510020758816978083085130507043184471273380659243275938904335757337482424",
    ),
)

CURVES: Dict[str, CurveParams] = {
    "bn128": BN128,
    "secp256k1": SECP256K1,
}


def build_curve(params: CurveParams, name: Optional[str] = None) -> Curve:
    gx, gy = params.G
    return Curve(params.a, params.b, params.modulus, params.order, ECPoint(gx, gy), name=name)


def curve_by_name(name: str) -> Curve:
    """Build a preset curve; names are case-insensitive (``"BN128"``)."""
    key = name.strip().lower()
    if key not in CURVES:
        raise UnknownCurveError(f"unknown curve {name!r}; known: {sorted(CURVES)}")
    return build_curve(CURVES[key], name=key)


def bn128() -> Curve:
    return build_curve(BN128, name="bn128")


def secp256k1() -> Curve:
    return build_curve(SECP256K1, name="secp256k1")
