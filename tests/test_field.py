import math
import random

import pytest

from ecfield import (
    SECP256K1,
    U256,
    ConstructionError,
    Field,
    NegativeValueError,
    NoInverseExists,
    NoSquareRoot,
    OrderSearchExhausted,
    to_uint,
)

SECP_P = int(to_uint(SECP256K1.modulus))
SECP_N = int(to_uint(SECP256K1.order))
BN254_R = 21888242871839275222246405745257275088548364400416034343698204186575808495617
MAX = (1 << 256) - 1


@pytest.mark.parametrize("modulus", [0, "0", "0x0", U256(0)])
def test_zero_modulus_fails_at_construction(modulus):
    with pytest.raises(ConstructionError):
        Field(modulus)


def test_negative_modulus_is_rejected():
    with pytest.raises(NegativeValueError):
        Field(-7)


@pytest.mark.parametrize(
    ("modulus", "operation", "args", "expected"),
    [
        (100, "add", (45, 60), 5),
        (100, "add", (20, 75), 95),
        (100, "sub", (60, 45), 15),
        (100, "sub", (30, 40), 90),
        (100, "mul", (12, 25), 0),
        (100, "mul", (7, 14), 98),
        (100, "exp", (3, 4), 81),
        (100, "exp", (2, 8), 56),
        (100, "square", (10,), 0),
        (100, "add_inv", (30,), 70),
        (100, "add_inv", (0,), 0),
        (100, "add_inv", (130,), 70),
        (101, "div", (10, 20), 51),
        (101, "div", (10, 10), 1),
        (101, "inv", (10,), 91),
        (7, "exp", (3, 0), 1),
        (1, "exp", (3, 0), 0),
        (1, "add", (3, 4), 0),
    ],
)
def test_known_values(modulus, operation, args, expected):
    assert getattr(Field(modulus), operation)(*args) == expected


def test_operands_accept_text_and_u256():
    f = Field("101")
    assert f.add("0x0a", U256(20)) == 30
    assert f.mul("10", 11) == 9
    assert f.eq(5, "106")


@pytest.mark.parametrize("modulus", [2, 97, 100, 101, SECP_P, SECP_N, MAX, MAX - 1])
def test_results_are_reduced_and_match_python_ints(modulus):
    f = Field(modulus)
    rng = random.Random(modulus)
    for _ in range(32):
        a = rng.randrange(0, MAX + 1)
        b = rng.randrange(0, MAX + 1)
        results = {
            "add": (f.add(a, b), (a + b) % modulus),
            "sub": (f.sub(a, b), (a - b) % modulus),
            "mul": (f.mul(a, b), (a * b) % modulus),
            "square": (f.square(a), (a * a) % modulus),
        }
        for name, (got, want) in results.items():
            assert isinstance(got, U256), name
            assert 0 <= got < modulus, name
            assert got == want, name


def test_overflow_paths_near_the_width():
    f = Field(MAX)
    assert f.add(MAX - 1, MAX - 2) == MAX - 3
    assert f.sub(5, MAX - 10) == 15
    assert f.mul(MAX - 1, MAX - 1) == 1
    assert f.add_inv(1) == MAX - 1


@pytest.mark.parametrize("modulus", [7, 100, 101, SECP_P])
def test_additive_inverse(modulus):
    f = Field(modulus)
    rng = random.Random(1)
    for a in [0, 1, modulus - 1] + [rng.randrange(0, MAX + 1) for _ in range(16)]:
        assert f.add(a, f.add_inv(a)) == 0


@pytest.mark.parametrize("modulus", [2, 12, 100, 101, 113, SECP_P, SECP_N, MAX])
def test_inverse_exists_exactly_for_units(modulus):
    f = Field(modulus)
    rng = random.Random(2)
    candidates = list(range(min(modulus, 50))) + [rng.randrange(0, modulus) for _ in range(16)]
    for a in candidates:
        if math.gcd(a, modulus) == 1:
            a_inv = f.inv(a)
            assert f.mul(a, a_inv) == 1
            assert a_inv == pow(a, -1, modulus)
        else:
            with pytest.raises(NoInverseExists):
                f.inv(a)


def test_inverse_modulo_one_fails():
    with pytest.raises(NoInverseExists):
        Field(1).inv(0)


def test_inverse_is_a_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        Field(101).inv(0)


def test_secp256k1_order_inverse():
    f = Field(SECP_N)
    den = 55066263022277343669578718895168534326250603453777594175500187360389116729240
    den_inv = f.inv(den)
    assert f.mul(den, den_inv) == 1
    assert den_inv == pow(den, -1, SECP_N)


@pytest.mark.parametrize("modulus", [12, 101])
def test_div_fails_exactly_when_inv_fails(modulus):
    f = Field(modulus)
    for b in range(modulus):
        if math.gcd(b, modulus) == 1:
            assert f.div(7, b) == f.mul(7, f.inv(b))
        else:
            with pytest.raises(NoInverseExists):
                f.div(7, b)


def test_exp_matches_repeated_multiplication():
    f = Field(1009)
    for base in (0, 1, 2, 17, 1008):
        acc = U256(1)
        for e in range(20):
            assert f.exp(base, e) == acc
            acc = f.mul(acc, base)


def test_exp_large_exponent():
    f = Field(SECP_P)
    assert f.exp(3, SECP_P - 1) == 1
    assert f.exp(123456789, MAX) == pow(123456789, MAX, SECP_P)


@pytest.mark.parametrize(
    ("modulus", "value", "expected"),
    [(13, 2, -1), (13, 3, 1), (13, 0, 0), (13, 26, 0), (113, 2, 1)],
)
def test_legendre(modulus, value, expected):
    assert Field(modulus).legendre(value) == expected


def test_sqrt_of_two_modulo_113():
    f = Field(113)
    root = f.sqrt(2)
    assert f.exp(root, 2) == 2
    assert f.square(root) == 2


@pytest.mark.parametrize("modulus", [5, 13, 17, 41, 97, 113, 257, 7, 11, 103])
def test_sqrt_small_primes_exhaustive(modulus):
    f = Field(modulus)
    squares = {(x * x) % modulus for x in range(modulus)}
    for a in range(modulus):
        if a in squares:
            assert f.square(f.sqrt(a)) == a
        elif modulus % 4 == 1:
            with pytest.raises(NoSquareRoot):
                f.sqrt(a)


def test_sqrt_of_zero():
    assert Field(113).sqrt(0) == 0
    assert Field(103).sqrt(0) == 0


def test_sqrt_modulo_two():
    f = Field(2)
    assert f.sqrt(0) == 0
    assert f.sqrt(1) == 1


@pytest.mark.parametrize("modulus", [SECP_P, BN254_R])
def test_sqrt_large_primes(modulus):
    f = Field(modulus)
    rng = random.Random(3)
    for _ in range(4):
        x = rng.randrange(1, modulus)
        a = f.square(x)
        root = f.sqrt(a)
        assert root in (x, modulus - x)


def test_sqrt_non_residue_large_prime():
    # BN254 scalar field: 5 generates the multiplicative group, so it is a non-residue
    with pytest.raises(NoSquareRoot):
        Field(BN254_R).sqrt(5)


def test_sqrt_composite_modulus_without_non_residue():
    with pytest.raises(NoSquareRoot):
        Field(21).sqrt(1)


def test_order_search_is_bounded():
    f = Field(17)
    # 3 has multiplicative order 16 modulo 17
    with pytest.raises(OrderSearchExhausted):
        f._power_of_two_order(U256(3), 2)  # noqa: SLF001
    assert f._power_of_two_order(U256(3), 5) == 4  # noqa: SLF001
    assert f._power_of_two_order(U256(1), 5) == 0  # noqa: SLF001


def test_order_search_exhausted_is_no_square_root():
    assert issubclass(OrderSearchExhausted, NoSquareRoot)


def test_field_equality_and_repr():
    assert Field(101) == Field("0x65")
    assert Field(101) != Field(103)
    assert len({Field(101), Field(101)}) == 1
    assert repr(Field(101)) == "Field(101)"
    assert Field(101).modulus == 101
