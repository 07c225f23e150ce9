import copy
import math
import pickle
from fractions import Fraction

import numpy as np
import pytest

from fixedrational import (ArithmeticTrap, PreconditionViolation, Rational, Rational8, Rational16, Rational32,
                           Rational64, RationalOverflowError, RationalZeroDivisionError, Sign, rational_type)
from samples import RATIONAL_TYPES


def test_fraction_initializer():
    x = Rational64(1, 3)
    assert (x.numerator, x.denominator) == (1, 3)

    y = Rational64(1, -2)
    assert (y.numerator, y.denominator) == (-1, 2)

    z = Rational64(4, 6)
    assert (z.numerator, z.denominator) == (2, 3)

    assert Rational64(-4, -6) == Rational64(2, 3)
    assert Rational64(7) == Rational64(7, 1)
    assert Rational64() == Rational64.zero


@pytest.mark.parametrize('cls', RATIONAL_TYPES)
def test_min_edge_cases(cls):
    low = cls.width.min
    assert cls(low, low) == cls.one
    assert cls(0, low) == cls.zero
    assert cls(low, 2) == cls(low // 2)
    assert cls(low, -2) == cls(-(low // 2))
    assert cls(low, 3).numerator == low
    with pytest.raises(ArithmeticTrap):
        cls(low, -1)
    with pytest.raises(RationalOverflowError):
        cls.checked(low, -1)


@pytest.mark.parametrize('cls', RATIONAL_TYPES)
def test_reduction_invariant(cls, rng):
    for _ in range(1 << 10):
        n = int(rng.integers(cls.width.min, cls.width.max, endpoint=True))
        d = int(rng.integers(cls.width.min, cls.width.max, endpoint=True))
        if d == 0:
            continue
        expected = Fraction(n, d)
        try:
            x = cls.checked(n, d)
        except RationalOverflowError:
            assert not (cls.width.contains(expected.numerator) and expected.denominator <= cls.width.max)
            continue
        assert x.denominator > 0
        assert math.gcd(abs(x.numerator), x.denominator) == 1
        assert (x.numerator, x.denominator) == (expected.numerator, expected.denominator)


@pytest.mark.parametrize('cls', RATIONAL_TYPES)
def test_zero_is_canonical(cls):
    for d in (1, -1, 5, -5, cls.width.max, cls.width.min):
        x = cls(0, d)
        assert (x.numerator, x.denominator) == (0, 1)
        assert x == cls.zero
        assert hash(x) == hash(cls.zero) == hash(0)
        assert str(x) == '0'
        assert x.sign is None
        assert not x.is_negative
        assert x.is_zero


def test_zero_denominator():
    with pytest.raises(PreconditionViolation):
        Rational32(1, 0)
    with pytest.raises(RationalZeroDivisionError):
        Rational32.checked(1, 0)


def test_out_of_range_integers():
    with pytest.raises(ArithmeticTrap):
        Rational8(128)
    with pytest.raises(RationalOverflowError):
        Rational8.checked(1, 200)
    with pytest.raises(TypeError):
        Rational8(1.5)


def test_constants():
    assert Rational8.min == Rational8(-128)
    assert Rational8.max == Rational8(127)
    assert Rational8.zero.is_zero
    assert Rational8.one == 1
    assert Rational64.max.numerator == (1 << 63) - 1


def test_generic_base():
    with pytest.raises(TypeError):
        Rational(1, 2)
    assert Rational[np.int16] is Rational16
    assert rational_type(np.int8) is Rational8
    assert rational_type('int32') is Rational32
    with pytest.raises(TypeError):
        rational_type(np.uint8)


def test_numpy_integers():
    x = Rational16(np.int8(3), np.int64(-6))
    assert x == Rational16(-1, 2)
    assert Rational16(np.int16(5)) + np.int32(1) == 6


def test_mixed_initializer():
    four_thirds = Rational64(4, 3)
    assert Rational64.from_mixed(1, Rational64(1, 3)) == four_thirds
    assert Rational64.from_mixed(2, Rational64(-2, 3)) == four_thirds
    assert Rational64.from_mixed(-1, Rational64.max) == Rational64(Rational64.width.max - 1)
    assert Rational64.from_mixed(3, 0) == 3

    with pytest.raises(ArithmeticTrap):
        Rational8.from_mixed(127, Rational8(1, 2))
    with pytest.raises(TypeError):
        Rational8.from_mixed(1, Rational16(1, 2))


def test_mixed_parts():
    integral, fractional = Rational64(7, 3).mixed_parts
    assert (integral, fractional) == (2, Rational64(1, 3))

    integral, fractional = Rational64(-7, 3).mixed_parts
    assert (integral, fractional) == (-2, Rational64(-1, 3))
    assert Rational64.from_mixed(integral, fractional) == Rational64(-7, 3)

    assert Rational64(-7, 3).quotient_and_remainder == (-2, -1)
    assert Rational64(6).quotient_and_remainder == (6, 0)


def test_introspection():
    x = Rational32(-3, 4)
    assert x.sign is Sign.MINUS
    assert x.sign.opposite is Sign.PLUS
    assert x.is_negative
    assert x.is_proper
    assert not x.is_integer()
    assert not Rational32(5, 4).is_proper
    assert Rational32(8, 4).is_integer()
    assert bool(x)
    assert not Rational32.zero


def test_exact_conversion():
    assert Rational8.exactly(100) == Rational8(100)
    assert Rational8.exactly(200) is None
    assert Rational8.exactly(Rational16(3, 4)) == Rational8(3, 4)
    assert Rational8.exactly(Rational16(1, 300)) is None
    assert Rational64.exactly(Rational8.min) == -128
    with pytest.raises(TypeError):
        Rational8.exactly(0.5)


def test_integer_conversion():
    x = Rational64(2, 3)
    assert int(x) == 0
    assert x.to_integer() == 0
    assert x.to_integer_exactly() is None

    y = Rational64(-5, 2)
    assert int(y) == -2
    assert y.to_integer(np.int8) == np.int8(-2)
    assert y.to_integer(np.int8).dtype == np.int8
    assert y.to_integer_exactly() is None

    z = Rational64(1)
    assert z.to_integer_exactly() == 1

    assert Rational64.max.to_integer_exactly(np.int16) is None
    with pytest.raises(ArithmeticTrap):
        Rational64.max.to_integer(np.int16)


def test_immutable_and_copyable():
    x = Rational16(3, 8)
    with pytest.raises(AttributeError):
        x.numerator = 5
    with pytest.raises(AttributeError):
        x.extra = 1
    assert copy.copy(x) is x
    assert copy.deepcopy(x) is x
    restored = pickle.loads(pickle.dumps(x))
    assert restored == x
    assert type(restored) is Rational16
