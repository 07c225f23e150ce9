"""Exact rationals over fixed-width integers.

A value is always stored reduced: the numerator carries the sign, the
denominator is positive and coprime with the numerator, and zero is 0/1.

Rational arithmetic algorithms: Knuth, TAOCP, Volume 2, 4.5.1, arranged so
that no intermediate product is wider than it has to be.

Every operation exists twice. ``checked_add`` and friends raise a recoverable
``RationalOverflowError`` (or ``RationalZeroDivisionError``); the operators
call the checked form and turn an overflow into an ``ArithmeticTrap``.
"""
import functools
import logging
import numbers
import operator
import sys
from typing import Optional

import numpy as np

from .codec import check_radix, format_rational, parse_rational
from .digits import FractionalDigits
from .errors import ArithmeticTrap, PreconditionViolation, RationalOverflowError, RationalZeroDivisionError
from .gcd import gcd, reduced
from .rounding import RoundingRule, rounded_quotient, truncated_division
from .sampling import random_fraction
from .sign import Sign
from .width import IntegerWidth

logger = logging.getLogger(__name__)

_PyHASH_MODULUS = sys.hash_info.modulus
_PyHASH_INF = sys.hash_info.inf


def _trap(error: RationalOverflowError) -> ArithmeticTrap:
    logger.error("trapping %s", error)
    return ArithmeticTrap(error)


def _operator_fallbacks(checked, name: str):
    """Builds the trapping forward and reverse operators for ``checked``."""
    operation = checked.__name__[len('checked_'):]

    def forward(a, b):
        if not a._accepts(b):
            return NotImplemented
        try:
            return checked(a, b)
        except RationalOverflowError as error:
            raise _trap(error) from error

    def reverse(b, a):
        if not b._accepts(a):
            return NotImplemented
        try:
            return checked(b._operand(a, operation), b)
        except RationalOverflowError as error:
            raise _trap(error) from error

    forward.__name__ = f'__{name}__'
    reverse.__name__ = f'__r{name}__'
    return forward, reverse


def _trapping(checked):
    def unary(a):
        try:
            return checked(a)
        except RationalOverflowError as error:
            raise _trap(error) from error
    unary.__doc__ = checked.__doc__
    return unary


class Rational:
    """A reduced fraction of two integers of a fixed width.

    ``Rational`` is generic; values are built through a concrete width such
    as ``Rational32`` or ``Rational[np.int16]``:

    >>> Rational16(10, -8)
    Rational16(-5, 4)
    >>> Rational8(1, 3) + Rational8(1, 6)
    Rational8(1, 2)
    """

    __slots__ = ('_numerator', '_denominator')

    width: IntegerWidth = None
    default_max_denominator = 1000
    default_radix = 10

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.width is None:
            return
        if not cls.width.signed:
            raise TypeError(f"{cls.__name__} needs a signed integer width, got {cls.width}")
        cls.zero = cls._from_reduced(0, 1)
        cls.one = cls._from_reduced(1, 1)
        cls.min = cls._from_reduced(cls.width.min, 1)
        cls.max = cls._from_reduced(cls.width.max, 1)

    def __class_getitem__(cls, dtype):
        return rational_type(dtype)

    def __new__(cls, numerator=0, denominator=1):
        """Reduces numerator / denominator.

        A zero denominator violates the precondition; a value that does not
        fit the width (such as ``min / -1``) traps.
        """
        try:
            return cls.checked(numerator, denominator)
        except RationalZeroDivisionError as error:
            raise PreconditionViolation(f"{cls.__name__} with zero denominator") from error
        except RationalOverflowError as error:
            raise _trap(error) from error

    @classmethod
    def checked(cls, numerator, denominator=1) -> 'Rational':
        if cls.width is None:
            raise TypeError("Rational is generic, use a concrete width such as Rational64 or Rational[np.int32]")
        numerator = cls._integer(numerator, 'make')
        denominator = cls._integer(denominator, 'make')
        if denominator == 0:
            raise RationalZeroDivisionError('make', numerator, denominator)
        negative = (numerator < 0) != (denominator < 0)
        # Magnitudes live in the unsigned counterpart, where |min| fits, so
        # (min, min) and (0, min) need no special handling.
        n, d = reduced(cls.width.magnitude(numerator), cls.width.magnitude(denominator))
        return cls._from_sign_magnitude(negative, n, d, 'make', numerator, denominator)

    @classmethod
    def from_mixed(cls, integral, fractional) -> 'Rational':
        """integral + fractional, reusing the fractional part's denominator."""
        integral = cls._integer(integral, 'mixed')
        if isinstance(fractional, numbers.Integral):
            fractional = cls._from_integer(fractional, 'mixed')
        if not isinstance(fractional, cls):
            raise TypeError(f"expected {cls.__name__} fractional part, got {type(fractional).__name__}")

        width = cls.width
        n, d = fractional._numerator, fractional._denominator
        # gcd(integral * d + n, d) == gcd(n, d) == 1
        scaled, overflow1 = width.multiplied_reporting_overflow(integral, d)
        numerator, overflow2 = width.adding_reporting_overflow(scaled, n)
        if overflow1 or overflow2:
            raise _trap(RationalOverflowError('mixed', integral, fractional))
        return cls._from_reduced(numerator, d)

    @classmethod
    def exactly(cls, source) -> Optional['Rational']:
        """``source`` in this width, or None if it cannot be represented."""
        if isinstance(source, Rational):
            n, d = source.numerator, source.denominator
        elif isinstance(source, numbers.Integral):
            n, d = operator.index(source), 1
        else:
            raise TypeError(f"cannot convert {type(source).__name__} to {cls.__name__}")
        if not cls.width.contains(n) or d > cls.width.max:
            return None
        return cls._from_reduced(n, d)

    @classmethod
    def from_string(cls, text: str, radix: int = None) -> Optional['Rational']:
        """Parses ``[+-]digits[/digits]``, returning None for anything else.

        No whitespace is allowed anywhere; letters are digits for radix
        above 10 in either case.

        >>> Rational64.from_string('-5/2')
        Rational64(-5, 2)
        >>> Rational64.from_string('5/-2') is None
        True
        >>> Rational8.from_string('128/2') is None
        True
        """
        if radix is None:
            radix = cls.default_radix
        parts = parse_rational(text, cls.width, radix)
        if parts is None:
            return None
        return cls(*parts)

    @classmethod
    def random(cls, max_denominator: int = None, including_zero: bool = True, including_one: bool = False,
               rng: np.random.Generator = None) -> 'Rational':
        """A random value in [0, 1), or [0, 1] / (0, 1) / (0, 1] per the flags.

        Not uniform over values, see ``fixedrational.sampling``.
        """
        if max_denominator is None:
            max_denominator = min(cls.default_max_denominator, cls.width.max)
        if max_denominator > cls.width.max:
            raise PreconditionViolation(f"max_denominator {max_denominator} does not fit {cls.width}")
        return cls(*random_fraction(max_denominator, including_zero, including_one, rng))

    @classmethod
    def _integer(cls, value, operation: str) -> int:
        value = operator.index(value)
        if not cls.width.contains(value):
            raise RationalOverflowError(operation, value)
        return value

    @classmethod
    def _from_integer(cls, value, operation: str) -> 'Rational':
        return cls._from_reduced(cls._integer(value, operation), 1)

    @classmethod
    def _from_sign_magnitude(cls, negative: bool, numerator: int, denominator: int, operation: str,
                             *operands) -> 'Rational':
        if negative:
            numerator = -numerator
        if denominator > cls.width.max or not cls.width.contains(numerator):
            raise RationalOverflowError(operation, *operands)
        return cls._from_reduced(numerator, denominator)

    @classmethod
    def _from_reduced(cls, numerator: int, denominator: int) -> 'Rational':
        assert denominator > 0 and gcd(abs(numerator), denominator) == 1, (numerator, denominator)
        self = object.__new__(cls)
        self._numerator = numerator
        self._denominator = denominator
        return self

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def sign(self) -> Optional[Sign]:
        """The sign, or None for zero."""
        if self._numerator == 0:
            return None
        return Sign.of(self._numerator)

    @property
    def is_zero(self) -> bool:
        return self._numerator == 0

    @property
    def is_negative(self) -> bool:
        return self._numerator < 0

    @property
    def is_proper(self) -> bool:
        return abs(self._numerator) < self._denominator

    def is_integer(self) -> bool:
        return self._denominator == 1

    @property
    def quotient_and_remainder(self) -> (int, int):
        """Truncating division: n == q * d + r, |r| < d, r has n's sign."""
        return truncated_division(self._numerator, self._denominator)

    @property
    def mixed_parts(self) -> (int, 'Rational'):
        quotient, remainder = self.quotient_and_remainder
        return quotient, self._from_reduced(remainder, self._denominator)

    def _accepts(self, other) -> bool:
        return isinstance(other, type(self)) or isinstance(other, numbers.Integral)

    def _operand(self, other, operation: str) -> 'Rational':
        if isinstance(other, type(self)):
            return other
        if isinstance(other, numbers.Integral):
            return self._from_integer(other, operation)
        raise TypeError(f"unsupported operand for {operation}: {type(self).__name__} and {type(other).__name__}")

    # Addition and subtraction
    #
    # Let g = gcd(d1, d2). Then
    #
    #     n1   n2   n1*(d2//g) ± n2*(d1//g)   t
    #     -- ± -- = ----------------------- = -
    #     d1   d2         d1*(d2//g)          d
    #
    # t is coprime with both d1//g and d2//g, so gcd(t, d) == gcd(t, g)
    # and the result needs at most one more reduction, skipped when g == 1.

    def _forming_common_denominator(self, other: 'Rational', combine, operation: str) -> 'Rational':
        width = self.width
        n1, d1 = self._numerator, self._denominator
        n2, d2 = other._numerator, other._denominator

        g = gcd(d1, d2)
        lhs_multiplier = d2 // g
        rhs_multiplier = d1 // g
        lhs, overflow1 = width.multiplied_reporting_overflow(n1, lhs_multiplier)
        rhs, overflow2 = width.multiplied_reporting_overflow(n2, rhs_multiplier)
        numerator, overflow3 = combine(lhs, rhs)
        denominator, overflow4 = width.multiplied_reporting_overflow(d1, lhs_multiplier)
        if overflow1 or overflow2 or overflow3 or overflow4:
            raise RationalOverflowError(operation, self, other)

        if g != 1:
            g2 = gcd(abs(numerator), g)
            numerator //= g2
            denominator //= g2
        return self._from_reduced(numerator, denominator)

    def checked_add(self, other) -> 'Rational':
        other = self._operand(other, 'add')
        return self._forming_common_denominator(other, self.width.adding_reporting_overflow, 'add')

    def checked_subtract(self, other) -> 'Rational':
        # not self + -other, since -other can overflow
        other = self._operand(other, 'subtract')
        return self._forming_common_denominator(other, self.width.subtracting_reporting_overflow, 'subtract')

    # Multiplication and division
    #
    # Let g1 = gcd(n1, d2) and g2 = gcd(n2, d1), then
    #
    #     n1*n2   (n1//g1)*(n2//g2)
    #     ----- = -----------------
    #     d1*d2   (d2//g1)*(d1//g2)
    #
    # which is already reduced. Both sides work on magnitudes in the unsigned
    # counterpart with the sign applied last, so the reciprocal of min never
    # has to be formed in the signed width.

    def _multiplying(self, negative: bool, n1: int, d1: int, n2: int, d2: int, operation: str,
                     *operands) -> 'Rational':
        unsigned = self.width.unsigned
        n1, d2 = reduced(n1, d2)
        n2, d1 = reduced(n2, d1)
        numerator, overflow1 = unsigned.multiplied_reporting_overflow(n1, n2)
        denominator, overflow2 = unsigned.multiplied_reporting_overflow(d1, d2)
        if overflow1 or overflow2:
            raise RationalOverflowError(operation, *operands)
        return self._from_sign_magnitude(negative, numerator, denominator, operation, *operands)

    def checked_multiply(self, other) -> 'Rational':
        other = self._operand(other, 'multiply')
        return self._multiplying(self.is_negative != other.is_negative,
                                 abs(self._numerator), self._denominator,
                                 abs(other._numerator), other._denominator,
                                 'multiply', self, other)

    def checked_divide(self, other) -> 'Rational':
        other = self._operand(other, 'divide')
        if other.is_zero:
            raise RationalZeroDivisionError('divide', self, other)
        # multiply by the reciprocal of other
        return self._multiplying(self.is_negative != other.is_negative,
                                 abs(self._numerator), self._denominator,
                                 other._denominator, abs(other._numerator),
                                 'divide', self, other)

    def checked_reciprocal(self) -> 'Rational':
        if self.is_zero:
            raise RationalZeroDivisionError('reciprocal', self)
        return self._from_sign_magnitude(self.is_negative, self._denominator, abs(self._numerator),
                                         'reciprocal', self)

    def checked_negate(self) -> 'Rational':
        if not self.width.contains(-self._numerator):
            raise RationalOverflowError('negate', self)
        return self._from_reduced(-self._numerator, self._denominator)

    def checked_abs(self) -> 'Rational':
        return self.checked_negate() if self.is_negative else self

    __add__, __radd__ = _operator_fallbacks(checked_add, 'add')
    __sub__, __rsub__ = _operator_fallbacks(checked_subtract, 'sub')
    __mul__, __rmul__ = _operator_fallbacks(checked_multiply, 'mul')
    __truediv__, __rtruediv__ = _operator_fallbacks(checked_divide, 'truediv')

    __neg__ = _trapping(checked_negate)
    __abs__ = _trapping(checked_abs)
    reciprocal = _trapping(checked_reciprocal)

    def __pos__(self):
        return self

    def advanced_by(self, step) -> 'Rational':
        """self + step, so values can be stepped through like a range."""
        return self + step

    def distance_to(self, other) -> 'Rational':
        """other - self; ``x.advanced_by(x.distance_to(y)) == y``."""
        return other - self

    # Comparison

    def _is_equal(self, other: 'Rational') -> bool:
        if self.is_zero:
            return other.is_zero
        return (self.sign is other.sign and
                self._numerator == other._numerator and
                self._denominator == other._denominator)

    def _is_less(self, other: 'Rational') -> bool:
        if other.is_zero:
            return self.is_negative
        if self.is_zero:
            return not other.is_negative
        if self.sign is not other.sign:
            return self.is_negative
        # (-, -): |other| < |self|
        # (+, +): |self| < |other|
        if self.is_negative:
            return other._is_less_in_magnitude(self)
        return self._is_less_in_magnitude(other)

    def _is_less_in_magnitude(self, other: 'Rational') -> bool:
        # n1/d1 < n2/d2  <=>  n1*d2 < n2*d1
        unsigned = self.width.unsigned
        n1, d1 = abs(self._numerator), self._denominator
        n2, d2 = abs(other._numerator), other._denominator
        lhs, overflow1 = unsigned.multiplied_reporting_overflow(n1, d2)
        rhs, overflow2 = unsigned.multiplied_reporting_overflow(n2, d1)
        if overflow1 or overflow2:
            logger.debug("comparing %r and %r at full width", self, other)
            return unsigned.multiplied_full_width(n1, d2) < unsigned.multiplied_full_width(n2, d1)
        return lhs < rhs

    def _compare(self, other):
        if isinstance(other, numbers.Integral) and not isinstance(other, Rational):
            value = operator.index(other)
            # beyond every representable value
            if value > self.width.max:
                return -1
            if value < self.width.min:
                return 1
            other = self._from_reduced(value, 1)
        elif not isinstance(other, type(self)):
            return NotImplemented

        if self._is_equal(other):
            return 0
        return -1 if self._is_less(other) else 1

    def compare(self, other) -> int:
        """-1, 0 or 1 as self is less than, equal to or greater than other."""
        result = self._compare(other)
        if result is NotImplemented:
            raise TypeError(f"cannot compare {type(self).__name__} and {type(other).__name__}")
        return result

    def __eq__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result == 0

    def __lt__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other):
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0

    def __bool__(self):
        return self._numerator != 0

    def __hash__(self):
        # Same as hash(Fraction(n, d)), so a value hashes like an equal int.
        # The sign is applied to the magnitude's hash and zero has none.
        try:
            dinv = pow(self._denominator, -1, _PyHASH_MODULUS)
        except ValueError:
            # no modular inverse
            hash_ = _PyHASH_INF
        else:
            hash_ = hash(hash(abs(self._numerator)) * dinv)
        result = -hash_ if self.sign is Sign.MINUS else hash_
        return -2 if result == -1 else result

    # Conversion

    def to_string(self, radix: int = None, uppercase: bool = False) -> str:
        if radix is None:
            radix = self.default_radix
        return format_rational(self._numerator, self._denominator, radix, uppercase)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{type(self).__name__}({self._numerator}, {self._denominator})"

    def rounded(self, rule: RoundingRule = RoundingRule.TO_NEAREST_OR_AWAY_FROM_ZERO) -> int:
        return rounded_quotient(self._numerator, self._denominator, rule)

    def __round__(self):
        return self.rounded(RoundingRule.TO_NEAREST_OR_EVEN)

    def __floor__(self):
        return self.rounded(RoundingRule.DOWN)

    def __ceil__(self):
        return self.rounded(RoundingRule.UP)

    def __trunc__(self):
        return self.rounded(RoundingRule.TOWARD_ZERO)

    __int__ = __trunc__

    def to_integer(self, dtype=None):
        """The truncated value as a numpy scalar of ``dtype`` (this width by default)."""
        target = self.width if dtype is None else IntegerWidth(dtype)
        quotient = self.rounded(RoundingRule.TOWARD_ZERO)
        if not target.contains(quotient):
            raise _trap(RationalOverflowError('to_integer', self, target.dtype.name))
        return target.scalar(quotient)

    def to_integer_exactly(self, dtype=None):
        target = self.width if dtype is None else IntegerWidth(dtype)
        if self._denominator != 1 or not target.contains(self._numerator):
            return None
        return target.scalar(self._numerator)

    def fractional_digits(self, radix: int = None) -> FractionalDigits:
        """Digits of |self| after the radix point; endless for repeating fractions.

        >>> list(Rational32(3, 4).fractional_digits())
        [7, 5]
        >>> list(Rational32(3, 4).fractional_digits(2))
        [1, 1]
        """
        if radix is None:
            radix = self.default_radix
        check_radix(radix)
        return FractionalDigits(self._numerator, self._denominator, radix)

    # support for pickling, copy, and deepcopy

    def __reduce__(self):
        return (type(self), (self._numerator, self._denominator))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


@functools.lru_cache(maxsize=None)
def _rational_type(itemsize: int) -> type:
    width = IntegerWidth(np.dtype(f'i{itemsize}'))
    name = f'Rational{width.bits}'
    return type(name, (Rational,), {'__slots__': (), '__module__': __name__, 'width': width})


def rational_type(dtype) -> type:
    """The rational class backed by the signed integer ``dtype``."""
    dtype = np.dtype(dtype)
    if dtype.kind != 'i':
        raise TypeError(f"rationals need a signed integer dtype, got {dtype}")
    return _rational_type(dtype.itemsize)


Rational8 = rational_type(np.int8)
Rational16 = rational_type(np.int16)
Rational32 = rational_type(np.int32)
Rational64 = rational_type(np.int64)
