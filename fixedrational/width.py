import functools
from typing import NewType

import numpy as np


class IntegerWidth:
    magnitude_t = NewType('magnitude_t', int)

    def __init__(self, dtype):
        self.dtype = np.dtype(dtype)
        if self.dtype.kind not in 'iu':
            raise TypeError(f"expected an integer dtype, got {self.dtype}")

        info = np.iinfo(self.dtype)
        self.bits = info.bits
        self.min = int(info.min)
        self.max = int(info.max)
        self.signed = self.dtype.kind == 'i'

        self.mask = ~(~0 << self.bits)

    def __repr__(self) -> str:
        return f"IntegerWidth({self.dtype.name})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntegerWidth):
            return NotImplemented
        return self.dtype == other.dtype

    def __hash__(self) -> int:
        return hash(self.dtype)

    @functools.cached_property
    def unsigned(self) -> 'IntegerWidth':
        if not self.signed:
            return self
        return IntegerWidth(np.dtype(f'u{self.dtype.itemsize}'))

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def wrap(self, value: int) -> int:
        return ((value - self.min) & self.mask) + self.min

    def scalar(self, value: int):
        return self.dtype.type(value)

    # Each returns the wrapped partial value and whether the true result overflowed.
    def adding_reporting_overflow(self, lhs: int, rhs: int) -> (int, bool):
        result = lhs + rhs
        return self.wrap(result), not self.contains(result)

    def subtracting_reporting_overflow(self, lhs: int, rhs: int) -> (int, bool):
        result = lhs - rhs
        return self.wrap(result), not self.contains(result)

    def multiplied_reporting_overflow(self, lhs: int, rhs: int) -> (int, bool):
        result = lhs * rhs
        return self.wrap(result), not self.contains(result)

    def multiplied_full_width(self, lhs: int, rhs: int) -> (int, int):
        """Returns the double-width product as (high, low) words.

        The high word carries the sign for signed widths, the low word is
        always unsigned, so tuples compare in the same order as the products.
        """
        product = lhs * rhs
        return product >> self.bits, product & self.mask

    def magnitude(self, value: int) -> magnitude_t:
        return IntegerWidth.magnitude_t(abs(value))
