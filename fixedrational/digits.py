class FractionalDigits:
    """Digits of a fraction's magnitude after the radix point.

    Long division one digit per ``next()``. The iterator stops once the
    remainder reaches zero, so a repeating expansion never stops; bound it
    with ``itertools.islice``. Every call of ``Rational.fractional_digits``
    starts a new, independent expansion.
    """

    def __init__(self, remainder: int, denominator: int, radix: int = 10):
        self.remainder = abs(remainder) % denominator
        self.denominator = denominator
        self.radix = radix

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if self.remainder == 0:
            raise StopIteration
        digit, self.remainder = divmod(self.remainder * self.radix, self.denominator)
        return digit
