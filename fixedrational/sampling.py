"""Bounded random fractions.

The denominator is drawn uniformly first and the numerator uniformly second,
so every denominator is equally likely no matter how many numerators it
admits. The resulting distribution over rational *values* is therefore not
uniform: values with small denominators come up far more often. With a
bound of 1000, 1/2 is thousands of times as likely as 1/999.
"""
import numpy as np

from .errors import PreconditionViolation


def random_fraction(max_denominator: int, including_zero: bool = True, including_one: bool = False,
                    rng: np.random.Generator = None) -> (int, int):
    if rng is None:
        rng = np.random.default_rng()

    min_denominator = 1 if including_zero or including_one else 2
    if max_denominator < min_denominator:
        raise PreconditionViolation(
            f"max_denominator must be at least {min_denominator}, got {max_denominator}")

    denominator = int(rng.integers(min_denominator, max_denominator, endpoint=True))
    min_numerator = 0 if including_zero else 1
    numerator = int(rng.integers(min_numerator, denominator, endpoint=including_one))
    return numerator, denominator
