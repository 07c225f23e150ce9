from enum import Enum


class RoundingRule(Enum):
    TO_NEAREST_OR_AWAY_FROM_ZERO = 0
    TO_NEAREST_OR_EVEN = 1
    UP = 2
    DOWN = 3
    TOWARD_ZERO = 4
    AWAY_FROM_ZERO = 5


def truncated_division(numerator: int, denominator: int) -> (int, int):
    """Quotient rounded toward zero; the remainder takes the numerator's sign."""
    quotient, remainder = divmod(abs(numerator), denominator)
    if numerator < 0:
        return -quotient, -remainder
    return quotient, remainder


def rounded_quotient(numerator: int, denominator: int, rule: RoundingRule) -> int:
    quotient, remainder = truncated_division(numerator, denominator)
    if remainder == 0:
        return quotient

    step = -1 if numerator < 0 else 1
    r = abs(remainder)
    # r < denominator, so comparing r with denominator - r stays in range,
    # the same as comparing 2 * r with denominator.
    if rule is RoundingRule.TO_NEAREST_OR_AWAY_FROM_ZERO:
        return quotient + step if r >= denominator - r else quotient
    if rule is RoundingRule.TO_NEAREST_OR_EVEN:
        if r == denominator - r:
            return quotient + step if quotient % 2 else quotient
        return quotient + step if r > denominator - r else quotient
    if rule is RoundingRule.UP:
        return quotient + 1 if step > 0 else quotient
    if rule is RoundingRule.DOWN:
        return quotient - 1 if step < 0 else quotient
    if rule is RoundingRule.TOWARD_ZERO:
        return quotient
    if rule is RoundingRule.AWAY_FROM_ZERO:
        return quotient + step
    raise ValueError(f"unsupported rounding rule {rule!r}")
