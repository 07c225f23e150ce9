import logging
import re
from typing import Optional

import numpy as np

from .errors import PreconditionViolation
from .width import IntegerWidth

logger = logging.getLogger(__name__)

MIN_RADIX = 2
MAX_RADIX = 36

# Whole-string match: optional sign, digits, optional "/" and digits.
_RATIONAL_FORMAT = re.compile(r"""
    (?P<sign>[-+]?)
    (?P<num>[0-9a-z]+)
    (?:/(?P<denom>[0-9a-z]+))?
""", re.VERBOSE | re.IGNORECASE | re.ASCII)


def check_radix(radix: int):
    if not MIN_RADIX <= radix <= MAX_RADIX:
        raise PreconditionViolation(f"radix must be in {MIN_RADIX}...{MAX_RADIX}, got {radix}")


def format_rational(numerator: int, denominator: int, radix: int = 10, uppercase: bool = False) -> str:
    check_radix(radix)
    text = np.base_repr(numerator, radix)
    if denominator != 1:
        text += "/" + np.base_repr(denominator, radix)
    return text if uppercase else text.lower()


def _parse_digits(digits: str, radix: int, width: IntegerWidth) -> Optional[int]:
    # int() alone would also accept prefixes such as "0x" for radix 16
    if any(int(digit, MAX_RADIX) >= radix for digit in digits):
        return None
    digits = digits.lstrip("0")
    if not digits:
        return 0
    # longer than any magnitude of the width, and possibly past int()'s digit limit
    if len(digits) > len(np.base_repr(width.unsigned.max, radix)):
        return None
    return int(digits, radix)


def parse_rational(text: str, width: IntegerWidth, radix: int = 10) -> Optional[tuple]:
    """Splits ``text`` into an unreduced (numerator, denominator) pair.

    Returns None when the text does not match the grammar, holds a digit
    outside the radix, describes a numerator or denominator that does not fit
    ``width``, or has a zero denominator.
    """
    check_radix(radix)
    m = _RATIONAL_FORMAT.fullmatch(text)
    if m is None:
        logger.debug("rejected %r: malformed", text)
        return None

    numerator = _parse_digits(m.group('num'), radix, width)
    if numerator is None:
        logger.debug("rejected %r: digits out of range for radix %d or %s", text, radix, width)
        return None
    if m.group('sign') == '-':
        numerator = -numerator
    if not width.contains(numerator):
        logger.debug("rejected %r: numerator out of range for %s", text, width)
        return None

    if m.group('denom') is None:
        return numerator, 1

    denominator = _parse_digits(m.group('denom'), radix, width)
    if denominator is None:
        logger.debug("rejected %r: digits out of range for radix %d or %s", text, radix, width)
        return None
    if not width.contains(denominator):
        logger.debug("rejected %r: denominator out of range for %s", text, width)
        return None
    if denominator == 0:
        logger.debug("rejected %r: zero denominator", text)
        return None
    return numerator, denominator
