from .errors import (ArithmeticTrap, Flag, PreconditionViolation, RationalError, RationalFault,
                     RationalOverflowError, RationalZeroDivisionError)
from .rational import Rational, Rational8, Rational16, Rational32, Rational64, rational_type
from .rounding import RoundingRule
from .sign import Sign
from .width import IntegerWidth

__version__ = '0.1.0'

__all__ = [
    'ArithmeticTrap', 'Flag', 'IntegerWidth', 'PreconditionViolation', 'Rational', 'Rational8',
    'Rational16', 'Rational32', 'Rational64', 'RationalError', 'RationalFault', 'RationalOverflowError',
    'RationalZeroDivisionError', 'RoundingRule', 'Sign', 'rational_type',
]
