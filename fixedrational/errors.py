"""Errors raised by rational arithmetic.

Two families share one checked core. ``RationalError`` and its subclasses are
recoverable and come from the ``checked_*`` operations; ``RationalFault`` and
its subclasses are raised by the trapping operators and the validating
constructor and signal a programming error at the call site.
"""
from enum import IntEnum


class Flag(IntEnum):
    INVALID = 1 << 0
    DIV_BY_ZERO = 1 << 1
    INEXACT = 1 << 2
    OVERFLOW = 1 << 3


class RationalError(ArithmeticError):
    flag = Flag.INVALID

    def __init__(self, operation: str, *operands):
        self.operation = operation
        self.operands = operands
        super().__init__(self._message())

    def _message(self) -> str:
        args = ", ".join(str(operand) for operand in self.operands)
        return f"{self.flag.name.lower()} in {self.operation}({args})"


class RationalOverflowError(RationalError, OverflowError):
    flag = Flag.OVERFLOW


class RationalZeroDivisionError(RationalError, ZeroDivisionError):
    flag = Flag.DIV_BY_ZERO


class RationalFault(Exception):
    pass


class ArithmeticTrap(RationalFault):
    def __init__(self, error: RationalError):
        self.error = error
        self.flag = error.flag
        super().__init__(f"arithmetic trap: {error}")


class PreconditionViolation(RationalFault):
    pass
