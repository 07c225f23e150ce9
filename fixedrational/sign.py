from enum import Enum


class Sign(Enum):
    PLUS = 1
    MINUS = -1

    @property
    def opposite(self) -> 'Sign':
        return Sign.MINUS if self is Sign.PLUS else Sign.PLUS

    @staticmethod
    def of(value: int) -> 'Sign':
        return Sign.MINUS if value < 0 else Sign.PLUS
