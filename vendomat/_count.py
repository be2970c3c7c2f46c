# -*- test-case-name: vendomat._test.test_count -*-
"""
Counts that are never zero.

A machine that is out of coins does not store zero coins; it is in a
different state.  L{NonZeroCount} makes that representable: there is no way to
build one holding anything below 1, and every operation that could reach zero
says so instead of returning a count.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ._core import Overflow, ZeroValue

USIZE_WIDTH = 64
"""
The width, in bits, of the machine-word counters a fixed-width vending
machine uses.
"""


def maxFor(width: int) -> int:
    """
    The largest value an unsigned C{width}-bit backing can hold.
    """
    return (1 << width) - 1


def checkedAdd(a: int, b: int, width: Optional[int]) -> int:
    """
    Add C{a} and C{b}, raising L{Overflow} rather than wrapping if the sum does
    not fit in an unsigned C{width}-bit backing.  A C{width} of C{None} is
    unbounded.
    """
    result = a + b
    if width is not None and result > maxFor(width):
        raise Overflow(result, width)
    return result


def floorSub(a: int, b: int) -> int:
    """
    Subtract C{b} from C{a}, stopping at zero.
    """
    return max(a - b, 0)


def _checkInt(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            "{} must be an int, not {}".format(name, type(value).__name__)
        )
    return value


def checkWidth(width: Optional[int]) -> Optional[int]:
    """
    Validate a backing width: C{None} (unbounded) or a positive number of
    bits.
    """
    if width is not None and _checkInt("width", width) < 1:
        raise ValueError("width must be positive, not {}".format(width))
    return width


@dataclass(frozen=True, eq=False)
class NonZeroCount:
    """
    An immutable integer count that is always at least 1.

    @ivar value: the count itself.

    @ivar width: the width in bits of a fixed-width unsigned backing, or
        C{None} for an arbitrary-precision one.
    """

    value: int
    width: Optional[int] = None

    def __post_init__(self) -> None:
        _checkInt("value", self.value)
        width = checkWidth(self.width)
        if width is not None and self.value > maxFor(width):
            raise Overflow(self.value, width)
        if self.value < 1:
            raise ZeroValue("a count must be positive, not {}".format(self.value))

    @classmethod
    def new(cls, n: int, width: Optional[int] = None) -> NonZeroCount:
        """
        Construct a count of C{n}.

        @raise ZeroValue: if C{n} is 0 (or negative).
        @raise Overflow: if C{n} does not fit in C{width} bits.
        """
        return cls(n, width)

    def get(self) -> int:
        return self.value

    def increment(self) -> NonZeroCount:
        """
        A count one larger than this one.

        @raise Overflow: if this count is saturated at its width.
        """
        return NonZeroCount(checkedAdd(self.value, 1, self.width), self.width)

    def decrement(self) -> Optional[NonZeroCount]:
        """
        A count one smaller than this one, or C{None} if this is the last
        unit and whatever holds it has to change shape.
        """
        remaining = floorSub(self.value, 1)
        if remaining == 0:
            return None
        return NonZeroCount(remaining, self.width)

    def add(self, amount: Union[int, NonZeroCount]) -> NonZeroCount:
        """
        A count larger than this one by C{amount}, which may be 0.  The result
        keeps this count's width.

        @raise Overflow: if the sum does not fit in this count's width.
        """
        if isinstance(amount, NonZeroCount):
            amount = amount.value
        if _checkInt("amount", amount) < 0:
            raise ValueError("cannot add a negative amount ({})".format(amount))
        return NonZeroCount(checkedAdd(self.value, amount, self.width), self.width)

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NonZeroCount):
            return self.value == other.value
        if isinstance(other, int) and not isinstance(other, bool):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __repr__(self) -> str:
        if self.width is None:
            return "NonZeroCount({})".format(self.value)
        return "NonZeroCount({}, width={})".format(self.value, self.width)
