# -*- test-case-name: vendomat -*-
"""
A vending machine whose coin and chocolate counters can never be zero.
"""
from ._core import (
    AlreadyConsumedError,
    ErrorKind,
    IllegalStateOperation,
    Overflow,
    VendingError,
    ZeroValue,
)
from ._count import USIZE_WIDTH, NonZeroCount
from ._engine import TRACE, automaton
from ._machine import Tracer, VendingMachine, VendResult
from ._states import (
    Empty,
    HasBoth,
    HasChocolates,
    HasCoins,
    VendingMachineState,
    VendOutcome,
)

__all__ = [
    "VendingMachine",
    "VendResult",
    "VendOutcome",
    "VendingMachineState",
    "Empty",
    "HasCoins",
    "HasChocolates",
    "HasBoth",
    "NonZeroCount",
    "USIZE_WIDTH",
    "ErrorKind",
    "VendingError",
    "ZeroValue",
    "Overflow",
    "IllegalStateOperation",
    "AlreadyConsumedError",
    "Tracer",
    "automaton",
    "TRACE",
]
