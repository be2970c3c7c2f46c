# -*- test-case-name: vendomat._test.test_engine -*-
"""
Pure transition functions for the vending machine.

Each function takes a state value and returns its successor without touching
the original.  Which operations a state offers is declared once, in
C{automaton}; calling anything else raises
L{IllegalStateOperation <vendomat.IllegalStateOperation>}.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple, Union

from ._core import Automaton
from ._count import NonZeroCount
from ._states import (
    Empty,
    HasBoth,
    HasChocolates,
    HasCoins,
    VendingMachineState,
    VendOutcome,
)

_log = logging.getLogger(__name__)

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

Bars = Union[int, NonZeroCount]
TransitionImpl = Callable[..., Tuple[VendingMachineState, Any]]

automaton: Automaton[type, TransitionImpl] = Automaton(Empty)


def _declare(
    inState: type, operation: str, *outStates: type
) -> Callable[[TransitionImpl], TransitionImpl]:
    def register(impl: TransitionImpl) -> TransitionImpl:
        automaton.addTransition(inState, operation, frozenset(outStates), impl)
        return impl

    return register


def _one(width: Optional[int]) -> NonZeroCount:
    return NonZeroCount(1, width)


def _bars(bars: Bars) -> NonZeroCount:
    # Refills must be positive: refilling with 0 is a ZeroValue, not a no-op.
    if isinstance(bars, NonZeroCount):
        return bars
    return NonZeroCount.new(bars)


# insert_coin


@_declare(Empty, "insert_coin", HasCoins)
def _insertFirstCoin(state: Empty, width: Optional[int]) -> tuple[HasCoins, None]:
    return HasCoins(_one(width)), None


@_declare(HasCoins, "insert_coin", HasCoins)
def _insertAnotherCoin(
    state: HasCoins, width: Optional[int]
) -> tuple[HasCoins, None]:
    return HasCoins(state.coins.increment()), None


@_declare(HasChocolates, "insert_coin", HasBoth)
def _payForChocolate(
    state: HasChocolates, width: Optional[int]
) -> tuple[HasBoth, None]:
    return HasBoth(_one(width), state.chocolates), None


@_declare(HasBoth, "insert_coin", HasBoth)
def _prepayForChocolate(state: HasBoth, width: Optional[int]) -> tuple[HasBoth, None]:
    return HasBoth(state.coins.increment(), state.chocolates), None


# get_coins


@_declare(Empty, "get_coins", Empty)
def _collectFromEmpty(state: Empty, width: Optional[int]) -> tuple[Empty, int]:
    return state, 0


@_declare(HasCoins, "get_coins", Empty)
def _collectAll(state: HasCoins, width: Optional[int]) -> tuple[Empty, int]:
    return Empty(), state.coins.get()


@_declare(HasChocolates, "get_coins", HasChocolates)
def _collectNothing(
    state: HasChocolates, width: Optional[int]
) -> tuple[HasChocolates, int]:
    return state, 0


@_declare(HasBoth, "get_coins", HasChocolates)
def _collectLeavingStock(
    state: HasBoth, width: Optional[int]
) -> tuple[HasChocolates, int]:
    return HasChocolates(state.chocolates), state.coins.get()


# refill


@_declare(Empty, "refill", HasChocolates)
def _stock(
    state: Empty, width: Optional[int], bars: Bars
) -> tuple[HasChocolates, None]:
    return HasChocolates(NonZeroCount(_bars(bars).get(), width)), None


@_declare(HasChocolates, "refill", HasChocolates)
def _restock(
    state: HasChocolates, width: Optional[int], bars: Bars
) -> tuple[HasChocolates, None]:
    return HasChocolates(state.chocolates.add(_bars(bars))), None


# vend


@_declare(HasBoth, "vend", Empty, HasCoins, HasChocolates, HasBoth)
def _vend(state: HasBoth, width: Optional[int]) -> tuple[VendingMachineState, None]:
    coins = state.coins.decrement()
    chocolates = state.chocolates.decrement()
    successor: VendingMachineState
    if coins is None:
        if chocolates is None:
            _log.log(TRACE, "last coin and chocolate left!")
            successor = Empty()
        else:
            _log.log(TRACE, "last coin left!")
            successor = HasChocolates(chocolates)
    elif chocolates is None:
        _log.log(TRACE, "last chocolate left!")
        successor = HasCoins(coins)
    else:
        _log.log(TRACE, "not the last coin nor chocolate left!")
        successor = HasBoth(coins, chocolates)
    return successor, None


# finalize


@_declare(Empty, "finalize", Empty)
def _finalize(state: Empty, width: Optional[int]) -> tuple[Empty, None]:
    return state, None


def transition(
    state: VendingMachineState,
    operation: str,
    *args: object,
    width: Optional[int] = None,
) -> tuple[VendingMachineState, Any]:
    """
    Apply C{operation} to C{state}, returning a 2-tuple of the successor state
    and the operation's output (C{None} for operations that have none).

    @param width: the backing width of any counter the transition creates
        from nothing; counters that already exist keep their own width.

    @raise IllegalStateOperation: if C{state} does not offer C{operation}.
    """
    outStates, impl = automaton.outputForInput(type(state), operation)
    successor, output = impl(state, width, *args)
    assert type(successor) in outStates, (
        f"{operation} from {state!r} produced undeclared {successor!r}"
    )
    return successor, output


def insert_coin(
    state: VendingMachineState, width: Optional[int] = None
) -> VendingMachineState:
    return transition(state, "insert_coin", width=width)[0]


def get_coins(state: VendingMachineState) -> tuple[VendingMachineState, int]:
    """
    Empty the coin box.  Returns the successor state and how many coins were
    collected, which is 0 for states with no coins.
    """
    return transition(state, "get_coins")


def refill(
    state: VendingMachineState, bars: Bars, width: Optional[int] = None
) -> HasChocolates:
    """
    Add C{bars} chocolates.  C{bars} must be positive; a refill of 0 raises
    L{ZeroValue <vendomat.ZeroValue>}.
    """
    successor, _ = transition(state, "refill", bars, width=width)
    assert isinstance(successor, HasChocolates)
    return successor


def vend(state: VendingMachineState) -> tuple[VendOutcome, VendingMachineState]:
    """
    Sell one chocolate for one coin.

    Both counters are decremented independently and the successor is whatever
    shape the survivors allow; the outcome names that shape.
    """
    successor, _ = transition(state, "vend")
    return VendOutcome.of(successor), successor


def legal_operations(state: VendingMachineState) -> frozenset[str]:
    return automaton.inputsFor(type(state))
