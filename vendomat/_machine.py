# -*- test-case-name: vendomat._test.test_machine -*-
"""
The vending machine handle: one live owner per state, handed on at every
transition.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, overload

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

from . import _engine
from ._core import AlreadyConsumedError, IllegalStateOperation
from ._count import NonZeroCount, checkWidth
from ._states import (
    ALL_STATES,
    Empty,
    HasBoth,
    HasChocolates,
    HasCoins,
    VendingMachineState,
    VendOutcome,
)

_log = logging.getLogger(__name__)

S = TypeVar("S", Empty, HasCoins, HasChocolates, HasBoth)

Tracer: TypeAlias = Callable[[VendingMachineState, str, VendingMachineState], None]


class VendingMachine(Generic[S]):
    """
    A single-owner handle on one vending machine state.

    Every operation consumes the handle it is called on and returns a new one
    for the successor state; the old handle raises L{AlreadyConsumedError}
    from then on.  An operation that fails (an L{Overflow
    <vendomat.Overflow>}, a refill of 0, an operation the current state does
    not offer, or a tracer that raises) consumes nothing, so the handle can
    still be used.

    The type parameter names the current state, so a type checker only
    accepts the operations that state offers; at runtime the same
    restriction is enforced with L{IllegalStateOperation}.
    """

    def __init__(
        self,
        state: S,
        width: Optional[int] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        if not isinstance(state, ALL_STATES):
            raise TypeError("not a vending machine state: {!r}".format(state))
        self._state: S = state
        self._width = checkWidth(width)
        self._tracer = tracer
        self._consumed = False

    @classmethod
    def initial(
        cls, width: Optional[int] = None, tracer: Optional[Tracer] = None
    ) -> VendingMachine[Empty]:
        """
        Create an empty vending machine.

        @param width: the width in bits of the machine's counters, at least 1,
            or C{None} (the default) for counters that never overflow.

        @param tracer: called with C{(old_state, operation, new_state)} for
            every transition of this machine and its successors, before the
            old handle is consumed; if it raises, the transition is abandoned.

        @raise ValueError: if C{width} is not positive.
        """
        result = VendingMachine(Empty(), width, tracer)
        _log.debug("created a vending machine: %r", result._state)
        return result

    @property
    def state(self) -> S:
        self._checkLive("state")
        return self._state

    @property
    def consumed(self) -> bool:
        return self._consumed

    def legal_operations(self) -> frozenset[str]:
        """
        The operations the current state offers.
        """
        return _engine.legal_operations(self.state)

    def _checkLive(self, operation: str) -> None:
        if self._consumed:
            raise AlreadyConsumedError(
                "cannot {} a vending machine that was already transitioned "
                "or finalized".format(operation)
            )

    def _advance(
        self, operation: str, *args: object
    ) -> tuple[VendingMachine[Any], Any]:
        self._checkLive(operation)
        old = self._state
        new, output = _engine.transition(old, operation, *args, width=self._width)
        if self._tracer is not None:
            self._tracer(old, operation, new)
        self._consumed = True
        return VendingMachine(new, self._width, self._tracer), output

    @overload
    def insert_coin(self: VendingMachine[Empty]) -> VendingMachine[HasCoins]: ...
    @overload
    def insert_coin(self: VendingMachine[HasCoins]) -> VendingMachine[HasCoins]: ...
    @overload
    def insert_coin(
        self: VendingMachine[HasChocolates],
    ) -> VendingMachine[HasBoth]: ...
    @overload
    def insert_coin(self: VendingMachine[HasBoth]) -> VendingMachine[HasBoth]: ...
    def insert_coin(self) -> VendingMachine[Any]:
        result, _ = self._advance("insert_coin")
        _log.debug("inserted coin: %r", result._state)
        return result

    @overload
    def get_coins(
        self: VendingMachine[Empty],
    ) -> tuple[VendingMachine[Empty], int]: ...
    @overload
    def get_coins(
        self: VendingMachine[HasCoins],
    ) -> tuple[VendingMachine[Empty], int]: ...
    @overload
    def get_coins(
        self: VendingMachine[HasChocolates],
    ) -> tuple[VendingMachine[HasChocolates], int]: ...
    @overload
    def get_coins(
        self: VendingMachine[HasBoth],
    ) -> tuple[VendingMachine[HasChocolates], int]: ...
    def get_coins(self) -> tuple[VendingMachine[Any], int]:
        """
        Collect every coin in the machine.

        @return: the successor machine and the number of coins collected.
        """
        result, coins = self._advance("get_coins")
        _log.debug("collected %d coins: %r", coins, result._state)
        return result, coins

    @overload
    def refill(
        self: VendingMachine[Empty], bars: int | NonZeroCount
    ) -> VendingMachine[HasChocolates]: ...
    @overload
    def refill(
        self: VendingMachine[HasChocolates], bars: int | NonZeroCount
    ) -> VendingMachine[HasChocolates]: ...
    def refill(self, bars: int | NonZeroCount) -> VendingMachine[Any]:
        """
        Restock with C{bars} chocolates.  Only machines without coins can be
        refilled, and C{bars} must be positive.

        @raise ZeroValue: if C{bars} is 0.
        @raise Overflow: if the stock would no longer fit in the machine's
            counter width.
        """
        result, _ = self._advance("refill", bars)
        _log.debug("restocked with %d chocolates: %r", int(bars), result._state)
        return result

    def vend(self: VendingMachine[HasBoth]) -> VendResult:
        """
        Exchange one coin for one chocolate.
        """
        machine, _ = self._advance("vend")
        result = VendResult(VendOutcome.of(machine._state), machine)
        _log.debug("vended a chocolate: %r", machine._state)
        return result

    def finalize(self: VendingMachine[Empty]) -> None:
        """
        Retire an empty machine.  Nothing can be done with it afterwards.
        """
        self._advance("finalize")
        _log.debug("reached final state")

    def __repr__(self) -> str:
        if self._consumed:
            return "<VendingMachine (consumed)>"
        return "VendingMachine({!r})".format(self._state)


@dataclass(frozen=True)
class VendResult:
    """
    What a vend left behind: which stock ran out, and the machine in its new
    state.
    """

    outcome: VendOutcome
    machine: VendingMachine[Any]

    def expect(self, outcome: VendOutcome) -> VendingMachine[Any]:
        """
        The successor machine, if the vend ended in C{outcome}.

        @raise IllegalStateOperation: if it ended in any other state.
        """
        if self.outcome is not outcome:
            raise IllegalStateOperation(
                self.machine.state, "expect({})".format(outcome.name)
            )
        return self.machine
