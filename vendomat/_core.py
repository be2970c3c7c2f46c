# -*- test-case-name: vendomat._test.test_core -*-

"""
The declared transition graph of the vending machine, and the errors raised
when something tries to leave it.
"""
from __future__ import annotations

from enum import Enum
from itertools import chain
from typing import Callable, Generic, TypeVar


class ErrorKind(Enum):
    """
    The kinds of recoverable failure a vending machine operation can report.
    """

    ZERO_VALUE = "zero value"
    OVERFLOW = "overflow"
    ILLEGAL_STATE_OPERATION = "illegal state operation"


class VendingError(Exception):
    """
    Base class of every error reported by a count or a machine.
    """

    kind: ErrorKind


class ZeroValue(VendingError, ValueError):
    """
    A L{NonZeroCount <vendomat.NonZeroCount>} was requested for a value that
    is not positive.
    """

    kind = ErrorKind.ZERO_VALUE


class Overflow(VendingError, OverflowError):
    """
    Fixed-width arithmetic on a count would have wrapped around.

    @param value: the value that did not fit.

    @param width: the width, in bits, of the backing that rejected it.
    """

    kind = ErrorKind.OVERFLOW

    def __init__(self, value: int, width: int) -> None:
        self.value = value
        self.width = width
        super().__init__(
            "{} does not fit in an unsigned {}-bit count".format(value, width)
        )


class IllegalStateOperation(VendingError):
    """
    A vending machine in C{state} does not offer C{operation}.

    @param state: the machine's state (or state type) at the time of the
        illegal call.

    @param operation: the name of the operation for which no transition
        exists.
    """

    kind = ErrorKind.ILLEGAL_STATE_OPERATION

    def __init__(self, state: object, operation: str) -> None:
        self.state = state
        self.operation = operation
        where = state.__name__ if isinstance(state, type) else repr(state)
        super().__init__("no transition for {} in {}".format(operation, where))


class AlreadyConsumedError(Exception):
    """
    The vending machine handle has already been transitioned or finalized, and
    thus can no longer be used.
    """


State = TypeVar("State")
Impl = TypeVar("Impl", bound=Callable[..., object])


class Automaton(Generic[State, Impl]):
    """
    A declaration of a finite state machine whose successor state may depend
    on the data carried by the current one.

    Each transition maps an input state and an operation name to the set of
    states it may produce and the implementation that computes which one.
    Note that this is not the machine itself; it is immutable once declared.
    """

    def __init__(self, initial: State) -> None:
        self._initialState: State = initial
        self._transitions: dict[tuple[State, str], tuple[frozenset[State], Impl]] = {}

    @property
    def initialState(self) -> State:
        """
        Return this automaton's initial state.
        """
        return self._initialState

    def addTransition(
        self,
        inState: State,
        inputSymbol: str,
        outStates: frozenset[State],
        impl: Impl,
    ) -> None:
        """
        Declare that C{inputSymbol} is legal in C{inState}, may lead to any of
        C{outStates}, and is computed by C{impl}.  Raise ValueError if there is
        already a transition with the same inState and inputSymbol.
        """
        key = (inState, inputSymbol)
        if key in self._transitions:
            raise ValueError(
                "already have transition from {} via {}".format(inState, inputSymbol)
            )
        if not outStates:
            raise ValueError(
                "transition from {} via {} leads nowhere".format(inState, inputSymbol)
            )
        self._transitions[key] = (frozenset(outStates), impl)

    def allTransitions(self) -> frozenset[tuple[State, str, State]]:
        """
        All transitions, one triple per possible successor.
        """
        return frozenset(
            (inState, inputSymbol, outState)
            for (inState, inputSymbol), (outStates, _) in self._transitions.items()
            for outState in outStates
        )

    def inputAlphabet(self) -> set[str]:
        """
        The full set of operations acceptable to this automaton.
        """
        return {inputSymbol for (inState, inputSymbol) in self._transitions}

    def inputsFor(self, inState: State) -> frozenset[str]:
        """
        The operations legal in C{inState}.
        """
        return frozenset(
            inputSymbol
            for (anInState, inputSymbol) in self._transitions
            if anInState == inState
        )

    def states(self) -> frozenset[State]:
        """
        All valid states; "Q" in the mathematical description of a state
        machine.
        """
        return frozenset(
            chain.from_iterable(
                (inState, outState)
                for (inState, inputSymbol, outState) in self.allTransitions()
            )
        )

    def outputForInput(
        self, inState: State, inputSymbol: str
    ) -> tuple[frozenset[State], Impl]:
        """
        A 2-tuple of (possible outStates, implementation) for inputSymbol.
        """
        try:
            return self._transitions[(inState, inputSymbol)]
        except KeyError:
            raise IllegalStateOperation(state=inState, operation=inputSymbol) from None
