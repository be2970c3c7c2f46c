from unittest import TestCase

from .._core import IllegalStateOperation, Overflow, ZeroValue
from .._count import NonZeroCount
from .._engine import get_coins, insert_coin, legal_operations, refill, transition, vend
from .._states import (
    Empty,
    HasBoth,
    HasChocolates,
    HasCoins,
    VendOutcome,
)


def both(coins: int, chocolates: int) -> HasBoth:
    return HasBoth(NonZeroCount(coins), NonZeroCount(chocolates))


class StateTests(TestCase):
    def test_noZeroCounters(self) -> None:
        with self.assertRaises(ZeroValue):
            HasCoins(NonZeroCount(0))

    def test_countersMustBeCounts(self) -> None:
        with self.assertRaises(TypeError):
            HasCoins(0)  # type:ignore[arg-type]
        with self.assertRaises(TypeError):
            HasBoth(NonZeroCount(1), 3)  # type:ignore[arg-type]

    def test_equality(self) -> None:
        self.assertEqual(both(1, 2), HasBoth(NonZeroCount(1), NonZeroCount(2)))
        self.assertEqual(Empty(), Empty())
        self.assertNotEqual(HasCoins(NonZeroCount(1)), HasChocolates(NonZeroCount(1)))

    def test_repr(self) -> None:
        self.assertEqual(
            repr(both(1, 2)),
            "HasBoth(coins=NonZeroCount(1), chocolates=NonZeroCount(2))",
        )

    def test_outcomeOf(self) -> None:
        self.assertIs(VendOutcome.of(Empty()), VendOutcome.EMPTY)
        self.assertIs(VendOutcome.of(both(1, 1)), VendOutcome.HAS_BOTH)


class InsertCoinTests(TestCase):
    def test_empty(self) -> None:
        self.assertEqual(insert_coin(Empty()), HasCoins(NonZeroCount(1)))

    def test_hasCoins(self) -> None:
        self.assertEqual(
            insert_coin(HasCoins(NonZeroCount(2))), HasCoins(NonZeroCount(3))
        )

    def test_hasChocolates(self) -> None:
        self.assertEqual(insert_coin(HasChocolates(NonZeroCount(4))), both(1, 4))

    def test_hasBoth(self) -> None:
        self.assertEqual(insert_coin(both(2, 4)), both(3, 4))

    def test_newCounterWidth(self) -> None:
        state = insert_coin(Empty(), width=8)
        assert isinstance(state, HasCoins)
        self.assertEqual(state.coins.width, 8)

    def test_overflowLeavesStateAlone(self) -> None:
        full = HasBoth(NonZeroCount(255, 8), NonZeroCount(1))
        with self.assertRaises(Overflow):
            insert_coin(full)
        self.assertEqual(full, HasBoth(NonZeroCount(255, 8), NonZeroCount(1)))


class GetCoinsTests(TestCase):
    def test_empty(self) -> None:
        self.assertEqual(get_coins(Empty()), (Empty(), 0))

    def test_hasCoins(self) -> None:
        self.assertEqual(get_coins(HasCoins(NonZeroCount(5))), (Empty(), 5))

    def test_hasChocolates(self) -> None:
        state = HasChocolates(NonZeroCount(2))
        self.assertEqual(get_coins(state), (state, 0))

    def test_hasBoth(self) -> None:
        self.assertEqual(
            get_coins(both(3, 2)), (HasChocolates(NonZeroCount(2)), 3)
        )


class RefillTests(TestCase):
    def test_empty(self) -> None:
        self.assertEqual(refill(Empty(), 3), HasChocolates(NonZeroCount(3)))

    def test_hasChocolates(self) -> None:
        self.assertEqual(
            refill(HasChocolates(NonZeroCount(3)), NonZeroCount(2)),
            HasChocolates(NonZeroCount(5)),
        )

    def test_zeroRefill(self) -> None:
        with self.assertRaises(ZeroValue):
            refill(Empty(), 0)
        with self.assertRaises(ZeroValue):
            refill(HasChocolates(NonZeroCount(3)), 0)

    def test_refillWidth(self) -> None:
        with self.assertRaises(Overflow):
            refill(Empty(), 256, width=8)
        with self.assertRaises(Overflow):
            refill(HasChocolates(NonZeroCount(255, 8)), 1)

    def test_notWithCoins(self) -> None:
        for state in (HasCoins(NonZeroCount(1)), both(1, 1)):
            with self.assertRaises(IllegalStateOperation):
                refill(state, 3)


class VendTests(TestCase):
    def test_lastOfBoth(self) -> None:
        self.assertEqual(vend(both(1, 1)), (VendOutcome.EMPTY, Empty()))

    def test_lastCoin(self) -> None:
        self.assertEqual(
            vend(both(1, 5)),
            (VendOutcome.HAS_CHOCOLATES, HasChocolates(NonZeroCount(4))),
        )

    def test_lastChocolate(self) -> None:
        self.assertEqual(
            vend(both(5, 1)), (VendOutcome.HAS_COINS, HasCoins(NonZeroCount(4)))
        )

    def test_plenty(self) -> None:
        self.assertEqual(vend(both(5, 5)), (VendOutcome.HAS_BOTH, both(4, 4)))

    def test_keepsWidths(self) -> None:
        outcome, state = vend(HasBoth(NonZeroCount(2, 8), NonZeroCount(3, 16)))
        assert isinstance(state, HasBoth)
        self.assertEqual(state.coins.width, 8)
        self.assertEqual(state.chocolates.width, 16)

    def test_onlyWithBoth(self) -> None:
        for state in (
            Empty(),
            HasCoins(NonZeroCount(1)),
            HasChocolates(NonZeroCount(1)),
        ):
            with self.assertRaises(IllegalStateOperation) as raised:
                vend(state)
            self.assertEqual(raised.exception.operation, "vend")
            self.assertIs(raised.exception.state, type(state))


class TransitionTests(TestCase):
    def test_finalizeOnlyFromEmpty(self) -> None:
        self.assertEqual(transition(Empty(), "finalize"), (Empty(), None))
        for state in (
            HasCoins(NonZeroCount(1)),
            HasChocolates(NonZeroCount(1)),
            both(1, 1),
        ):
            with self.assertRaises(IllegalStateOperation):
                transition(state, "finalize")

    def test_unknownOperation(self) -> None:
        with self.assertRaises(IllegalStateOperation):
            transition(Empty(), "dispense")

    def test_notAState(self) -> None:
        with self.assertRaises(IllegalStateOperation):
            transition(3, "insert_coin")  # type:ignore[arg-type]

    def test_legalOperations(self) -> None:
        self.assertEqual(
            legal_operations(HasCoins(NonZeroCount(1))), {"insert_coin", "get_coins"}
        )
