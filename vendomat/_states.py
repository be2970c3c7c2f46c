# -*- test-case-name: vendomat._test.test_engine -*-
"""
The shapes a vending machine can be in.

Which counters a state carries is the whole point: a state never holds a
zero-valued counter, it is a different state instead.
"""
from __future__ import annotations

import sys

from dataclasses import dataclass
from enum import Enum
from typing import Union

if sys.version_info >= (3, 10):
    from typing import TypeAlias
else:
    from typing_extensions import TypeAlias

from ._count import NonZeroCount


def _requireCount(owner: object, name: str, value: object) -> None:
    if not isinstance(value, NonZeroCount):
        raise TypeError(
            "{}.{} must be a NonZeroCount, not {!r}".format(
                type(owner).__name__, name, value
            )
        )


@dataclass(frozen=True)
class Empty:
    "No coins, no chocolate."


@dataclass(frozen=True)
class HasCoins:
    "Coins, but nothing to sell."

    coins: NonZeroCount

    def __post_init__(self) -> None:
        _requireCount(self, "coins", self.coins)


@dataclass(frozen=True)
class HasChocolates:
    "Chocolate, but nobody has paid."

    chocolates: NonZeroCount

    def __post_init__(self) -> None:
        _requireCount(self, "chocolates", self.chocolates)


@dataclass(frozen=True)
class HasBoth:
    "Coins and chocolate; the only state that can vend."

    coins: NonZeroCount
    chocolates: NonZeroCount

    def __post_init__(self) -> None:
        _requireCount(self, "coins", self.coins)
        _requireCount(self, "chocolates", self.chocolates)


VendingMachineState: TypeAlias = Union[Empty, HasCoins, HasChocolates, HasBoth]

ALL_STATES = (Empty, HasCoins, HasChocolates, HasBoth)


class VendOutcome(Enum):
    """
    Which stock ran out when a chocolate was vended; one case per state the
    machine can end up in.
    """

    EMPTY = "Empty"
    HAS_COINS = "HasCoins"
    HAS_CHOCOLATES = "HasChocolates"
    HAS_BOTH = "HasBoth"

    @classmethod
    def of(cls, state: VendingMachineState) -> VendOutcome:
        return cls(type(state).__name__)
