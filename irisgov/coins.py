"""Multi-denomination coin amounts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import InvalidAmount

_COIN_PATTERN = re.compile(r"^([0-9]+)\s*([a-z][a-z0-9-]{2,15})$")


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_dict(self) -> dict[str, str]:
        # Amounts travel as decimal strings so large values survive JSON.
        return {"denom": self.denom, "amount": str(self.amount)}


class Coins:
    """Immutable set of coins sorted by denomination."""

    def __init__(self, coins: Iterable[Coin] = ()) -> None:
        ordered = sorted(coins, key=lambda coin: coin.denom)
        seen: set[str] = set()
        for coin in ordered:
            if coin.denom in seen:
                raise InvalidAmount(f"duplicate denomination {coin.denom}")
            seen.add(coin.denom)
        self._coins: tuple[Coin, ...] = tuple(ordered)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __len__(self) -> int:
        return len(self._coins)

    def __bool__(self) -> bool:
        return bool(self._coins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coins):
            return NotImplemented
        return self._coins == other._coins

    def __hash__(self) -> int:
        return hash(self._coins)

    def __repr__(self) -> str:
        return f"Coins({list(self._coins)!r})"

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._coins)

    def to_list(self) -> list[dict[str, str]]:
        return [coin.to_dict() for coin in self._coins]


def parse_coin(text: str) -> Coin:
    match = _COIN_PATTERN.match(text.strip())
    if match is None:
        raise InvalidAmount(f"invalid coin expression: {text!r}")
    return Coin(denom=match.group(2), amount=int(match.group(1)))


def parse_coins(text: str) -> Coins:
    """Parse ``"100uiris"`` or ``"10iris,100uiris"`` into :class:`Coins`.

    An empty string yields an empty set; callers that need a non-empty amount
    check for it themselves.
    """

    text = (text or "").strip()
    if not text:
        return Coins()
    return Coins(parse_coin(piece) for piece in text.split(","))
