# plugboard.py
from __future__ import annotations

from collections.abc import Iterable

from alphabet import ALPHABET, index_of, is_symbol, letter_at
from debug import Debug
from errors import ConfigurationError

debug = Debug()


class Plugboard:
    """Involutive letter swaps applied on the way in and on the way out."""

    def __init__(self, pairs: Iterable[str | tuple[str, str]] = ()) -> None:
        # integer table, identity until a pair is plugged
        self._map: list[int] = list(range(len(ALPHABET)))
        self.configure(pairs)

    def configure(self, pairs: Iterable[str | tuple[str, str]]) -> "Plugboard":
        """Plug each pair; re-plugging a letter releases its old partner.

        Every pair is checked before any cable moves, so a rejected list
        leaves the board as it was.
        """
        checked = [self._normalise(raw) for raw in pairs]
        for a, b in checked:
            ia, ib = index_of(a), index_of(b)

            # last write wins: unplug both letters before the new cable goes in
            for i in (ia, ib):
                partner = self._map[i]
                self._map[partner] = partner
                self._map[i] = i

            self._map[ia], self._map[ib] = ib, ia
        return self

    @staticmethod
    def _normalise(raw: str | tuple[str, str]) -> tuple[str, str]:
        try:
            sized = len(raw) == 2
        except TypeError:
            sized = False
        if not sized:
            raise ConfigurationError(f"Pair {raw!r} must be exactly 2 symbols")
        a, b = raw
        if not (is_symbol(a) and is_symbol(b)):
            bad = b if is_symbol(a) else a
            raise ConfigurationError(f"Symbol {bad!r} not in alphabet")
        if a == b:
            raise ConfigurationError(f"Plugboard cannot map a symbol to itself: {a}")
        return a, b

    # one private helper does the job for both directions
    def _swap(self, signal: int) -> int:
        mapped = self._map[signal]
        debug.log("plugboard", f"{letter_at(signal)}->{letter_at(mapped)}")
        return mapped

    forward = _swap        # alias: signal in
    backward = _swap       # alias: signal out

    def substitute(self, letter: str) -> str:
        return letter_at(self._map[index_of(letter)])

    @property
    def pairs(self) -> list[str]:
        return [
            letter_at(i) + letter_at(j)
            for i, j in enumerate(self._map)
            if i < j
        ]

    def __repr__(self) -> str:
        return f"<Plugboard {' '.join(self.pairs)}>"
