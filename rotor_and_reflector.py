# rotor_and_reflector.py
from __future__ import annotations

from typing import Dict, Optional

from alphabet import ALPHABET, ALPHABET_SIZE, index_of, is_symbol, letter_at
from debug import Debug
from errors import ConfigurationError

debug = Debug()


def _calibration_index(letter: str, what: str) -> int:
    if not is_symbol(letter):
        raise ConfigurationError(f"{what} {letter!r} is not in the alphabet")
    return index_of(letter)


class Rotor:
    """A wired wheel that steps, carries into its left neighbour and substitutes.

    The forward table is physically rotated on every step (``_fwd[i]`` becomes
    the old ``_fwd[i + 1]``) and ``_rev`` is rebuilt to stay its inverse. The
    accumulated rotation, ring offset included, is kept in ``_offset`` and is
    undone on the output side of :meth:`forward` / input side of
    :meth:`backward`.
    """

    def __init__(self, wiring: str, turnover: str | None = None) -> None:
        if len(wiring) != ALPHABET_SIZE or sorted(wiring) != sorted(ALPHABET):
            raise ConfigurationError("wiring must be a permutation of the alphabet")

        # integer lookup tables
        self._base = [index_of(c) for c in wiring]
        self._fwd = list(self._base)
        self._rev = [0] * ALPHABET_SIZE
        self._sync_inverse()

        self._offset = 0
        self._stepped = False
        self.position = 0
        self.ring_offset = 0
        self.turnover_countdown = ALPHABET_SIZE
        self.next_rotor: Optional[Rotor] = None

        if turnover is not None:
            self.set_turnover_notch(turnover)

    # ── calibration ──────────────────────────────────────────────
    def set_next_rotor(self, rotor: Optional["Rotor"]) -> None:
        self.next_rotor = rotor

    def set_turnover_notch(self, letter: str) -> "Rotor":
        distance = (_calibration_index(letter, "Turnover letter") - self.position) % ALPHABET_SIZE
        # 0 is not a countdown state: a notch at the current window is a full turn away
        self.turnover_countdown = distance or ALPHABET_SIZE
        return self

    def set_ring_offset(self, letter: str) -> "Rotor":
        """Shift the wiring against the ring; only legal before the first step."""
        ring = _calibration_index(letter, "Ring setting")
        if self._stepped:
            raise ConfigurationError("ring offset must be set before the rotor steps")

        shift = (ALPHABET_SIZE - ring) % ALPHABET_SIZE
        self._fwd = self._base[shift:] + self._base[:shift]
        self._sync_inverse()
        self._offset = shift
        self.ring_offset = ring
        return self

    def set_initial_position(self, letter: str) -> "Rotor":
        """Turn the wheel to *letter* without carrying into the neighbour."""
        steps = _calibration_index(letter, "Initial position")
        neighbour, self.next_rotor = self.next_rotor, None
        try:
            for _ in range(steps):
                self.step()
        finally:
            self.next_rotor = neighbour
        return self

    # ── stepping ─────────────────────────────────────────────────
    def _sync_inverse(self) -> None:
        for i, out in enumerate(self._fwd):
            self._rev[out] = i

    def step(self) -> None:
        self._fwd = self._fwd[1:] + self._fwd[:1]
        self._sync_inverse()
        self._offset = (self._offset + 1) % ALPHABET_SIZE
        self.position = (self.position + 1) % ALPHABET_SIZE
        self._stepped = True

        self.turnover_countdown -= 1
        debug.log(
            "stepping",
            f"Rotor window {self.window}, countdown={self.turnover_countdown}",
        )
        if self.turnover_countdown == 0:
            if self.next_rotor is not None:
                self.next_rotor.step()
            self.turnover_countdown = ALPHABET_SIZE

    # ── signal paths ─────────────────────────────────────────────
    def forward(self, sig: int) -> int:
        return (self._fwd[sig] - self._offset) % ALPHABET_SIZE

    def backward(self, sig: int) -> int:
        return self._rev[(sig + self._offset) % ALPHABET_SIZE]

    def substitute(self, letter: str, inverse: bool = False) -> str:
        sig = index_of(letter)
        out = self.backward(sig) if inverse else self.forward(sig)
        debug.log("rotor", f"{letter}->{letter_at(out)} inverse={inverse}")
        return letter_at(out)

    # ── views ────────────────────────────────────────────────────
    @property
    def window(self) -> str:
        return letter_at(self.position)

    @property
    def wires(self) -> Dict[str, str]:
        """Current forward table, letter → letter."""
        return {letter_at(i): letter_at(o) for i, o in enumerate(self._fwd)}

    @property
    def inverse_wires(self) -> Dict[str, str]:
        return {letter_at(i): letter_at(o) for i, o in enumerate(self._rev)}

    def __repr__(self) -> str:
        return (
            f"<Rotor window={self.window} ring={letter_at(self.ring_offset)} "
            f"countdown={self.turnover_countdown}>"
        )


class Reflector:
    def __init__(self, wiring: str) -> None:
        if len(wiring) != ALPHABET_SIZE:
            raise ConfigurationError("Reflector wiring length must match alphabet length")
        if not all(is_symbol(c) for c in wiring):
            raise ConfigurationError("Reflector wiring may only use alphabet letters")

        # ensure involution property (w[i] = j ⇒ w[j] = i) and no self-maps
        table = [index_of(c) for c in wiring]
        for i, j in enumerate(table):
            if table[j] != i or i == j:
                raise ConfigurationError(
                    "Reflector wiring must be an involution with no fixed points"
                )

        self._map = table

    def reflect(self, sig: int) -> int:
        mapped = self._map[sig]
        debug.log("reflector", f"{letter_at(sig)}->{letter_at(mapped)}")
        return mapped

    def substitute(self, letter: str) -> str:
        return letter_at(self.reflect(index_of(letter)))

    @property
    def wiring(self) -> str:
        return "".join(letter_at(o) for o in self._map)

    def __repr__(self) -> str:
        return f"<Reflector {self.wiring}>"
