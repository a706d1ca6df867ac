# enigma.py  ───────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import index_of, letter_at
from debug import Debug
from errors import ConfigurationError
from plugboard import Plugboard
from rotor_and_reflector import Reflector, Rotor

debug = Debug()

ROTOR_COUNT = 3


class Machine:
    """Three-rotor machine: plugboard, rotor cascade and reflector.

    *rotors* is given right to left (the fast wheel first). Each rotor is
    linked to the next one in the list so turnovers carry leftwards; the
    leftmost wheel carries into nothing. Components validate themselves when
    they are built, so the machine does not re-check their wiring.

    A machine is not safe to share between threads: every keypress mutates
    the rotors. Use one machine per message stream.
    """

    def __init__(
        self,
        plugboard: Plugboard,
        rotors: Sequence[Rotor],
        reflector: Reflector,
    ) -> None:
        if len(rotors) != ROTOR_COUNT:
            raise ConfigurationError(
                f"Machine needs exactly {ROTOR_COUNT} rotors, got {len(rotors)}"
            )
        if len({id(r) for r in rotors}) != ROTOR_COUNT:
            raise ConfigurationError("The same rotor cannot sit in two slots")

        self.plugboard = plugboard
        self.rotors: tuple[Rotor, ...] = tuple(rotors)
        self.reflector = reflector

        for rotor, neighbour in zip(self.rotors, self.rotors[1:]):
            rotor.set_next_rotor(neighbour)
        self.rotors[-1].set_next_rotor(None)

    # ── wheel accessors ─────────────────────────────────────────
    @property
    def right(self) -> Rotor:
        return self.rotors[0]

    @property
    def middle(self) -> Rotor:
        return self.rotors[1]

    @property
    def left(self) -> Rotor:
        return self.rotors[2]

    def windows(self) -> str:
        """Visible rotor letters, left to right as the operator reads them."""
        return "".join(r.window for r in reversed(self.rotors))

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self) -> None:
        # double-step: the middle wheel moves on its own when both it and the
        # wheel to its left are one step from turnover
        if self.middle.turnover_countdown == 1 and self.left.turnover_countdown == 1:
            self.middle.step()

        # the fast wheel moves on every keypress; carries cascade from here
        self.right.step()
        debug.log("stepping", f"windows {self.windows()}")

    # ── encipher one symbol  ────────────────────────────────────

    def encode_symbol(self, letter: str) -> str:
        signal = index_of(letter)
        self._step_rotors()

        signal = self.plugboard.forward(signal)
        trace = [letter_at(signal)]

        for rotor in self.rotors:
            signal = rotor.forward(signal)
            trace.append(letter_at(signal))

        signal = self.reflector.reflect(signal)
        trace.append(letter_at(signal))

        for rotor in reversed(self.rotors):
            signal = rotor.backward(signal)
            trace.append(letter_at(signal))

        signal = self.plugboard.backward(signal)
        out_ch = letter_at(signal)
        debug.log("encipher", f"{letter} -> {' -> '.join(trace)} -> {out_ch}")
        return out_ch

    def encode_sequence(self, symbols: Iterable[str]) -> str:
        return "".join(self.encode_symbol(ch) for ch in symbols)

    def __repr__(self) -> str:
        return f"<Machine windows={self.windows()} {self.plugboard!r}>"
