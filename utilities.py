# utilities.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping

from alphabet import ALPHABET
from errors import ConfigurationError
from rotor_and_reflector import Reflector, Rotor

# ────────────────────────────────────────────────────────────────────────
#  0. Wheel database
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RotorModel:
    """Wiring of a catalogue rotor plus the window letter its carry lands on."""

    name: str
    wiring: str
    turnover: str


@dataclass(frozen=True, slots=True)
class ReflectorModel:
    name: str
    wiring: str


ROTOR_MODELS: Mapping[str, RotorModel] = MappingProxyType({
    m.name: m for m in (
        RotorModel("I",   "EKMFLGDQVZNTOWYHXUSPAIBRCJ", turnover="R"),
        RotorModel("II",  "AJDKSIRUXBLHWTMCQGZNPYFVOE", turnover="F"),
        RotorModel("III", "BDFHJLCPRTXVZNYEIWGAKMUSQO", turnover="W"),
        RotorModel("IV",  "ESOVPZJAYQUIRHXLNFTGKDCMWB", turnover="K"),
        RotorModel("V",   "VZBRGITYUPSDNHLXAWMJQOFECK", turnover="A"),
    )
})

REFLECTOR_MODELS: Mapping[str, ReflectorModel] = MappingProxyType({
    m.name: m for m in (
        ReflectorModel("A", "EJMZALYXVBWFCRQUONTSPIKHGD"),
        ReflectorModel("B", "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
        ReflectorModel("C", "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    )
})


def _lookup(table: Mapping, name: str, kind: str):
    try:
        return table[name.strip().upper()]
    except (KeyError, AttributeError):
        raise ConfigurationError(
            f"Unknown {kind} {name!r}. Expected one of {list(table)}"
        ) from None


def build_rotor(name: str) -> Rotor:
    """Return a fresh, uncalibrated rotor of catalogue model *name*."""
    model: RotorModel = _lookup(ROTOR_MODELS, name, "rotor")
    return Rotor(model.wiring, turnover=model.turnover)


def build_reflector(name: str) -> Reflector:
    model: ReflectorModel = _lookup(REFLECTOR_MODELS, name, "reflector")
    return Reflector(model.wiring)


# ────────────────────────────────────────────────────────────────────────
#  1. Text helpers
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Upper‑case and drop everything the machine has no key for."""
    return "".join(ch for ch in msg.upper() if ch in ALPHABET)


def group_blocks(text: str, block: int = 5) -> List[str]:
    if block <= 0:
        return [text] if text else []
    return [text[i : i + block] for i in range(0, len(text), block)]


__all__ = [
    "ROTOR_MODELS",
    "REFLECTOR_MODELS",
    "RotorModel",
    "ReflectorModel",
    "build_rotor",
    "build_reflector",
    "preprocess_message",
    "group_blocks",
]
