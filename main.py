# main.py
from __future__ import annotations

import argparse
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List, Sequence

from debug import COMPONENTS, Debug
from enigma import ROTOR_COUNT, Machine
from errors import ConfigurationError, EnigmaError
from plugboard import Plugboard
from utilities import build_reflector, build_rotor, group_blocks, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()

DEFAULT_CONFIG = Path("enigma_config.json")
REQUIRED_KEYS = {"rotors", "reflector"}


# both "I II III" and ["I", "II", "III"] are accepted, likewise for plugs
def _as_list(value: object) -> object:
    if isinstance(value, str):
        return value.split()
    if value is None:
        return []
    return list(value) if isinstance(value, (list, tuple)) else value


# ring and position letters may come as "ABC" or ["A", "B", "C"]
def _as_letters(value: object) -> object:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return "".join(value)
    return value


@dataclass(slots=True)
class MachineSettings:
    """Daily key. Every per-rotor field reads left to right, as on the lid."""

    rotors: List[str]
    reflector: str = "B"
    ring_settings: str = "AAA"
    positions: str = "AAA"
    plugs: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        for label, value in (
            ("rotors", self.rotors),
            ("plugs", self.plugs),
        ):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigurationError(f"{label} must be a list of strings, got {value!r}")
        for label, value in (
            ("reflector", self.reflector),
            ("ring_settings", self.ring_settings),
            ("positions", self.positions),
        ):
            if not isinstance(value, str):
                raise ConfigurationError(f"{label} must be a string, got {value!r}")

        self.rotors = [r.upper() for r in self.rotors]
        self.reflector = self.reflector.upper()
        self.ring_settings = self.ring_settings.upper()
        self.positions = self.positions.upper()
        self.plugs = [p.upper() for p in self.plugs]

        for label, value in (
            ("rotors", self.rotors),
            ("ring_settings", self.ring_settings),
            ("positions", self.positions),
        ):
            if len(value) != ROTOR_COUNT:
                raise ConfigurationError(
                    f"{label} needs exactly {ROTOR_COUNT} entries, got {value!r}"
                )
        if len(set(self.rotors)) != ROTOR_COUNT:
            raise ConfigurationError(f"rotors must be distinct, got {self.rotors}")

    @classmethod
    def from_dict(cls, data: dict) -> "MachineSettings":
        missing = REQUIRED_KEYS - data.keys()
        if missing:
            raise ConfigurationError(f"Missing keys in config: {', '.join(sorted(missing))}")
        return cls(
            rotors=_as_list(data["rotors"]),
            reflector=data["reflector"],
            ring_settings=_as_letters(data.get("ring_settings", "AAA")),
            positions=_as_letters(data.get("positions", "AAA")),
            plugs=_as_list(data.get("plugs", [])),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def build(self) -> Machine:
        """Return a machine calibrated to this key, never stepped by a keypress."""
        # operator order is left→right, the machine wants right→left
        rotors = [
            build_rotor(name).set_ring_offset(ring)
            for name, ring in zip(self.rotors, self.ring_settings)
        ][::-1]
        machine = Machine(Plugboard(self.plugs), rotors, build_reflector(self.reflector))
        for rotor, letter in zip(rotors, self.positions[::-1]):
            rotor.set_initial_position(letter)
        return machine


def load_config(path: str | Path) -> MachineSettings:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return MachineSettings.from_dict(data)


# ────────────────────────────────────────────────────────────────────────
#  1. MachineContext – settings plus a live machine
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """Keeps the key next to the machine so it can be wound back."""

    def __init__(self, settings: MachineSettings) -> None:
        self.settings = settings
        self.machine: Machine = settings.build()

    def rewind(self) -> None:
        """Reset the wheels to the daily key."""
        self.machine = self.settings.build()

    def encipher_block(self, text: str) -> str:
        """Encipher *text* from the start position; input must be clean."""
        self.rewind()
        return self.machine.encode_sequence(text)


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a three-rotor Enigma")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to encipher. If omitted, an interactive loop starts.")
    p.add_argument("--config", metavar="FILE", help=f"Load the daily key from JSON (default: {DEFAULT_CONFIG} when present).")
    p.add_argument("--rotors", nargs=ROTOR_COUNT, metavar="NAME", help="Rotor models left to right, e.g. I II III")
    p.add_argument("--reflector", metavar="NAME", help="Reflector model (A, B or C)")
    p.add_argument("--rings", metavar="LETTERS", help="Ring settings left to right, e.g. AAA")
    p.add_argument("--positions", metavar="LETTERS", help="Start positions left to right, e.g. AAA")
    p.add_argument("--plugs", nargs="*", metavar="PAIR", help="Plugboard pairs, e.g. AB CD")
    p.add_argument("--block", type=int, default=5, help="Display group size. Default: 5")
    p.add_argument("--debug", nargs="+", choices=COMPONENTS, metavar="COMPONENT", help=f"Trace components: {', '.join(COMPONENTS)}")
    return p.parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> MachineSettings:
    """Config file first, then command-line flags on top."""
    cfg_path = Path(args.config) if args.config else DEFAULT_CONFIG
    if args.config or cfg_path.exists():
        base = load_config(cfg_path).to_dict()
    else:
        base = {"rotors": ["I", "II", "III"], "reflector": "B"}

    overrides = {
        "rotors": args.rotors,
        "reflector": args.reflector,
        "ring_settings": args.rings,
        "positions": args.positions,
        "plugs": args.plugs,
    }
    base.update({k: v for k, v in overrides.items() if v is not None})
    return MachineSettings.from_dict(base)


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.debug:
        debug.enable(*args.debug)

    try:
        ctx = MachineContext(resolve_settings(args))
    except (EnigmaError, OSError) as exc:
        raise SystemExit(f"Failed to load configuration: {exc}") from exc

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        cipher = ctx.encipher_block(preprocess_message(args.message))
        print(" ".join(group_blocks(cipher, args.block)))
        return

    # interactive loop ---------------------------------------------------
    key = " ".join(ctx.settings.rotors)
    print(f"\nRotors {key}, reflector {ctx.settings.reflector}, start {ctx.settings.positions}.")
    print("Type blank line to quit.\n")
    while True:
        txt = input("Message > ")
        if not txt.strip():
            break
        cipher = ctx.encipher_block(preprocess_message(txt))
        print(" ".join(group_blocks(cipher, args.block)))


if __name__ == "__main__":
    main()
