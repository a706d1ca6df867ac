# settings_generator.py
from __future__ import annotations

import argparse
import json
from pathlib import Path
from random import Random, SystemRandom
from typing import List, Sequence

from alphabet import ALPHABET
from enigma import ROTOR_COUNT
from main import DEFAULT_CONFIG, MachineSettings
from utilities import REFLECTOR_MODELS, ROTOR_MODELS

MAX_PAIRS = 10

# ── helpers ───────────────────────────────────────────────────────


def build_rng(seed: int | None) -> Random | SystemRandom:
    """Deterministic RNG when *seed* given; CSPRNG otherwise."""
    return Random(seed) if seed is not None else SystemRandom()


def choose_pairs(k: int, rng: Random | SystemRandom) -> List[str]:
    """Return *k* disjoint plug pairs."""
    k = min(k, len(ALPHABET) // 2)
    pool = list(ALPHABET)
    rng.shuffle(pool)
    return [a + b for a, b in zip(pool[::2], pool[1::2])][:k]


def generate_settings(rng: Random | SystemRandom, max_pairs: int = MAX_PAIRS) -> MachineSettings:
    return MachineSettings(
        rotors=rng.sample(sorted(ROTOR_MODELS), ROTOR_COUNT),
        reflector=rng.choice(sorted(REFLECTOR_MODELS)),
        ring_settings="".join(rng.choices(ALPHABET, k=ROTOR_COUNT)),
        positions="".join(rng.choices(ALPHABET, k=ROTOR_COUNT)),
        plugs=choose_pairs(max_pairs, rng),
    )


def parse_cli(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate an Enigma daily key")
    p.add_argument("--seed", type=int, help="Deterministic seed (omit for random)")
    p.add_argument("--pairs", type=int, default=MAX_PAIRS, help=f"Plugboard pairs (default: {MAX_PAIRS})")
    p.add_argument(
        "--outfile",
        type=Path,
        default=DEFAULT_CONFIG,
        help=f"Destination JSON file (default: {DEFAULT_CONFIG})",
    )
    return p.parse_args(argv)


# ── main ─────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_cli(argv)
    cfg = generate_settings(build_rng(args.seed), args.pairs)

    args.outfile.write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    print(f"Wrote {args.outfile}\n"
          f"   rotors      : {' '.join(cfg.rotors)}\n"
          f"   reflector   : {cfg.reflector}\n"
          f"   rings       : {cfg.ring_settings}\n"
          f"   start       : {cfg.positions}\n"
          f"   plug pairs  : {len(cfg.plugs)}")


if __name__ == "__main__":
    main()
