# alphabet.py
from __future__ import annotations

import string
from types import MappingProxyType

from errors import DomainError

ALPHABET: str = string.ascii_uppercase
ALPHABET_SIZE: int = len(ALPHABET)

# letter → integer signal, read-only
_INDEX = MappingProxyType({ch: i for i, ch in enumerate(ALPHABET)})


def is_symbol(letter: object) -> bool:
    return isinstance(letter, str) and letter in _INDEX


def index_of(letter: str) -> int:
    """Return the 0-25 signal for *letter*."""
    try:
        return _INDEX[letter]
    except (KeyError, TypeError):
        raise DomainError(f"Invalid character {letter!r} for the alphabet.") from None


def letter_at(signal: int) -> str:
    return ALPHABET[signal % ALPHABET_SIZE]
