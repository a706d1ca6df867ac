# errors.py
from __future__ import annotations


class EnigmaError(Exception):
    """Base class for every error raised by the simulator."""


class ConfigurationError(EnigmaError, ValueError):
    """A wheel, plugboard or machine setting breaks its structural rules."""


class DomainError(EnigmaError, ValueError):
    """A symbol outside the 26-letter alphabet reached the machine."""
