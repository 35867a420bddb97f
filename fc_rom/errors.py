"""Exceptions raised while decoding NES cartridge dumps."""
from __future__ import annotations


class ROMDecodeError(ValueError):
    """Base class for every failure to decode an iNES / NES 2.0 image."""


class MagicMismatch(ROMDecodeError):
    """The buffer does not start with the ``NES\\x1a`` constant."""

    def __init__(self, found: bytes):
        self.found = bytes(found)
        super().__init__(f"Invalid iNES header: bad magic {self.found!r}")


class InconsistentTiming(ROMDecodeError):
    """Legacy header bytes 9 and 10 declare two different TV systems."""

    def __init__(self, first: int, second: int):
        self.first = first
        self.second = second
        super().__init__(
            f"Inconsistent timing in iNES header: byte 9 says {first}, byte 10 says {second}"
        )


class TruncatedInput(ROMDecodeError):
    """The buffer ends before a region the header declares."""

    def __init__(self, needed: int, available: int, region: str = "header"):
        self.needed = needed
        self.available = available
        self.region = region
        super().__init__(
            f"Incomplete {region}: need {needed} bytes, only {available} available"
        )


class ROMLoadError(ROMDecodeError):
    """Raised when a ROM file cannot be read from disk."""
