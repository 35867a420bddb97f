"""Split packed header bytes into their bit fields."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

BYTE_BITS = 8


def split_byte(value: int, widths: Sequence[int]) -> tuple[int, ...]:
    """Return the sub-fields of ``value``, most-significant bits first.

    The first width consumes the highest bits of the byte. ``widths`` must add
    up to eight; :class:`ByteLayout` checks that once so callers don't have to.
    """
    fields: list[int] = []
    shift = BYTE_BITS
    for width in widths:
        shift -= width
        fields.append((value >> shift) & ((1 << width) - 1))
    return tuple(fields)


@dataclass(frozen=True, slots=True)
class ByteLayout:
    """A validated bit-width layout for one header byte.

    >>> ByteLayout((1, 2, 3, 2)).split(0b1_01_101_10)
    (1, 1, 5, 2)
    """

    widths: tuple[int, ...]

    def __post_init__(self) -> None:
        widths = tuple(int(width) for width in self.widths)
        if not widths:
            raise ValueError("a byte layout needs at least one field")
        if any(width <= 0 for width in widths):
            raise ValueError(f"field widths must be positive, got {widths}")
        if sum(widths) != BYTE_BITS:
            raise ValueError(f"field widths must sum to {BYTE_BITS}, got {sum(widths)}")
        object.__setattr__(self, "widths", widths)

    def split(self, value: int) -> tuple[int, ...]:
        return split_byte(value, self.widths)

    __call__ = split

    def __len__(self) -> int:
        return len(self.widths)
