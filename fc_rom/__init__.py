"""High-level public API for the FC ROM toolkit.

Header decoding only needs the standard library. The region views returned by
``decode_file`` are NumPy arrays, so those objects are exposed lazily via the
__getattr__ hook and NumPy is imported on first use.
"""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any

from .bitfields import ByteLayout, split_byte
from .decoder import HEADER_SIZE, INES_MAGIC, decode_header
from .errors import InconsistentTiming, MagicMismatch, ROMDecodeError, ROMLoadError, TruncatedInput
from .header import (
    ConsoleType,
    ExpansionDevice,
    ExtendedConsole,
    ExtendedConsoleType,
    Header,
    Mirroring,
    NESConsole,
    PlayChoice10,
    Timing,
    VsHardwareType,
    VsPPUType,
    VsSystem,
)

__all__ = [
    "ByteLayout",
    "ConsoleType",
    "ExpansionDevice",
    "ExtendedConsole",
    "ExtendedConsoleType",
    "HEADER_SIZE",
    "Header",
    "INES_MAGIC",
    "InconsistentTiming",
    "MagicMismatch",
    "Mirroring",
    "NESConsole",
    "NESFile",
    "PlayChoice10",
    "ROM",
    "ROMDecodeError",
    "ROMLoadError",
    "TRAINER_SIZE",
    "Timing",
    "TruncatedInput",
    "VsHardwareType",
    "VsPPUType",
    "VsSystem",
    "decode_file",
    "decode_header",
    "split_byte",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "NESFile": ("fc_rom.rom", "NESFile"),
    "ROM": ("fc_rom.rom", "ROM"),
    "TRAINER_SIZE": ("fc_rom.rom", "TRAINER_SIZE"),
    "decode_file": ("fc_rom.rom", "decode_file"),
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - simple helper
    return sorted(set(__all__ + list(globals().keys())))


if TYPE_CHECKING:  # pragma: no cover - type checkers need eager defs
    from .rom import ROM, TRAINER_SIZE, NESFile, decode_file
