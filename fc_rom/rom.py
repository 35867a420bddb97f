"""ROM loading utilities for iNES / NES 2.0 files."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from .decoder import HEADER_SIZE, decode_header
from .errors import ROMLoadError, TruncatedInput
from .header import Header

logger = logging.getLogger(__name__)

TRAINER_SIZE = 512


@dataclass(frozen=True, slots=True, eq=False)
class NESFile:
    """Decoded header plus views of the regions that follow it.

    Each region is a ``uint8`` array sharing memory with the decoded buffer;
    nothing is copied. An absent trainer or CHR-ROM is a zero-length view.
    """

    header: Header
    trainer: np.ndarray
    prg_rom: np.ndarray
    chr_rom: np.ndarray
    miscellaneous_roms: np.ndarray

    def summary(self) -> dict[str, Any]:
        return {
            "header": self.header.as_dict(),
            "trainer_bytes": len(self.trainer),
            "prg_rom_bytes": len(self.prg_rom),
            "chr_rom_bytes": len(self.chr_rom),
            "miscellaneous_rom_bytes": len(self.miscellaneous_roms),
        }

    def __repr__(self) -> str:  # pragma: no cover - simple debug helper
        return (
            f"NESFile(format={self.header.format_name}, mapper={self.header.mapper}, "
            f"prg={len(self.prg_rom)} bytes, chr={len(self.chr_rom)} bytes)"
        )


def decode_file(data) -> NESFile:
    """Decode the header of ``data`` and slice the regions after it."""
    header = decode_header(data)
    return NESFile(header, *_slice_regions(np.frombuffer(data, dtype=np.uint8), header))


def _slice_regions(
    buffer: np.ndarray, header: Header
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    available = len(buffer)

    prg_rom_start = HEADER_SIZE
    if header.has_trainer:
        prg_rom_start += TRAINER_SIZE
        if available < prg_rom_start:
            raise TruncatedInput(prg_rom_start, available, "trainer")
    trainer = buffer[HEADER_SIZE:prg_rom_start]

    chr_rom_start = prg_rom_start + header.prg_rom_size
    if available < chr_rom_start:
        raise TruncatedInput(chr_rom_start, available, "PRG ROM")

    chr_rom_end = chr_rom_start + header.chr_rom_size
    if available < chr_rom_end:
        raise TruncatedInput(chr_rom_end, available, "CHR ROM")

    logger.debug(
        "Regions: trainer=%d:%d prg=%d:%d chr=%d:%d misc=%d:%d",
        HEADER_SIZE,
        prg_rom_start,
        prg_rom_start,
        chr_rom_start,
        chr_rom_start,
        chr_rom_end,
        chr_rom_end,
        available,
    )
    return (
        trainer,
        buffer[prg_rom_start:chr_rom_start],
        buffer[chr_rom_start:chr_rom_end],
        buffer[chr_rom_end:],
    )


class ROM:
    """An NES ROM file read from disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        if not self.path.is_file():
            raise ROMLoadError(f"ROM file not found: {self.path}")

        self.nes = decode_file(self.path.read_bytes())
        logger.info("Loaded %s (%s, mapper %d)", self.path.name, self.header.format_name, self.header.mapper)

    @property
    def header(self) -> Header:
        return self.nes.header

    @property
    def trainer(self) -> np.ndarray:
        return self.nes.trainer

    @property
    def prg_rom(self) -> np.ndarray:
        return self.nes.prg_rom

    @property
    def chr_rom(self) -> np.ndarray:
        return self.nes.chr_rom

    @property
    def miscellaneous_roms(self) -> np.ndarray:
        return self.nes.miscellaneous_roms

    def __repr__(self) -> str:  # pragma: no cover - simple debug helper
        return (
            f"ROM(path={self.path!s}, prg={len(self.prg_rom)} bytes, "
            f"chr={len(self.chr_rom)} bytes, mapper={self.header.mapper})"
        )
