"""Decode the 16-byte iNES / NES 2.0 header record.

Bytes 0-7 share one layout in both format revisions. Byte 7 carries the
version marker, and bytes 8-15 are then read by one of two independent
paths (:func:`_decode_nes2` or :func:`_decode_ines`) whose results are merged
by :func:`_build_header`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .bitfields import ByteLayout
from .errors import InconsistentTiming, MagicMismatch, TruncatedInput
from .header import (
    KIB,
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

logger = logging.getLogger(__name__)

INES_MAGIC = b"NES\x1a"
HEADER_SIZE = 16
NES2_IDENTIFIER = 0b10

PRG_ROM_UNIT = 16 * KIB
CHR_ROM_UNIT = 8 * KIB
PRG_RAM_UNIT = 8 * KIB
EXPONENT_NIBBLE = 0xF

FLAGS6 = ByteLayout((4, 1, 1, 1, 1))
FLAGS7 = ByteLayout((4, 2, 2))

NES2_MAPPER_MSB = ByteLayout((4, 4))
NES2_ROM_SIZE_MSB = ByteLayout((4, 4))
NES2_PRG_RAM = ByteLayout((4, 4))
NES2_CHR_RAM = ByteLayout((4, 4))
NES2_TIMING = ByteLayout((6, 2))
NES2_SYSTEM_TYPE = ByteLayout((4, 4))
NES2_MISC_ROMS = ByteLayout((6, 2))
NES2_EXPANSION_DEVICE = ByteLayout((2, 6))

INES_PRG_RAM = ByteLayout((8,))
INES_TV_SYSTEM = ByteLayout((7, 1))
INES_FLAGS10 = ByteLayout((2, 1, 1, 2, 2))


@dataclass(frozen=True, slots=True)
class _CommonFields:
    """Bytes 4-7, identical in both revisions."""

    prg_rom_lsb: int
    chr_rom_lsb: int
    mapper: int
    is_four_screen: bool
    has_trainer: bool
    has_persistent_memory: bool
    mirroring: Mirroring
    is_nes2: bool
    console_type: ConsoleType


@dataclass(frozen=True, slots=True)
class _RevisionFields:
    """Bytes 8-15 as interpreted by one format revision."""

    prg_rom_size: int
    chr_rom_size: int
    prg_ram_size: int
    prg_nvram_size: int
    chr_ram_size: int
    chr_nvram_size: int
    miscellaneous_rom_count: int
    mapper_high: int
    sub_mapper: int
    has_bus_conflicts: bool
    timing: Timing
    console_type: ConsoleType
    default_expansion_device: ExpansionDevice


def decode_header(data) -> Header:
    """Decode the header at the start of ``data``.

    ``data`` is any bytes-like object of at least 16 bytes; only the first 16
    are read. Raises :class:`TruncatedInput`, :class:`MagicMismatch` or
    :class:`InconsistentTiming`. Reserved codes never raise; they decode to
    the ``RESERVED`` member of their enum.
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedInput(HEADER_SIZE, len(data))
    record = bytes(data[:HEADER_SIZE])
    if record[:4] != INES_MAGIC:
        raise MagicMismatch(record[:4])

    common = _decode_common(record)
    if common.is_nes2:
        fields = _decode_nes2(record, common.console_type)
    else:
        fields = _decode_ines(record, common.console_type)
    return _build_header(common, fields)


def _decode_common(record: bytes) -> _CommonFields:
    mapper_low, four_screen, trainer, battery, mirroring = FLAGS6(record[6])
    mapper_mid, version, console_selector = FLAGS7(record[7])
    is_nes2 = version == NES2_IDENTIFIER
    logger.debug("Header version bits %#04b -> %s", version, "NES 2.0" if is_nes2 else "iNES")

    return _CommonFields(
        prg_rom_lsb=record[4],
        chr_rom_lsb=record[5],
        mapper=mapper_low | (mapper_mid << 4),
        is_four_screen=four_screen == 1,
        has_trainer=trainer == 1,
        has_persistent_memory=battery == 1,
        mirroring=Mirroring(mirroring),
        is_nes2=is_nes2,
        console_type=_resolve_console_type(console_selector, is_nes2),
    )


def _resolve_console_type(selector: int, is_nes2: bool) -> ConsoleType:
    if selector == 0:
        return NESConsole()
    if selector == 1:
        return VsSystem()
    if selector == 2:
        return PlayChoice10()
    if is_nes2:
        return ExtendedConsole()
    # iNES never defined selector 3; treat it as a Vs. System board.
    logger.debug("iNES console selector 3 has no meaning, assuming Vs. System")
    return VsSystem()


def _nes2_rom_size(lsb: int, msb: int, unit: int) -> int:
    if msb == EXPONENT_NIBBLE:
        exponent, multiplier = lsb >> 2, lsb & 0x3
        return (1 << exponent) * (multiplier * 2 + 1)
    return (lsb | (msb << 8)) * unit


def _nes2_ram_size(shift: int) -> int:
    return 0 if shift == 0 else 64 << shift


def _decode_nes2(record: bytes, console_type: ConsoleType) -> _RevisionFields:
    sub_mapper, mapper_high = NES2_MAPPER_MSB(record[8])
    prg_rom_msb, chr_rom_msb = NES2_ROM_SIZE_MSB(record[9])
    prg_ram_shift, prg_nvram_shift = NES2_PRG_RAM(record[10])
    chr_ram_shift, chr_nvram_shift = NES2_CHR_RAM(record[11])
    _, timing = NES2_TIMING(record[12])
    system_high, system_low = NES2_SYSTEM_TYPE(record[13])
    _, miscellaneous_rom_count = NES2_MISC_ROMS(record[14])
    _, expansion_device = NES2_EXPANSION_DEVICE(record[15])

    if isinstance(console_type, VsSystem):
        console_type = VsSystem(
            ppu_type=VsPPUType.from_code(system_low),
            hardware_type=VsHardwareType.from_code(system_high),
        )
    elif isinstance(console_type, ExtendedConsole):
        console_type = ExtendedConsole(ExtendedConsoleType.from_code(system_low))

    return _RevisionFields(
        prg_rom_size=_nes2_rom_size(record[4], prg_rom_msb, PRG_ROM_UNIT),
        chr_rom_size=_nes2_rom_size(record[5], chr_rom_msb, CHR_ROM_UNIT),
        prg_ram_size=_nes2_ram_size(prg_ram_shift),
        prg_nvram_size=_nes2_ram_size(prg_nvram_shift),
        chr_ram_size=_nes2_ram_size(chr_ram_shift),
        chr_nvram_size=_nes2_ram_size(chr_nvram_shift),
        miscellaneous_rom_count=miscellaneous_rom_count,
        mapper_high=mapper_high,
        sub_mapper=sub_mapper,
        has_bus_conflicts=False,
        timing=Timing(timing),
        console_type=console_type,
        default_expansion_device=ExpansionDevice.from_code(expansion_device),
    )


def _ines_timing(first: int, second: int) -> Timing:
    if first and second and first != second:
        raise InconsistentTiming(first, second)
    value = max(first, second)
    if value == 0:
        return Timing.NTSC
    if value == 2:
        return Timing.PAL
    return Timing.MULTIPLE_REGION


def _decode_ines(record: bytes, console_type: ConsoleType) -> _RevisionFields:
    (prg_ram_units,) = INES_PRG_RAM(record[8])
    _, tv_system = INES_TV_SYSTEM(record[9])
    _, bus_conflicts, no_prg_ram, _, tv_system_ext = INES_FLAGS10(record[10])
    # bytes 11-15 are unused by iNES

    if no_prg_ram:
        prg_ram_size = 0
    else:
        prg_ram_size = max(prg_ram_units, 1) * PRG_RAM_UNIT

    return _RevisionFields(
        prg_rom_size=record[4] * PRG_ROM_UNIT,
        chr_rom_size=record[5] * CHR_ROM_UNIT,
        prg_ram_size=prg_ram_size,
        prg_nvram_size=0,
        chr_ram_size=0,
        chr_nvram_size=0,
        miscellaneous_rom_count=0,
        mapper_high=0,
        sub_mapper=0,
        has_bus_conflicts=bus_conflicts == 1,
        timing=_ines_timing(tv_system, tv_system_ext),
        console_type=console_type,
        default_expansion_device=ExpansionDevice.UNSPECIFIED,
    )


def _build_header(common: _CommonFields, fields: _RevisionFields) -> Header:
    header = Header(
        prg_rom_size=fields.prg_rom_size,
        chr_rom_size=fields.chr_rom_size,
        prg_ram_size=fields.prg_ram_size,
        prg_nvram_size=fields.prg_nvram_size,
        chr_ram_size=fields.chr_ram_size,
        chr_nvram_size=fields.chr_nvram_size,
        miscellaneous_rom_count=fields.miscellaneous_rom_count,
        mapper=common.mapper | (fields.mapper_high << 8),
        sub_mapper=fields.sub_mapper,
        is_four_screen=common.is_four_screen,
        has_trainer=common.has_trainer,
        has_persistent_memory=common.has_persistent_memory,
        mirroring=common.mirroring,
        has_bus_conflicts=fields.has_bus_conflicts,
        timing=fields.timing,
        is_nes2=common.is_nes2,
        console_type=fields.console_type,
        default_expansion_device=fields.default_expansion_device,
    )
    logger.debug(
        "Decoded %s header: mapper=%d.%d prg=%d chr=%d",
        header.format_name,
        header.mapper,
        header.sub_mapper,
        header.prg_rom_size,
        header.chr_rom_size,
    )
    return header
