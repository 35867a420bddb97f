"""Typed representation of the 16-byte iNES / NES 2.0 header."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar

logger = logging.getLogger(__name__)

KIB = 1 << 10
RESERVED_CODE = 0xFF


class Mirroring(IntEnum):
    """Name table mirroring selected by byte 6, bit 0."""

    HORIZONTAL_OR_MAPPER_CONTROLLED = 0
    VERTICAL = 1


class Timing(IntEnum):
    """CPU/PPU timing of the console the image was made for."""

    # RP2C02: North America, Japan, South Korea, Taiwan
    NTSC = 0
    # RP2C07: Western Europe, Australia
    PAL = 1
    # Identical ROM released in both regions, or the game adapts at runtime
    MULTIPLE_REGION = 2
    # UMC 6527P: Eastern Europe, Russia, Mainland China, India, Africa
    DENDY = 3


class _CodeEnum(IntEnum):
    """Closed set decoded permissively: unknown codes map to ``RESERVED``."""

    @classmethod
    def from_code(cls, code: int):
        try:
            return cls(code)
        except ValueError:
            logger.debug("Unknown %s code %#x, using RESERVED", cls.__name__, code)
            return cls["RESERVED"]


class VsPPUType(_CodeEnum):
    RP2C03B = 0x0
    RP2C03G = 0x1
    RP2C04_0001 = 0x2
    RP2C04_0002 = 0x3
    RP2C04_0003 = 0x4
    RP2C04_0004 = 0x5
    RC2C03B = 0x6
    RC2C03C = 0x7
    RC2C05_01 = 0x8
    RC2C05_02 = 0x9
    RC2C05_03 = 0xA
    RC2C05_04 = 0xB
    RC2C05_05 = 0xC
    RESERVED = RESERVED_CODE


class VsHardwareType(_CodeEnum):
    UNI_SYSTEM_NORMAL = 0x0
    UNI_SYSTEM_RBI_BASEBALL_PROTECTION = 0x1
    UNI_SYSTEM_TKO_BOXING_PROTECTION = 0x2
    UNI_SYSTEM_SUPER_XEVIOUS_PROTECTION = 0x3
    UNI_SYSTEM_VS_ICE_CLIMBER_JAPAN_PROTECTION = 0x4
    DUAL_SYSTEM_NORMAL = 0x5
    DUAL_SYSTEM_RAID_ON_BUNGELING_BAY_PROTECTION = 0x6
    RESERVED = RESERVED_CODE


class ExtendedConsoleType(_CodeEnum):
    """Console kinds reachable through NES 2.0 byte 13 when byte 7 selects 3."""

    REGULAR = 0x0
    VS_SYSTEM = 0x1
    PLAYCHOICE_10 = 0x2
    # Famiclone with a CPU that supports decimal mode
    REGULAR_WITH_DECIMAL = 0x3
    VT01_MONOCHROME = 0x4
    VT01_RED_CYAN_STN = 0x5
    VT02 = 0x6
    VT03 = 0x7
    VT09 = 0x8
    VT32 = 0x9
    VT369 = 0xA
    RESERVED = RESERVED_CODE


class ExpansionDevice(_CodeEnum):
    """Default expansion device (NES 2.0 byte 15)."""

    UNSPECIFIED = 0x00
    STANDARD_CONTROLLERS = 0x01
    NES_FOUR_SCORE = 0x02
    FAMICOM_FOUR_PLAYERS_ADAPTER = 0x03
    VS_SYSTEM = 0x04
    VS_SYSTEM_REVERSED_INPUTS = 0x05
    VS_PINBALL_JAPAN = 0x06
    VS_ZAPPER = 0x07
    ZAPPER = 0x08
    TWO_ZAPPERS = 0x09
    BANDAI_HYPER_SHOT = 0x0A
    POWER_PAD_SIDE_A = 0x0B
    POWER_PAD_SIDE_B = 0x0C
    FAMILY_TRAINER_SIDE_A = 0x0D
    FAMILY_TRAINER_SIDE_B = 0x0E
    ARKANOID_VAUS_NES = 0x0F
    ARKANOID_VAUS_FAMICOM = 0x10
    TWO_VAUS_PLUS_DATA_RECORDER = 0x11
    KONAMI_HYPER_SHOT = 0x12
    COCONUTS_PACHINKO = 0x13
    EXCITING_BOXING_PUNCHING_BAG = 0x14
    JISSEN_MAHJONG = 0x15
    PARTY_TAP = 0x16
    OEKA_KIDS_TABLET = 0x17
    SUNSOFT_BARCODE_BATTLER = 0x18
    MIRACLE_PIANO_KEYBOARD = 0x19
    POKKUN_MOGURAA = 0x1A
    TOP_RIDER = 0x1B
    DOUBLE_FISTED = 0x1C
    FAMICOM_3D_SYSTEM = 0x1D
    DOREMIKKO_KEYBOARD = 0x1E
    ROB_GYRO_SET = 0x1F
    FAMICOM_DATA_RECORDER = 0x20
    ASCII_TURBO_FILE = 0x21
    IGS_STORAGE_BATTLE_BOX = 0x22
    FAMILY_BASIC_KEYBOARD_PLUS_DATA_RECORDER = 0x23
    DONGDA_PEC_586_KEYBOARD = 0x24
    BIT_CORP_BIT_79_KEYBOARD = 0x25
    SUBOR_KEYBOARD = 0x26
    SUBOR_KEYBOARD_PLUS_MOUSE_3X8BIT = 0x27
    SUBOR_KEYBOARD_PLUS_MOUSE_24BIT = 0x28
    SNES_MOUSE = 0x29
    MULTICART = 0x2A
    TWO_SNES_CONTROLLERS = 0x2B
    RACERMATE_BICYCLE = 0x2C
    U_FORCE = 0x2D
    ROB_STACK_UP = 0x2E
    RESERVED = RESERVED_CODE


@dataclass(frozen=True, slots=True)
class NESConsole:
    """Regular NES / Famicom / Dendy."""

    tag: ClassVar[str] = "nes"

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.tag}


@dataclass(frozen=True, slots=True)
class VsSystem:
    """Vs. System arcade board and its hardware details."""

    tag: ClassVar[str] = "vs_system"

    # PPU the game expects when the board's DIP switches are all zero
    ppu_type: VsPPUType = VsPPUType.RP2C03B
    hardware_type: VsHardwareType = VsHardwareType.UNI_SYSTEM_NORMAL

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.tag,
            "ppu_type": self.ppu_type.name,
            "hardware_type": self.hardware_type.name,
        }


@dataclass(frozen=True, slots=True)
class PlayChoice10:
    tag: ClassVar[str] = "playchoice_10"

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.tag}


@dataclass(frozen=True, slots=True)
class ExtendedConsole:
    """NES 2.0 extended console type."""

    tag: ClassVar[str] = "extended"

    kind: ExtendedConsoleType = ExtendedConsoleType.REGULAR

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.tag, "extended_type": self.kind.name}


ConsoleType = NESConsole | VsSystem | PlayChoice10 | ExtendedConsole


@dataclass(frozen=True, slots=True)
class Header:
    """Decoded header fields. Every size is a byte count."""

    prg_rom_size: int
    chr_rom_size: int
    prg_ram_size: int
    prg_nvram_size: int
    chr_ram_size: int
    chr_nvram_size: int
    miscellaneous_rom_count: int
    mapper: int
    sub_mapper: int
    is_four_screen: bool
    has_trainer: bool
    has_persistent_memory: bool
    mirroring: Mirroring
    has_bus_conflicts: bool
    timing: Timing
    is_nes2: bool
    console_type: ConsoleType
    default_expansion_device: ExpansionDevice

    @property
    def format_name(self) -> str:
        return "NES 2.0" if self.is_nes2 else "iNES"

    def as_dict(self) -> dict[str, Any]:
        return {
            "format": self.format_name,
            "prg_rom_size": self.prg_rom_size,
            "chr_rom_size": self.chr_rom_size,
            "prg_ram_size": self.prg_ram_size,
            "prg_nvram_size": self.prg_nvram_size,
            "chr_ram_size": self.chr_ram_size,
            "chr_nvram_size": self.chr_nvram_size,
            "miscellaneous_rom_count": self.miscellaneous_rom_count,
            "mapper": self.mapper,
            "sub_mapper": self.sub_mapper,
            "is_four_screen": self.is_four_screen,
            "has_trainer": self.has_trainer,
            "has_persistent_memory": self.has_persistent_memory,
            "mirroring": self.mirroring.name,
            "has_bus_conflicts": self.has_bus_conflicts,
            "timing": self.timing.name,
            "console_type": self.console_type.as_dict(),
            "default_expansion_device": self.default_expansion_device.name,
        }
