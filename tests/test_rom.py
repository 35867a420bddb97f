import numpy as np
import pytest

import fc_rom
from fc_rom import TruncatedInput, decode_file
from fc_rom.rom import ROM, TRAINER_SIZE, NESFile
from fc_rom.errors import MagicMismatch, ROMLoadError

PRG = 16 * 1024
CHR = 8 * 1024


def build_rom(prg_units=1, chr_units=1, trainer=False, misc=b"") -> bytes:
    flags6 = 0x04 if trainer else 0x00
    header = b"NES\x1a" + bytes([prg_units, chr_units, flags6, 0x00]) + bytes(8)
    body = b""
    if trainer:
        body += b"\x77" * TRAINER_SIZE
    body += b"\x11" * (prg_units * PRG)
    body += b"\x22" * (chr_units * CHR)
    return header + body + misc


def test_regions_are_contiguous_and_sized() -> None:
    data = build_rom(2, 1, misc=b"\x33" * 100)
    nes = decode_file(data)

    assert isinstance(nes, NESFile)
    assert len(nes.trainer) == 0
    assert len(nes.prg_rom) == 2 * PRG
    assert len(nes.chr_rom) == CHR
    assert len(nes.miscellaneous_roms) == 100
    assert nes.prg_rom.dtype == np.uint8
    assert set(np.unique(nes.prg_rom)) == {0x11}
    assert set(np.unique(nes.chr_rom)) == {0x22}
    assert set(np.unique(nes.miscellaneous_roms)) == {0x33}


def test_trainer_precedes_prg_rom() -> None:
    nes = decode_file(build_rom(1, 1, trainer=True))

    assert nes.header.has_trainer
    assert len(nes.trainer) == TRAINER_SIZE
    assert set(np.unique(nes.trainer)) == {0x77}
    assert set(np.unique(nes.prg_rom)) == {0x11}
    assert len(nes.miscellaneous_roms) == 0


def test_chr_rom_may_be_empty() -> None:
    nes = decode_file(build_rom(1, 0, misc=b"\x33"))
    assert len(nes.chr_rom) == 0
    assert nes.miscellaneous_roms.tolist() == [0x33]


def test_regions_are_views_not_copies() -> None:
    data = bytearray(build_rom(1, 1, trainer=True))
    nes = decode_file(data)
    whole = np.frombuffer(data, dtype=np.uint8)

    for region in (nes.trainer, nes.prg_rom, nes.chr_rom):
        assert np.shares_memory(region, whole)

    data[16] = 0xAB
    data[16 + TRAINER_SIZE] = 0xCD
    assert nes.trainer[0] == 0xAB
    assert nes.prg_rom[0] == 0xCD


def test_missing_trainer_is_reported_first() -> None:
    data = build_rom(1, 1, trainer=True)[: 16 + 100]
    with pytest.raises(TruncatedInput) as excinfo:
        decode_file(data)
    assert excinfo.value.region == "trainer"
    assert excinfo.value.needed == 16 + TRAINER_SIZE
    assert excinfo.value.available == 116


def test_short_prg_rom() -> None:
    data = build_rom(2, 1)[: 16 + PRG]
    with pytest.raises(TruncatedInput) as excinfo:
        decode_file(data)
    assert excinfo.value.region == "PRG ROM"
    assert excinfo.value.needed == 16 + 2 * PRG


def test_short_chr_rom() -> None:
    data = build_rom(1, 2)[:-1]
    with pytest.raises(TruncatedInput) as excinfo:
        decode_file(data)
    assert excinfo.value.region == "CHR ROM"
    assert excinfo.value.needed == 16 + PRG + 2 * CHR
    assert excinfo.value.available == 16 + PRG + 2 * CHR - 1


def test_header_errors_propagate() -> None:
    with pytest.raises(MagicMismatch):
        decode_file(b"XXXX" + build_rom()[4:])
    with pytest.raises(TruncatedInput):
        decode_file(b"NES\x1a")


def test_summary_reports_region_sizes() -> None:
    summary = decode_file(build_rom(1, 1, trainer=True, misc=b"\x00" * 4)).summary()
    assert summary["trainer_bytes"] == TRAINER_SIZE
    assert summary["prg_rom_bytes"] == PRG
    assert summary["chr_rom_bytes"] == CHR
    assert summary["miscellaneous_rom_bytes"] == 4
    assert summary["header"]["format"] == "iNES"


def test_rom_loads_from_disk(tmp_path) -> None:
    path = tmp_path / "game.nes"
    path.write_bytes(build_rom(1, 1))

    rom = ROM(path)
    assert rom.header.prg_rom_size == PRG
    assert len(rom.prg_rom) == PRG
    assert len(rom.chr_rom) == CHR
    assert len(rom.trainer) == 0
    assert len(rom.miscellaneous_roms) == 0


def test_rom_missing_file(tmp_path) -> None:
    with pytest.raises(ROMLoadError):
        ROM(tmp_path / "missing.nes")


def test_lazy_package_exports() -> None:
    assert fc_rom.decode_file is decode_file
    assert fc_rom.ROM is ROM
    assert fc_rom.TRAINER_SIZE == 512
