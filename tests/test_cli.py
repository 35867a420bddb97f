import json

from fc_rom.cli import main

NES2_HEADER = b"NES\x1a" + bytes([0x01, 0x01, 0x01, 0x08, 0x00, 0x00, 0x07, 0x00, 0x01, 0x00, 0x00, 0x01])


def write_rom(path) -> None:
    path.write_bytes(NES2_HEADER + b"\x00" * (16 * 1024 + 8 * 1024))


def test_text_output(tmp_path, capsys) -> None:
    rom = tmp_path / "a.nes"
    write_rom(rom)

    assert main([str(rom)]) == 0
    out = capsys.readouterr().out
    assert out.startswith(str(rom))
    assert "NES 2.0" in out
    assert "VERTICAL" in out
    assert "prg_rom_bytes" in out


def test_json_output(tmp_path, capsys) -> None:
    rom = tmp_path / "a.nes"
    write_rom(rom)

    assert main(["--json", str(rom)]) == 0
    record = json.loads(capsys.readouterr().out)
    assert record["path"] == str(rom)
    assert record["header"]["timing"] == "PAL"
    assert record["header"]["prg_nvram_size"] == 8192
    assert record["header"]["default_expansion_device"] == "STANDARD_CONTROLLERS"
    assert record["chr_rom_bytes"] == 8 * 1024


def test_failures_are_reported_and_processing_continues(tmp_path, capsys) -> None:
    good = tmp_path / "good.nes"
    write_rom(good)
    bad = tmp_path / "bad.nes"
    bad.write_bytes(b"not a rom at all")

    assert main(["--json", str(bad), str(good), str(tmp_path / "missing.nes")]) == 1
    captured = capsys.readouterr()
    assert "bad magic" in captured.err
    assert "not found" in captured.err
    assert json.loads(captured.out)["path"] == str(good)
