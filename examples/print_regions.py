"""Print the header and the first bytes of every region of a ROM."""
from __future__ import annotations

import argparse

from fc_rom import ROM


def parse_args():
    parser = argparse.ArgumentParser(description="Region dump demo")
    parser.add_argument("--rom", required=True, help="Path to the .nes ROM")
    parser.add_argument("--bytes", type=int, default=16, help="Bytes to show per region")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    rom = ROM(args.rom)
    print(f"Header: {rom.header}")
    for name in ("trainer", "prg_rom", "chr_rom", "miscellaneous_roms"):
        region = getattr(rom, name)
        preview = " ".join(f"{value:02X}" for value in region[: args.bytes].tolist())
        print(f"{name:<20} {len(region):>8} bytes  {preview}")


if __name__ == "__main__":
    main()
