"""Command line entry point for inspecting ROM headers."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .errors import ROMDecodeError
from .rom import ROM


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the iNES / NES 2.0 header of NES ROM files")
    parser.add_argument("roms", nargs="+", help="Path(s) to .nes ROM files")
    parser.add_argument("--json", action="store_true", help="Emit one JSON object per ROM")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: WARNING)",
    )
    return parser.parse_args(argv)


def _format_text(path: str, summary: dict[str, Any]) -> str:
    lines = [path]
    for key, value in summary["header"].items():
        if isinstance(value, dict):
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        lines.append(f"  {key:<26} {value}")
    for key in ("trainer_bytes", "prg_rom_bytes", "chr_rom_bytes", "miscellaneous_rom_bytes"):
        lines.append(f"  {key:<26} {summary[key]}")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    failures = 0
    for path in args.roms:
        try:
            rom = ROM(path)
        except ROMDecodeError as exc:
            failures += 1
            print(f"{path}: {exc}", file=sys.stderr)
            continue

        summary = rom.nes.summary()
        if args.json:
            print(json.dumps({"path": path, **summary}))
        else:
            print(_format_text(path, summary))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
