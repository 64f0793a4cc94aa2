"""CLI for parsing and reformatting SLON files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from slon import FormatterOptions, SlonDocument, SlonError

DEFAULT_OUTPUT_DIR = Path("out/")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse SLON files and write them back in canonical form.")
    parser.add_argument("input", help="Path to a .slon file or a directory of .slon files.")
    parser.add_argument(
        "-o",
        "--output-dir",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory where formatted files should be written (defaults to out/).",
    )
    parser.add_argument(
        "--values-in-line",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write all key/value pairs of a block on one line (default: enabled).",
    )
    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Drop all indentation, spaces and newlines.",
    )
    parser.add_argument(
        "--indent",
        default="    ",
        help="Indentation characters to use (default: four spaces).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unbalanced braces and content after the document root.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser activity.")
    return parser.parse_args(argv)


def collect_inputs(path: Path) -> list[Path]:
    if path.is_dir():
        files = sorted(p for p in path.glob("*.slon") if p.is_file())
        if not files:
            raise FileNotFoundError(f"No .slon files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise FileNotFoundError(f"Input path does not exist: {path}")


def generate(
    files: Iterable[Path],
    output_dir: Path,
    options: FormatterOptions,
    strict: bool = False,
    log_level: int = logging.WARNING,
) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for source in files:
        try:
            document = SlonDocument.load(source, config={"strict": strict, "log_level": log_level})
            destination = document.save(output_dir / source.name, options)
        except (SlonError, ValueError) as exc:
            raise RuntimeError(f"Failed to format {source}") from exc
        try:
            display_path = destination.relative_to(Path.cwd())
        except ValueError:
            display_path = destination
        print(f"Wrote {display_path}")
        written.append(destination)
    return written


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    options = FormatterOptions(
        values_in_line=args.values_in_line,
        save_minimal=args.minimal,
        indent=args.indent,
    )
    files = collect_inputs(Path(args.input))
    generate(
        files,
        Path(args.output_dir),
        options,
        strict=args.strict,
        log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )


if __name__ == "__main__":
    main()
