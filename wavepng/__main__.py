from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from wavepng.errors import ArgumentError, WavepngError
from wavepng.util.color import format_hex_color, parse_hex_color
from wavepng.util.config import load_config
from wavepng.util.limits import MAX_IMAGE_DIMENSION

EXAMPLE = 'wavepng -i "song.wav" -o "waveform.png" -s 5 -e 30 -w 1920 -h 300 -b 1e1e1eff -f 00ffffff'


class _Parser(argparse.ArgumentParser):
    """argparse exits with status 2 on bad input; we want ArgumentError instead."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    # -h is the image height, so argparse's own -h/--help is disabled.
    p = _Parser(
        prog="wavepng",
        add_help=False,
        formatter_class=argparse.RawTextHelpFormatter,
        description="wavepng — render an audio file's waveform (min/max per pixel column) to PNG\n",
        epilog=f"Example:\n  {EXAMPLE}\n",
    )

    p.add_argument("-i", dest="input", metavar="<input file>", default=None, help="Input audio file path")
    p.add_argument("-o", dest="output", metavar="<output file>", default=None, help="Output PNG image path")
    p.add_argument("-s", dest="start", metavar="<start time>", type=float, default=0.0, help="Start time in seconds (default: 0)")
    p.add_argument(
        "-e",
        dest="end",
        metavar="<end time>",
        type=float,
        default=0.0,
        help="End time in seconds, 0 means until end, negative means seconds from end (default: 0)",
    )
    p.add_argument(
        "-w",
        dest="width",
        metavar="<width>",
        type=int,
        default=None,
        help=f"Image width in pixels (default: 1920, max: {MAX_IMAGE_DIMENSION})",
    )
    p.add_argument(
        "-h",
        dest="height",
        metavar="<height>",
        type=int,
        default=None,
        help=f"Image height in pixels (default: 300, max: {MAX_IMAGE_DIMENSION})",
    )
    p.add_argument("-b", dest="background", metavar="<RRGGBBAA>", default=None, help="Background color in RRGGBBAA hex (default: 00000000)")
    p.add_argument("-f", dest="foreground", metavar="<RRGGBBAA>", default=None, help="Waveform color in RRGGBBAA hex (default: FFFFFFFF)")
    p.add_argument("--config", default=None, metavar="<path>", help="YAML file with default width/height/background/foreground")
    p.add_argument("--quiet", action="store_true", help="Do not print the parameter summary")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--help", action="store_true", help="Show this help")
    return p


def _version() -> str:
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("wavepng")
    except PackageNotFoundError:
        return "0.0.0"


def _print_parameters(opts) -> None:
    print("=== Parameters ===")
    print(f"Input: {opts.input}")
    print(f"Output: {opts.output}")
    print(f"Start: {opts.start:g} sec")
    print(f"End: {opts.end:g} sec")
    print(f"Width: {opts.width}")
    print(f"Height: {opts.height}")
    print(f"Background color: {format_hex_color(opts.background)}")
    print(f"Waveform color: {format_hex_color(opts.foreground)}")


def run(argv: list[str]) -> int:
    """Parse argv and generate the PNG. Raises WavepngError on failure."""

    from wavepng.cli.generate import GenerateOptions, generate_waveform_png

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.help:
        parser.print_help()
        return 0
    if args.version:
        print(f"wavepng {_version()}")
        return 0

    if not args.input or not args.output:
        raise ArgumentError("both -i <input file> and -o <output file> are required")

    cfg = load_config(Path(args.config) if args.config else None)

    opts = GenerateOptions(
        input=args.input,
        output=args.output,
        start=float(args.start),
        end=float(args.end),
        width=int(args.width if args.width is not None else cfg.width),
        height=int(args.height if args.height is not None else cfg.height),
        background=parse_hex_color(args.background if args.background is not None else cfg.background),
        foreground=parse_hex_color(args.foreground if args.foreground is not None else cfg.foreground),
    )
    opts.render_config().validate()

    if not args.quiet:
        _print_parameters(opts)

    res = generate_waveform_png(opts)
    if not args.quiet:
        print(f"Rendered: {res.start_seconds:g} - {res.end_seconds:g} sec")
        print(f"Waveform image saved to: {res.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv:
        build_parser().print_help()
        return 1

    try:
        return run(argv)
    except ArgumentError as e:
        build_parser().print_help(sys.stderr)
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1
    except WavepngError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
