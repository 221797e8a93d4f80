"""Command-line entry point for webcollate."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import __version__, BundleConfig
from .errors import WebcollateError
from .pipeline import collate

logger = logging.getLogger("webcollate.cli")

EPILOG = """\
examples:
  single web page to PDF:
    webcollate pdf --output my.pdf https://example.com

  several web pages to a single PDF:
    webcollate pdf --output my.pdf https://example.com/1 https://example.com/2

  custom page size and font size:
    webcollate pdf --output my.pdf --css "@page { size: A3 landscape } html { font-size: 18pt }" https://example.com
"""

COMMANDS = {
    "pdf": "Bundle web pages as a PDF file",
    "epub": "Bundle web pages as an EPUB file",
    "html": "Bundle web pages as an HTML file",
    "md": "Bundle web pages as a Markdown file",
}


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "locations",
        nargs="+",
        help="URLs or local HTML files to bundle",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Path for the generated bundle",
    )
    parser.add_argument("--template", default=None, help="Path to a custom HTML template")
    parser.add_argument("--style", default=None, help="Path to a custom CSS stylesheet")
    parser.add_argument("--css", default="", help="Additional CSS style")
    parser.add_argument(
        "--individual",
        action="store_true",
        help="Export each web page as an individual file",
    )
    parser.add_argument(
        "--no-amp",
        dest="amp",
        action="store_false",
        help="Don't prefer the AMP version of the web page",
    )
    parser.add_argument("--toc", action="store_true", help="Generate a table of contents")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print more detailed information",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="webcollate",
        description="Turn web pages into readable PDF, EPUB, HTML or Markdown files.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in COMMANDS.items():
        command_parser = subparsers.add_parser(name, help=help_text, description=help_text)
        _add_common_arguments(command_parser)
        if name == "pdf":
            command_parser.add_argument(
                "--no-sandbox",
                dest="sandbox",
                action="store_false",
                help="Run Chromium without its sandbox",
            )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        parser.exit()
    return args


def build_config(args: argparse.Namespace) -> BundleConfig:
    return BundleConfig(
        output=args.output,
        template=args.template,
        style=args.style,
        css=args.css,
        individual=args.individual,
        amp=args.amp,
        toc=args.toc,
        debug=args.debug,
        sandbox=getattr(args, "sandbox", True),
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = build_config(args)
    overall_start = time.perf_counter()
    try:
        outputs = asyncio.run(collate(args.locations, args.command, config))
    except WebcollateError as exc:
        logger.error("%s", exc)
        return 1
    total_elapsed = time.perf_counter() - overall_start

    logger.info(
        "Finished in %.2fs (%d input(s), %d file(s) written)",
        total_elapsed,
        len(args.locations),
        len(outputs),
    )
    for output in outputs:
        logger.debug("Wrote %s", output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
