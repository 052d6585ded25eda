"""CLI entrypoint for ruml."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, load_config
from .logging import configure_logging, get_logger
from .parsers import SourceParseError
from .pipeline import DiagramPipeline
from .renderers import UnknownOutputTypeError, available_output_types


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruml",
        description="Parse rust code and visualize.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-t",
        "--type",
        dest="output_type",
        metavar="OUTPUT_TYPE",
        default=None,
        help=(
            "Output type. Default value is PlantUml "
            f"(available: {', '.join(available_output_types())})."
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="./",
        metavar="INPUT",
        help="Sets the input file or directory to use (defaults to current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the diagram to this file instead of stdout.",
    )
    parser.add_argument(
        "--include-enums",
        action="store_true",
        default=None,
        help="Render top-level enums as empty enum blocks.",
    )
    parser.add_argument(
        "--visibility-markers",
        action="store_true",
        default=None,
        help="Mark private members with '-' instead of '+'.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ruml."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(Path(args.input))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.output_type:
        config.output_type = args.output_type
    if args.include_enums is not None:
        config.include_enums = args.include_enums
    if args.visibility_markers is not None:
        config.visibility_markers = args.visibility_markers

    pipeline = DiagramPipeline(config=config)
    try:
        diagram = pipeline.run(args.input)
    except UnknownOutputTypeError as exc:
        parser.exit(1, f"{exc}\n")
    except (FileNotFoundError, SourceParseError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"ruml failed to read input: {exc}\n")

    if args.output is not None:
        try:
            args.output.write_text(diagram + "\n", encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"ruml failed to write {args.output}: {exc}\n")
        logger.info("Diagram written to %s", args.output)
    else:
        print(diagram)


if __name__ == "__main__":
    main(sys.argv[1:])
