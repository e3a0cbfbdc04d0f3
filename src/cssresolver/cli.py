"""Command-line entry point for the CSS URL resolver."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .core.config import BuildConfig, ConfigError, ResolutionConfig, load_config, parse_alias
from .core.controller import BuildController
from .core.logger import initialize_logging
from .core.planner import OutputPlanner

logger = logging.getLogger("cssresolver.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="css-url-resolver",
        description="Resolve url(...) assets in stylesheets, copy them under hashed names and rewrite the references.",
    )
    parser.add_argument("inputs", nargs="+", help="CSS or HTML documents to process")
    parser.add_argument(
        "--output",
        default="dist/css",
        help="Directory where rewritten documents are written",
    )
    parser.add_argument(
        "--public-path",
        default=None,
        help="Output root that receives the img/audio/video/fonts folders (default: /, which requires --no-clean)",
    )
    parser.add_argument(
        "--alias",
        action="append",
        default=[],
        metavar="PREFIX=PATH",
        help="Path alias applied before lookup; may be repeated",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        metavar="DIR",
        help="Fallback directory searched for unresolved references; may be repeated",
    )
    parser.add_argument("--config", help="JSON file with aliases, publicPath and includePaths")
    parser.add_argument(
        "--concurrency",
        type=int,
        default=1,
        help="Number of documents processed in parallel",
    )
    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep existing category folders instead of clearing them before the build",
    )
    parser.add_argument("--log-dir", default=None, help="Also write rotating log files here")
    parser.add_argument("--error-report", default=None, help="Write a report of failed documents to this file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def resolution_config_from_args(args: argparse.Namespace) -> ResolutionConfig:
    config = load_config(args.config) if args.config else ResolutionConfig()
    for value in args.alias:
        prefix, target = parse_alias(value)
        config.aliases[prefix] = target
    config.include_paths.extend(args.include)
    if args.public_path is not None:
        config.public_path = args.public_path
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    initialize_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    try:
        resolution = resolution_config_from_args(args)
    except (ConfigError, OSError) as e:
        parser.error(str(e))

    logger.debug(f"Resolution config: {resolution}")

    if not args.no_clean and OutputPlanner(resolution.output_root()).is_filesystem_root():
        parser.error("the output root is the filesystem root; pass --public-path or --no-clean")

    config = BuildConfig(
        inputs=args.inputs,
        output_dir=args.output,
        resolution=resolution,
        concurrency=max(1, args.concurrency),
        clean=not args.no_clean,
    )
    controller = BuildController(config)
    stats = controller.run()

    if stats["failed"]:
        types = ", ".join(f"{name} x{count}" for name, count in controller.errors.count_by_type().items())
        logger.error(f"{len(controller.errors.errors)} document(s) failed ({types})")

    if args.error_report and (controller.errors.errors or controller.errors.warnings):
        controller.errors.write_report(args.error_report)

    return 1 if stats["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
