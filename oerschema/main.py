#!/usr/bin/env python3
"""
OER Schema CLI - generate the vocabulary site, or serve it.

Usage:
    oerschema --help
    oerschema --schema config/schema.yml --output dist
    oerschema --serve --port 3000
"""

import argparse
import logging
import sys
from pathlib import Path

import pyfiglet
import uvicorn
from dotenv import load_dotenv

from oerschema import __version__
from oerschema.config.settings import Settings, get_settings
from oerschema.errors import OerSchemaError
from oerschema.pipeline import GenerationPipeline
from oerschema.publishing import PathCollisionError
from oerschema.schema import SchemaLoadError
from oerschema.server import create_app
from oerschema.utils.logging import setup_colored_logging

FORMAT_CHOICES = ["jsonld", "turtle", "ntriples", "rdfxml"]


def setup_logging(verbose: bool = False, debug: bool = False, log_file: str | None = None) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    setup_colored_logging(level=level, log_file=log_file)


def print_banner() -> None:
    """Print the application banner."""
    print(pyfiglet.figlet_format("OER Schema", font="slant", width=100))
    print("Open Educational Resources vocabulary".center(60, "*"))


def print_config_summary(settings: Settings, args: argparse.Namespace) -> None:
    """Print configuration summary."""
    print("\n📋 Configuration:")
    print("─" * 40)
    print(f"  Vocabulary: {settings.namespaces.vocab_prefix}: <{settings.namespaces.vocab_iri}>")
    if args.serve:
        print(f"  Content root: {settings.content_root}")
        print(f"  Listening on: {settings.server.host}:{settings.server.port}")
        print(f"  RDF formats served: {', '.join(settings.server.formats)}")
    else:
        print(f"  Schema file: {settings.paths.schema_file}")
        print(f"  Output dir: {settings.paths.output_dir}")
        print(f"  Formats: {', '.join(settings.output.formats)}")
        print(f"  Aggregate files: {'yes' if settings.output.aggregate else 'no'}")
        print(f"  Round-trip check: {'yes' if settings.output.verify_round_trip else 'no'}")
    print("─" * 40)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="oerschema",
        description="OER Schema - vocabulary site generator and content server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate every file from the configured schema
  oerschema

  # Only Turtle and N-Triples, into a custom directory
  oerschema --output ./public --format turtle --format ntriples

  # Check every file parses back to the same statements
  oerschema --verify --verbose

  # Serve the generated files, with JSON-LD negotiation enabled
  oerschema --serve --serve-format turtle --serve-format jsonld
        """,
    )

    # Generation
    parser.add_argument(
        "--schema",
        "-s",
        type=str,
        default=None,
        help="Schema YAML file (default: from config)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output directory for generated files (default: ./dist)",
    )

    parser.add_argument(
        "--format",
        "-f",
        action="append",
        choices=FORMAT_CHOICES,
        default=None,
        help="Format to generate; repeat for several (default: all)",
    )

    parser.add_argument(
        "--no-aggregate",
        action="store_true",
        help="Skip the schema.<ext> aggregate files",
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Parse every generated file back and compare statements",
    )

    # Serving
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the output directory instead of generating",
    )

    parser.add_argument("--host", type=str, default=None, help="Bind address (default: from config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port (default: 3000)")

    parser.add_argument(
        "--serve-format",
        action="append",
        choices=FORMAT_CHOICES,
        default=None,
        help="RDF format the server may negotiate; repeat for several (default: turtle)",
    )

    # Logging
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (very verbose)",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write a plain-text log to this file",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> None:
    """Apply CLI arguments to settings."""
    if args.schema:
        settings.paths.schema_file = Path(args.schema)

    if args.output:
        settings.paths.output_dir = Path(args.output)

    if args.format:
        settings.output.formats = list(dict.fromkeys(args.format))

    if args.no_aggregate:
        settings.output.aggregate = False

    if args.verify:
        settings.output.verify_round_trip = True

    if args.host:
        settings.server.host = args.host

    if args.port:
        settings.server.port = args.port

    if args.serve_format:
        settings.server.formats = list(dict.fromkeys(args.serve_format))


def run_generate(settings: Settings, args: argparse.Namespace) -> int:
    """Run one generation pass and map the outcome to an exit code."""
    pipeline = GenerationPipeline(settings=settings)

    try:
        result = pipeline.execute()
    except SchemaLoadError as e:
        print(f"❌ Schema error: {e}", file=sys.stderr)
        return 1
    except PathCollisionError as e:
        print(f"❌ Planning error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        result.print_summary()

    return result.exit_code


def run_serve(settings: Settings) -> int:
    """Serve the content root until interrupted."""
    app = create_app(settings)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port, log_config=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        setup_logging(verbose=False, debug=False, log_file=args.log_file)
        logging.disable(logging.WARNING)
    else:
        setup_logging(verbose=args.verbose, debug=args.debug, log_file=args.log_file)

    if not args.quiet:
        print_banner()

    try:
        settings = get_settings()
        apply_cli_overrides(settings, args)
    except Exception as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print_config_summary(settings, args)

    try:
        if args.serve:
            return run_serve(settings)
        return run_generate(settings, args)

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130

    except OerSchemaError as e:
        logging.exception("Run failed")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
