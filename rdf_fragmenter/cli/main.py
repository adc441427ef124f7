"""
Command line entry point.

Usage:
    rdf-fragmenter path/to/config.json [--log-level DEBUG] [--log-file run.log]

Exit codes:
    0  the run completed
    1  the configuration or an input file is invalid
    2  the run failed while fragmenting
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import build_fragmenter, load_config
from ..exceptions import ConfigurationError, QuadSourceError
from .helpers import print_footer, print_header, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_RUN_ERROR = 2


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdf-fragmenter",
        description="Transform RDF quads and fragment them over output documents.",
    )
    parser.add_argument("config", help="Path to a JSON run configuration")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides the config's logging.level)",
    )
    parser.add_argument("--log-file", help="Log file path (overrides the config's logging.file)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run one fragmentation from a config file.

    Returns:
        Process exit code.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    logging_config = config.get('logging') or {}
    setup_logging(
        level=args.log_level or logging_config.get('level', 'INFO'),
        log_file=args.log_file or logging_config.get('file'),
    )

    try:
        fragmenter = build_fragmenter(config, base_dir=Path(args.config).resolve().parent)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG_ERROR

    try:
        fragmenter.fragment()
    except (ConfigurationError, QuadSourceError) as e:
        logger.error(f"Fragmentation aborted: {e}")
        return EXIT_CONFIG_ERROR
    except Exception as e:
        logger.exception(f"Fragmentation failed: {e}")
        return EXIT_RUN_ERROR

    print_header("FRAGMENTATION COMPLETE")
    print(f"Configuration: {args.config}")
    print_footer()
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
