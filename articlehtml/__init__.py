"""Article text to sanitized HTML converter."""

import argparse
import logging
from pathlib import Path
from typing import Optional

from articlehtml.batch import convert_files

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for articlehtml CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Convert article text or HTML to sanitized article HTML"
    )
    parser.add_argument(
        "source",
        help="article file (.md, .txt, .html), directory, or ZIP archive",
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default="html",
        help="output directory (default: html)",
    )
    parser.add_argument(
        "--display",
        action="store_true",
        help="also apply display sanitizing (hidden elements, font sizes)",
    )
    parser.add_argument(
        "--reference",
        action="append",
        default=[],
        metavar="URL",
        help="reference URL to cite after the content (repeatable)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="convert files but don't write output",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing output files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-error output",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show progress bar",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    try:
        return convert_files(
            source=source_path,
            destination=Path(args.destination),
            reference_urls=args.reference,
            display=args.display,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2
