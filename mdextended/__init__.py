"""Extended Markdown to HTML renderer."""

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

from mdextended.convert import convert_documents, load_overrides
from mdextended.core.engine import ExtendedMarkdown

__all__ = ["ExtendedMarkdown", "main"]

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for mdextended CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Convert extended Markdown documents to HTML"
    )
    parser.add_argument(
        "source",
        help="Markdown file or directory of Markdown files",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="DIR",
        help="directory for HTML files (default: beside each source file)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="JSON file with option overrides",
    )
    parser.add_argument(
        "--toc-json",
        action="store_true",
        help="also write NAME.toc.json with table of contents entries",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="render documents but don't write any files",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing HTML files",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show progress bar",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="suppress non-error output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
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

    overrides: Optional[dict[str, Any]] = None
    if args.config:
        try:
            overrides = load_overrides(Path(args.config))
        except (OSError, ValueError) as e:
            logger.error("Invalid config file %s: %s", args.config, e)
            return 2

    try:
        return convert_documents(
            source=source_path,
            output_dir=Path(args.output) if args.output else None,
            overrides=overrides,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            toc_json=args.toc_json,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:
        logger.error("Fatal error: %s", e)
        return 2
