"""batch conversion of Markdown files to HTML."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from mdextended.core.engine import ExtendedMarkdown
from mdextended.progress import ProgressHandler

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")


def discover_files(source: Path) -> list[Path]:
    """
    discovers Markdown files from source path.

    Args:
        source: path to a Markdown file or a directory of them

    Returns:
        sorted list of Markdown file paths

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        return [source] if source.suffix.lower() in MARKDOWN_SUFFIXES else []

    if source.is_dir():
        return sorted(
            p
            for p in source.iterdir()
            if p.is_file() and p.suffix.lower() in MARKDOWN_SUFFIXES
        )

    return []


def load_overrides(config_path: Path) -> dict[str, Any]:
    """
    reads a JSON object of option overrides.

    Raises:
        ValueError: if the file does not hold a JSON object
    """
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")
    return data


def output_path_for(file_path: Path, output_dir: Optional[Path]) -> Path:
    """returns the .html path for a source file."""
    target_dir = output_dir if output_dir is not None else file_path.parent
    return target_dir / f"{file_path.stem}.html"


def convert_documents(
    source: Path,
    output_dir: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
    dry_run: bool = False,
    overwrite: bool = False,
    toc_json: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    converts Markdown documents from source to HTML files.

    Args:
        source: Markdown file or directory
        output_dir: directory for HTML output (defaults to beside each source)
        overrides: nested option overrides for the engine
        dry_run: if True, render but don't write files
        overwrite: if True, replace existing HTML files
        toc_json: if True, also write NAME.toc.json with the TOC entries
        quiet: if True, suppress non-error output
        progress: if True, show progress bar

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    engine = ExtendedMarkdown(overrides)

    with ProgressHandler(quiet=quiet, show_progress=progress) as handler:
        handler.start_discovery()

        files = discover_files(source)
        if not files:
            handler.log_info(f"No Markdown files found in {source}")
            return 0

        handler.log_info(f"Found {len(files)} document(s) to convert")
        handler.set_total(len(files))

        if output_dir is not None and not dry_run:
            output_dir.mkdir(parents=True, exist_ok=True)

        for file_path in files:
            target = output_path_for(file_path, output_dir)
            if target.exists() and not overwrite and not dry_run:
                handler.record_skipped(file_path.name, target.name)
                continue

            _convert_file(engine, file_path, target, dry_run, toc_json, handler)

        return handler.finish()


def _convert_file(
    engine: ExtendedMarkdown,
    file_path: Path,
    target: Path,
    dry_run: bool,
    toc_json: bool,
    handler: ProgressHandler,
) -> None:
    """renders one file, writes its outputs and records the outcome."""
    try:
        text = file_path.read_text(encoding="utf-8")
        html = engine.render(text)

        if dry_run:
            logger.debug("dry run: would write %s", target)
        else:
            target.write_text(html, encoding="utf-8")
            if toc_json:
                target.with_suffix(".toc.json").write_text(
                    engine.contents_list("json"), encoding="utf-8"
                )

    except Exception as e:
        handler.record_failed(file_path.name, e)
        return

    handler.record_converted(file_path.name, target.name)
