"""Batch module for converting article files to HTML."""

import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Optional

from articlehtml.pipeline import append_citations, finalize_content
from articlehtml.progress import ProgressHandler
from articlehtml.sanitizers.display import sanitize_for_display

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".md", ".markdown", ".txt", ".html", ".htm")


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers article files from source path.

    Args:
        source: path to an article file, directory, or ZIP archive
        extract_dir: directory ZIP members are unpacked into; the caller
            owns it and removes it when done

    Returns:
        list of paths to article files

    Raises:
        FileNotFoundError: if source doesn't exist
        ValueError: if source is a ZIP archive and no extract_dir is given
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if source.suffix == ".zip":
            if extract_dir is None:
                raise ValueError(f"No extract directory for archive: {source}")
            return _extract_zip(source, extract_dir)
        if source.suffix in SOURCE_SUFFIXES:
            return [source]
        return []

    if source.is_dir():
        return sorted(p for p in source.iterdir() if p.suffix in SOURCE_SUFFIXES)

    return []


def _extract_zip(zip_path: Path, extract_dir: Path) -> list[Path]:
    """unpacks article members of a ZIP archive flat into extract_dir."""
    with zipfile.ZipFile(zip_path, "r") as archive:
        members = [
            info
            for info in archive.infolist()
            if not info.is_dir() and info.filename.endswith(SOURCE_SUFFIXES)
        ]
        for info in members:
            # member directories are dropped so nothing lands outside extract_dir
            (extract_dir / Path(info.filename).name).write_bytes(archive.read(info))

    return sorted(p for p in extract_dir.iterdir() if p.suffix in SOURCE_SUFFIXES)


def render_document(
    text: str,
    reference_urls: Optional[list[str]] = None,
    display: bool = False,
) -> str:
    """
    renders one document to publishable HTML.

    Args:
        text: markdown-ish text or HTML
        reference_urls: URLs to cite after the content
        display: if True, also apply the display sanitizer

    Returns:
        HTML string
    """
    html = append_citations(finalize_content(text), reference_urls or [])
    return sanitize_for_display(html) if display else html


def convert_files(
    source: Path,
    destination: Path,
    reference_urls: Optional[list[str]] = None,
    display: bool = False,
    dry_run: bool = False,
    overwrite: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    converts article files from source into HTML files in destination.

    ZIP sources are unpacked into a temporary directory that is removed
    once the batch finishes.

    Args:
        source: path to article file, directory, or ZIP archive
        destination: output directory
        reference_urls: URLs to cite after each document
        display: if True, also apply the display sanitizer
        dry_run: if True, don't write any files
        overwrite: if True, replace existing output files
        quiet: if True, suppress non-error output
        progress: if True, show progress bar

    Returns:
        exit code (0 success, 1 partial failure)
    """
    with tempfile.TemporaryDirectory(prefix="articlehtml_") as temp_dir, ProgressHandler(
        quiet=quiet, show_progress=progress
    ) as handler:
        handler.start_discovery()

        files = discover_files(source, Path(temp_dir))
        if not files:
            handler.log_info(f"No article files found in {source}")
            return 0

        handler.log_info(f"Found {len(files)} file(s) to convert")
        handler.set_total(len(files))

        processed = 0
        failed = 0
        for file_path in files:
            if _convert_file(
                file_path,
                destination,
                reference_urls,
                display,
                dry_run,
                overwrite,
                handler,
            ):
                processed += 1
            else:
                failed += 1

        handler.finish(processed, failed)

        if failed > 0:
            return 1
        return 0


def _convert_file(
    file_path: Path,
    destination: Path,
    reference_urls: Optional[list[str]],
    display: bool,
    dry_run: bool,
    overwrite: bool,
    handler: ProgressHandler,
) -> bool:
    """
    converts a single file.

    Args:
        file_path: path to the article file
        destination: output directory
        reference_urls: URLs to cite after the content
        display: if True, also apply the display sanitizer
        dry_run: if True, don't write the output
        overwrite: if True, replace an existing output file
        handler: progress handler

    Returns:
        True on success (skipped files count as success)
    """
    output_path = destination / f"{file_path.stem}.html"
    try:
        text = file_path.read_text(encoding="utf-8")
        html = render_document(text, reference_urls, display)
        handler.update(file_path.name)

        if dry_run:
            handler.log_info(f"Would write to: {output_path}")
            return True

        if output_path.exists() and not overwrite:
            handler.log_info(f"Skipping existing file: {output_path}")
            return True

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.debug("Wrote %s", output_path)
        return True

    except (OSError, UnicodeDecodeError) as e:
        handler.log_error(f"Failed: {file_path.name}: {e}")
        handler.update(file_path.name)
        return False
