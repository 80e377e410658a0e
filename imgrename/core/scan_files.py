"""
scan_files.py - Input Discovery Module

Finds image files under the configured input paths
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set
import logging
import os

from .models_fs import InputEntry, output_dir_for

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tiff"})

DEFAULT_IGNORE_DIRS = (".git", "__pycache__", "node_modules")


def is_image_file(path: Path) -> bool:
    """Check by suffix (case-insensitive)"""
    return path.suffix.lower() in IMAGE_SUFFIXES


def scan_recursive(
    root: Path,
    include_hidden: bool = False,
    ignore_dirs: Optional[Iterable[str]] = None,
    exclude_paths: Optional[Iterable[Path]] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[InputEntry]:
    """
    Recursively scan a directory for image files

    Args:
        root: Root directory
        include_hidden: Whether to include hidden files and directories
        ignore_dirs: Directory names to skip
        exclude_paths: Directories to skip by full path, typically the output
            roots of other inputs nested under this one
        progress_callback: Progress callback function

    Returns:
        Discovered entries, sorted by path
    """
    ignored = set(DEFAULT_IGNORE_DIRS if ignore_dirs is None else ignore_dirs)

    root = Path(root).resolve()
    if not root.is_dir():
        raise ValueError(f"Directory does not exist: {root}")

    excluded: Set[Path] = {Path(p).resolve() for p in exclude_paths or ()}

    results: List[InputEntry] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)

        # Modifying dirnames in place prevents os.walk from entering these directories
        dirnames[:] = [
            d for d in dirnames
            if d not in ignored
            and current_dir / d not in excluded
            and (include_hidden or not d.startswith('.'))
        ]

        for filename in filenames:
            if not include_hidden and filename.startswith('.'):
                continue

            filepath = current_dir / filename
            if not is_image_file(filepath):
                continue

            if progress_callback:
                progress_callback(str(filepath))

            results.append(InputEntry(root=root, path=filepath))

    results.sort(key=lambda e: str(e.path))
    return results


def discover_inputs(
    input_paths: Iterable[Path],
    include_hidden: bool = False,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[InputEntry]:
    """
    Discover image files for every input path

    Directories are scanned recursively. A path naming a single image file
    becomes an entry rooted at its parent directory. Missing paths are
    logged and skipped. The output directory of every input root is left
    out, so written outputs are not fed back in when one input is nested
    inside another.

    Args:
        input_paths: Persisted input paths, in display order
        include_hidden: Whether to include hidden files
        progress_callback: Progress callback function

    Returns:
        Entries grouped by input path order
    """
    entries: List[InputEntry] = []
    seen = set()

    paths = [Path(raw).resolve() for raw in input_paths]
    output_roots = {output_dir_for(p if p.is_dir() else p.parent) for p in paths}

    for path in paths:
        if path.is_dir():
            found = scan_recursive(
                path,
                include_hidden=include_hidden,
                exclude_paths=output_roots,
                progress_callback=progress_callback,
            )
        elif path.is_file():
            if not is_image_file(path):
                logger.debug("Skipping non-image input %s", path)
                continue
            found = [InputEntry(root=path.parent, path=path)]
        else:
            logger.warning("Input path does not exist: %s", path)
            continue

        for entry in found:
            # Same file reachable from two inputs: first input wins
            if entry.path in seen:
                continue
            seen.add(entry.path)
            entries.append(entry)

    logger.debug("Discovered %d image files", len(entries))
    return entries
