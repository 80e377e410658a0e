"""
inputs.py - Persisted Input Paths

Input paths are stored one per line in inputs.txt, resolved and deduplicated
"""

from pathlib import Path
from typing import Iterable, List
import glob
import logging

from .app_home import AppHome

logger = logging.getLogger(__name__)

INPUTS_FILE = "inputs.txt"


def load_inputs(home: AppHome) -> List[Path]:
    """Persisted input paths, in stored order"""
    path = home.file_path(INPUTS_FILE)
    if not path.exists():
        return []
    lines = path.read_text(encoding="utf-8").splitlines()
    return [Path(line.strip()) for line in lines if line.strip()]


def save_inputs(home: AppHome, paths: Iterable[Path]) -> None:
    home.ensure_dir()
    unique = sorted({Path(p) for p in paths}, key=str)
    text = "".join(f"{p}\n" for p in unique)
    home.file_path(INPUTS_FILE).write_text(text, encoding="utf-8")


def _expand(pattern: str) -> List[Path]:
    matches = glob.glob(str(Path(pattern).expanduser()), recursive=True)
    return [Path(m).resolve() for m in matches]


def add_from_glob(home: AppHome, pattern: str) -> List[Path]:
    """
    Add paths matched by a glob pattern

    Args:
        home: Application home
        pattern: Glob pattern (a plain path is a pattern matching itself)

    Returns:
        Newly added paths (no matches is not an error)
    """
    matched = set(_expand(pattern))
    if not matched:
        return []

    current = set(load_inputs(home))
    added = sorted(matched - current, key=str)
    if added:
        save_inputs(home, current | matched)
        logger.info("Added %d input path(s)", len(added))
    return added


def remove_from_glob(home: AppHome, pattern: str) -> List[Path]:
    """Remove persisted paths matched by a glob pattern, returning those removed"""
    # Stored paths may no longer exist on disk, so also compare the literal pattern
    targets = set(_expand(pattern))
    targets.add(Path(pattern).expanduser().resolve())

    current = set(load_inputs(home))
    removed = sorted(current & targets, key=str)
    if removed:
        save_inputs(home, current - set(removed))
        logger.info("Removed %d input path(s)", len(removed))
    return removed


def clear_inputs(home: AppHome) -> int:
    count = len(load_inputs(home))
    save_inputs(home, [])
    return count
