"""
models_fs.py - File Data Structures

Contains:
- InputEntry: Discovered input file
- OutputEntry: Derived final name and status for one input
- CopyOp: Single output write operation
- OutputPlan: Batch of output write operations
- OutputOptions: Materialization options
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import List
import platform

from .rename_engine import OutputStatus

OUTPUT_DIR_SUFFIX = "-output"


@dataclass(frozen=True)
class InputEntry:
    """File discovered under an input root"""
    root: Path                      # Input path the file was discovered under
    path: Path                      # Full path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def relative_path(self) -> PurePath:
        try:
            return self.path.relative_to(self.root)
        except ValueError:
            return PurePath(self.path.name)


@dataclass(frozen=True)
class OutputEntry:
    """Derived output for one input, rebuilt from scratch on every change"""
    input: InputEntry
    final_name: str
    status: OutputStatus

    @property
    def original_name(self) -> str:
        return self.input.name

    @property
    def original_relative_path(self) -> PurePath:
        return self.input.relative_path

    @property
    def final_relative_path(self) -> PurePath:
        """Relative path with the final name, same directory as the original"""
        return self.input.relative_path.parent / self.final_name

    @property
    def was_renamed(self) -> bool:
        return self.final_name != self.original_name


def output_dir_for(root: Path) -> Path:
    """Sibling directory mirroring an input root: photos -> photos-output"""
    return root.with_name(f"{root.name}{OUTPUT_DIR_SUFFIX}")


def output_path_for(entry: OutputEntry) -> Path:
    """Where the output for an entry is written"""
    relative_parent = entry.input.relative_path.parent
    return output_dir_for(entry.input.root) / relative_parent / entry.final_name


@dataclass
class CopyOp:
    """Single output write operation"""
    src: Path                       # Input file
    dst: Path                       # Output file
    note: str = ""                  # e.g. conflict resolution explanation


@dataclass
class OutputOptions:
    """Output materialization options"""
    # Case-insensitive conflict detection (Windows/macOS default to insensitive)
    case_insensitive_detect: bool = field(default_factory=lambda: platform.system() in ("Windows", "Darwin"))

    skip_too_long: bool = False     # Do not write outputs whose name is still too long
    overwrite: bool = False         # Overwrite files already present in the output directory
    dry_run: bool = False           # Preview only, do not actually write


@dataclass
class OutputPlan:
    """Batch of output write operations"""
    ops: List[CopyOp] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    options: OutputOptions = field(default_factory=OutputOptions)

    @property
    def conflict_count(self) -> int:
        return sum(1 for op in self.ops if op.note.startswith("conflict resolved"))

    @property
    def total_count(self) -> int:
        return len(self.ops)

    @property
    def existing_count(self) -> int:
        """Planned destinations already present on disk"""
        return sum(1 for op in self.ops if op.dst.exists())

    def add_op(self, src: Path, dst: Path, note: str = "") -> None:
        self.ops.append(CopyOp(src=src, dst=dst, note=note))

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
