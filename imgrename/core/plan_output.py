"""
plan_output.py - Output Plan Generation Module

Responsibilities:
- Map output entries to destination paths under the output roots
- Resolve duplicate final names within one run (auto add _1, _2...)
- Skip names that cannot be written
- Output OutputPlan

Files already present in an output directory are not renamed around: the
planned destination is the previewed name, and execute_plan() skips or
overwrites it.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple
from collections import defaultdict
import logging

from .models_fs import OutputEntry, OutputOptions, OutputPlan, normalize_for_comparison, output_path_for
from .rename_engine import OutputStatus
from .text_match import filename_problem

logger = logging.getLogger(__name__)

# Give up looking for a free `_n` suffix after this many attempts
MAX_CONFLICT_SUFFIX = 10000


class ConflictResolver:
    """Tracks names claimed per output directory during one planning run"""

    def __init__(self, case_insensitive: bool = True):
        self.case_insensitive = case_insensitive
        # key: directory path, value: claimed names (normalized)
        self.occupied: Dict[Path, Set[str]] = defaultdict(set)

    def _normalize(self, name: str) -> str:
        return normalize_for_comparison(name, self.case_insensitive)

    def is_occupied(self, directory: Path, name: str) -> bool:
        return self._normalize(name) in self.occupied[directory]

    def mark_occupied(self, directory: Path, name: str) -> None:
        self.occupied[directory].add(self._normalize(name))

    def resolve(self, directory: Path, desired_name: str) -> Tuple[str, bool]:
        """
        Claim a name in a directory

        Args:
            directory: Output directory
            desired_name: Final name from the preview

        Returns:
            (claimed name, whether it had to be suffixed)
        """
        if not self.is_occupied(directory, desired_name):
            self.mark_occupied(directory, desired_name)
            return desired_name, False

        stem = Path(desired_name).stem
        suffix = Path(desired_name).suffix

        for n in range(1, MAX_CONFLICT_SUFFIX + 1):
            candidate = f"{stem}_{n}{suffix}"
            if not self.is_occupied(directory, candidate):
                self.mark_occupied(directory, candidate)
                return candidate, True

        raise RuntimeError(f"Cannot find available name for {desired_name} (tried over {MAX_CONFLICT_SUFFIX} times)")
def plan_outputs(entries: Iterable[OutputEntry], options: Optional[OutputOptions] = None) -> OutputPlan:
    """
    Generate the plan for writing outputs

    Args:
        entries: Output entries (from the preview pipeline)
        options: Output options

    Returns:
        Output plan
    """
    if options is None:
        options = OutputOptions()

    plan = OutputPlan(options=options)
    resolver = ConflictResolver(case_insensitive=options.case_insensitive_detect)

    # Stable processing order so conflict suffixes are reproducible
    ordered: List[OutputEntry] = sorted(entries, key=lambda e: str(e.input.path).lower())

    for entry in ordered:
        if options.skip_too_long and entry.status is OutputStatus.TOO_LONG:
            plan.add_warning(f"Skip {entry.input.path}: name still too long ({len(entry.final_name)} characters)")
            continue

        problem = filename_problem(entry.final_name)
        if problem:
            plan.add_warning(f"Skip {entry.input.path}: {problem}")
            continue

        directory = output_path_for(entry).parent
        final_name, had_conflict = resolver.resolve(directory, entry.final_name)
        note = ""
        if had_conflict:
            note = f"conflict resolved: {entry.final_name} -> {final_name}"
            logger.debug("%s: %s", entry.input.path, note)

        plan.add_op(entry.input.path, directory / final_name, note)

    for error in validate_plan(plan):
        plan.add_error(error)
    return plan


def validate_plan(plan: OutputPlan) -> List[str]:
    """
    Validate an output plan before execution

    Returns:
        Error list
    """
    errors = []

    for op in plan.ops:
        if not op.src.exists():
            errors.append(f"Source file does not exist: {op.src}")

    dst_set: Dict[str, List[Path]] = defaultdict(list)
    for op in plan.ops:
        key = str(op.dst).lower() if plan.options.case_insensitive_detect else str(op.dst)
        dst_set[key].append(op.src)

    for dst_key, srcs in dst_set.items():
        if len(srcs) > 1:
            errors.append(f"Multiple files have the same destination: {srcs} -> {dst_key}")

    return errors
