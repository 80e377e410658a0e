"""
exec_output.py - Output Execution Module

Copies each input to its destination under the output root. Inputs are only
ever read; a failure on one file is recorded and the batch continues.
"""

from pathlib import Path
from typing import Callable, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import datetime
import json
import logging
import shutil

from .models_fs import OutputPlan, CopyOp

logger = logging.getLogger(__name__)

# Failures listed in summary() before the rest are counted
MAX_LISTED_FAILURES = 10

ProgressCallback = Callable[[int, int, str], None]


@dataclass
class OutputResult:
    """Outcome of writing an output plan"""
    success: List[CopyOp] = field(default_factory=list)
    failed: List[Tuple[CopyOp, str]] = field(default_factory=list)  # (op, reason)
    skipped: List[CopyOp] = field(default_factory=list)            # destination already present

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def summary(self) -> str:
        lines = [
            "Execution Result:",
            f"  - Written: {self.success_count}",
            f"  - Failed: {self.failed_count}",
            f"  - Skipped: {self.skipped_count}",
        ]
        if self.failed:
            lines.append("Failure Details:")
            lines.extend(
                f"  - {op.src.name} -> {op.dst}: {reason}"
                for op, reason in self.failed[:MAX_LISTED_FAILURES]
            )
            hidden = self.failed_count - MAX_LISTED_FAILURES
            if hidden > 0:
                lines.append(f"  ... and {hidden} more failures")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "success_count": self.success_count,
            "failed_count": self.failed_count,
            "skipped_count": self.skipped_count,
            "success": [{"src": str(op.src), "dst": str(op.dst), "note": op.note} for op in self.success],
            "failed": [{"src": str(op.src), "dst": str(op.dst), "error": reason} for op, reason in self.failed],
            "skipped": [{"src": str(op.src), "dst": str(op.dst)} for op in self.skipped],
        }


def _copy_one(op: CopyOp, overwrite: bool) -> Optional[str]:
    """
    Copy a single input to its destination

    Returns:
        None when written, "skipped" when the destination exists and may not
        be overwritten, otherwise the failure reason
    """
    if not op.src.is_file():
        return "Source file does not exist"
    if op.dst.exists() and not overwrite:
        return "skipped"
    try:
        op.dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(op.src, op.dst)
    except OSError as e:
        logger.warning("Failed to write %s: %s", op.dst, e)
        return str(e)
    return None


def execute_plan(
    plan: OutputPlan,
    dry_run: Optional[bool] = None,
    progress_callback: Optional[ProgressCallback] = None,
    log_dir: Optional[Path] = None
) -> OutputResult:
    """
    Write every planned output

    Args:
        plan: Output plan
        dry_run: Report what would be written without touching disk
            (defaults to plan.options.dry_run)
        progress_callback: Progress callback (current, total, message)
        log_dir: Directory for the JSON execution log

    Returns:
        Execution result
    """
    if dry_run is None:
        dry_run = plan.options.dry_run

    result = OutputResult()
    total = plan.total_count
    prefix = "[Preview] " if dry_run else ""

    for i, op in enumerate(plan.ops, 1):
        if progress_callback:
            progress_callback(i, total, f"{prefix}{op.src.name} -> {op.dst.name}")

        if dry_run:
            result.success.append(op)
            continue

        outcome = _copy_one(op, plan.options.overwrite)
        if outcome is None:
            result.success.append(op)
        elif outcome == "skipped":
            result.skipped.append(op)
        else:
            result.failed.append((op, outcome))

    if total:
        logger.info(
            "%sWrote %d of %d outputs (%d failed, %d skipped)",
            prefix, result.success_count, total, result.failed_count, result.skipped_count,
        )
    if log_dir and total and not dry_run:
        save_result_log(result, log_dir)

    return result


def save_result_log(result: OutputResult, log_dir: Path) -> Path:
    """Write the result as output_result_<timestamp>.json under log_dir"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"output_result_{timestamp}.json"

    data = {"timestamp": timestamp, **result.to_dict()}
    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    logger.debug("Wrote execution log %s", log_file)
    return log_file
