"""
output_preview.py - Output Preview Pipeline

Responsibilities:
- Run the rename engine and classifier over every input entry
- Group results by input root and build a directory tree for display
- Cache the latest completed snapshot and rebuild it when inputs, rules or
  the length limit change
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import threading

from .models_fs import InputEntry, OutputEntry
from .models_rules import RenameRule, RuleSet
from .rename_engine import OutputStatus, apply_rules, classify

logger = logging.getLogger(__name__)


def build_output_entry(entry: InputEntry, rules: Sequence[RenameRule], max_length: int) -> OutputEntry:
    final_name = apply_rules(entry.name, rules, max_length)
    return OutputEntry(
        input=entry,
        final_name=final_name,
        status=classify(entry.name, final_name, max_length),
    )


def build_output_entries(
    inputs: Iterable[InputEntry],
    rules: Sequence[RenameRule],
    max_length: int,
    rules_enabled: bool = True,
    workers: Optional[int] = None
) -> Tuple[OutputEntry, ...]:
    """
    Compute the output entry for every input

    Args:
        inputs: Discovered input entries
        rules: Ordered rules
        max_length: Length limit in characters
        rules_enabled: When False every name passes through unchanged
            (it is still classified against the limit)
        workers: Evaluate entries on a thread pool of this size

    Returns:
        Output entries in input order
    """
    inputs = list(inputs)
    active = tuple(rules) if rules_enabled else ()

    if workers and workers > 1 and len(inputs) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return tuple(pool.map(lambda e: build_output_entry(e, active, max_length), inputs))

    return tuple(build_output_entry(e, active, max_length) for e in inputs)


def group_by_root(entries: Iterable[OutputEntry]) -> List[Tuple[Path, List[OutputEntry]]]:
    """
    Group entries by input root (first-seen root order), each group sorted
    by final relative path
    """
    groups: Dict[Path, List[OutputEntry]] = {}
    for entry in entries:
        groups.setdefault(entry.input.root, []).append(entry)

    return [
        (root, sorted(items, key=lambda e: str(e.final_relative_path)))
        for root, items in groups.items()
    ]


@dataclass
class OutputTreeNode:
    """Directory (children) or file (entry) in the output tree"""
    name: str
    children: Dict[str, "OutputTreeNode"] = field(default_factory=dict)
    entry: Optional[OutputEntry] = None

    @property
    def is_file(self) -> bool:
        return self.entry is not None

    def sorted_children(self) -> List["OutputTreeNode"]:
        # Directories first, then files, each alphabetical
        return sorted(self.children.values(), key=lambda n: (n.is_file, n.name.lower()))

    def walk(self, depth: int = 0):
        """Yield (depth, node) for every descendant in display order"""
        for child in self.sorted_children():
            yield depth, child
            yield from child.walk(depth + 1)


def build_output_tree(root: Path, entries: Iterable[OutputEntry]) -> OutputTreeNode:
    """
    Build a tree mirroring the input directory structure, leaves named by
    final name

    Two inputs renamed to the same final name in one directory keep separate
    leaves (the second is keyed with its original name) so neither is hidden.
    """
    tree = OutputTreeNode(name=str(root))
    for entry in entries:
        node = tree
        for part in entry.input.relative_path.parent.parts:
            node = node.children.setdefault(part, OutputTreeNode(name=part))

        key = entry.final_name
        if key in node.children:
            key = f"{entry.final_name}\0{entry.original_name}"
        node.children[key] = OutputTreeNode(name=entry.final_name, entry=entry)
    return tree


@dataclass(frozen=True)
class OutputSnapshot:
    """Immutable result of one full recomputation"""
    entries: Tuple[OutputEntry, ...] = ()
    max_length: int = 0
    rules_revision: int = 0

    def count(self, status: OutputStatus) -> int:
        return sum(1 for e in self.entries if e.status is status)

    def counts(self) -> Dict[OutputStatus, int]:
        return {status: self.count(status) for status in OutputStatus}

    def grouped(self) -> List[Tuple[Path, List[OutputEntry]]]:
        return group_by_root(self.entries)

    def find(self, input_path: Path) -> Optional[OutputEntry]:
        """Output entry for an input file path"""
        for e in self.entries:
            if e.input.path == input_path:
                return e
        return None


class PreviewCache:
    """
    Holds the latest completed OutputSnapshot

    get() rebuilds under a lock when anything the snapshot depends on has
    changed since it was built, so callers never see output computed from a
    superseded rule set.
    """

    def __init__(self, workers: Optional[int] = None):
        self.workers = workers
        self._lock = threading.Lock()
        self._key = None
        self._snapshot = OutputSnapshot()

    def get(
        self,
        inputs: Sequence[InputEntry],
        rules: RuleSet,
        max_length: int,
        rules_enabled: bool = True
    ) -> OutputSnapshot:
        with self._lock:
            rule_snapshot = rules.snapshot()
            key = (tuple(inputs), rule_snapshot, max_length, rules_enabled)
            if key != self._key:
                entries = build_output_entries(
                    inputs, rule_snapshot, max_length,
                    rules_enabled=rules_enabled, workers=self.workers,
                )
                self._snapshot = OutputSnapshot(
                    entries=entries,
                    max_length=max_length,
                    rules_revision=rules.revision,
                )
                self._key = key
                logger.debug("Rebuilt output preview: %d entries", len(entries))
            return self._snapshot
