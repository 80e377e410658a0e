"""
pane_routing.py - Preview Pane Routing Policy

Decides whether a file click opens a new preview pane or reuses the last
pane of the same kind. The policy is a pure function over the current pane
list; PaneRouter is the single owner of a session's list.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Tuple
import threading


class PaneKind(Enum):
    INPUT = "input"
    OUTPUT = "output"


class ClickBehavior(Enum):
    """What a file click does to the preview panes"""
    OPEN_NEW_TILE = "open_new_tile"
    REPLACE_LAST_TILE = "replace_last_tile"


DEFAULT_CLICK_BEHAVIOR = ClickBehavior.REPLACE_LAST_TILE


@dataclass(frozen=True)
class Pane:
    kind: PaneKind
    source_path: Path


@dataclass(frozen=True)
class PaneDecision:
    """Append a new pane (replace_index is None) or replace the pane at replace_index"""
    replace_index: Optional[int] = None

    @property
    def is_append(self) -> bool:
        return self.replace_index is None


APPEND = PaneDecision()


def route_click(panes: Sequence[Pane], kind: PaneKind, behavior: ClickBehavior) -> PaneDecision:
    """
    Decide where a clicked file of the given kind is shown

    Args:
        panes: Current panes in display order
        kind: Kind of pane the click wants
        behavior: Configured click behavior

    Returns:
        Append, or replace the last pane of the same kind
    """
    if behavior is ClickBehavior.OPEN_NEW_TILE:
        return APPEND

    for index in range(len(panes) - 1, -1, -1):
        if panes[index].kind is kind:
            return PaneDecision(replace_index=index)
    return APPEND


def apply_decision(panes: Sequence[Pane], decision: PaneDecision, pane: Pane) -> Tuple[Pane, ...]:
    """Return the pane list after applying a decision (input is not modified)"""
    result = list(panes)
    if decision.is_append:
        result.append(pane)
    else:
        result[decision.replace_index] = pane
    return tuple(result)


class PaneRouter:
    """Owns the pane list of one session; click handling is serialized"""

    def __init__(self, behavior: ClickBehavior = DEFAULT_CLICK_BEHAVIOR):
        self.behavior = behavior
        self._panes: Tuple[Pane, ...] = ()
        self._lock = threading.Lock()

    @property
    def panes(self) -> Tuple[Pane, ...]:
        return self._panes

    def click(self, kind: PaneKind, source_path) -> PaneDecision:
        """Route a file click and update the pane list"""
        pane = Pane(kind=kind, source_path=Path(source_path))
        with self._lock:
            decision = route_click(self._panes, kind, self.behavior)
            self._panes = apply_decision(self._panes, decision, pane)
        return decision

    def close(self, index: int) -> Pane:
        with self._lock:
            panes = list(self._panes)
            closed = panes.pop(index)
            self._panes = tuple(panes)
        return closed

    def clear(self) -> None:
        with self._lock:
            self._panes = ()
