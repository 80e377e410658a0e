"""Unit tests for preview pane routing."""

from pathlib import Path

import pytest

from imgrename.core import (
    ClickBehavior,
    DEFAULT_CLICK_BEHAVIOR,
    Pane,
    PaneDecision,
    PaneKind,
    PaneRouter,
    apply_decision,
    route_click,
)

INPUT = PaneKind.INPUT
OUTPUT = PaneKind.OUTPUT


def pane(kind, name="a.png"):
    return Pane(kind=kind, source_path=Path(name))


class TestRouteClick:
    """Tests for route_click."""

    def test_empty_panes_append(self):
        decision = route_click((), INPUT, ClickBehavior.REPLACE_LAST_TILE)

        assert decision.is_append

    def test_replaces_last_pane_of_same_kind(self):
        panes = (pane(INPUT), pane(OUTPUT), pane(INPUT), pane(OUTPUT))

        assert route_click(panes, INPUT, ClickBehavior.REPLACE_LAST_TILE) == PaneDecision(2)
        assert route_click(panes, OUTPUT, ClickBehavior.REPLACE_LAST_TILE) == PaneDecision(3)

    def test_appends_when_no_pane_of_kind(self):
        panes = (pane(INPUT), pane(INPUT))

        assert route_click(panes, OUTPUT, ClickBehavior.REPLACE_LAST_TILE).is_append

    @pytest.mark.parametrize("kind", [INPUT, OUTPUT])
    def test_open_new_tile_always_appends(self, kind):
        panes = (pane(INPUT), pane(OUTPUT))

        assert route_click(panes, kind, ClickBehavior.OPEN_NEW_TILE).is_append

    def test_default_behavior(self):
        assert DEFAULT_CLICK_BEHAVIOR is ClickBehavior.REPLACE_LAST_TILE


class TestApplyDecision:
    """Tests for apply_decision."""

    def test_append(self):
        new = pane(OUTPUT, "b.png")

        result = apply_decision((pane(INPUT),), PaneDecision(), new)

        assert result == (pane(INPUT), new)

    def test_replace_keeps_position(self):
        panes = (pane(INPUT, "a.png"), pane(OUTPUT, "b.png"))
        new = pane(INPUT, "c.png")

        result = apply_decision(panes, PaneDecision(0), new)

        assert result == (new, pane(OUTPUT, "b.png"))
        assert panes[0] == pane(INPUT, "a.png")


class TestPaneRouter:
    """Tests for PaneRouter."""

    def test_click_sequence_with_replace_last_tile(self):
        router = PaneRouter(ClickBehavior.REPLACE_LAST_TILE)

        assert router.click(INPUT, "in1.png").is_append
        assert router.click(OUTPUT, "out1.png").is_append
        assert router.click(INPUT, "in2.png") == PaneDecision(0)

        assert router.panes == (
            Pane(INPUT, Path("in2.png")),
            Pane(OUTPUT, Path("out1.png")),
        )

    def test_click_sequence_with_open_new_tile(self):
        router = PaneRouter(ClickBehavior.OPEN_NEW_TILE)

        for name in ("a.png", "b.png", "c.png"):
            router.click(INPUT, name)

        assert [p.source_path.name for p in router.panes] == ["a.png", "b.png", "c.png"]

    def test_behavior_change_applies_to_next_click(self):
        router = PaneRouter(ClickBehavior.OPEN_NEW_TILE)
        router.click(INPUT, "a.png")
        router.click(INPUT, "b.png")

        router.behavior = ClickBehavior.REPLACE_LAST_TILE
        decision = router.click(INPUT, "c.png")

        assert decision == PaneDecision(1)
        assert [p.source_path.name for p in router.panes] == ["a.png", "c.png"]

    def test_close_and_clear(self):
        router = PaneRouter()
        router.click(INPUT, "a.png")
        router.click(OUTPUT, "b.png")

        closed = router.close(0)

        assert closed.source_path == Path("a.png")
        assert router.panes == (Pane(OUTPUT, Path("b.png")),)

        router.clear()
        assert router.panes == ()

    def test_close_then_click_appends(self):
        router = PaneRouter()
        router.click(INPUT, "a.png")
        router.close(0)

        assert router.click(INPUT, "b.png").is_append
