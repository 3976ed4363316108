"""Tests for ambari_shell.state: focus model, context guards and prompt."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ambari_shell.state.context import ShellContext
from ambari_shell.state.models import Focus, FocusType


# ── Focus model ──────────────────────────────────────────────────────────


class TestFocusModel:
    def test_default_is_none(self):
        focus = Focus()
        assert focus.state == FocusType.NONE
        assert focus.value is None

    def test_building_factory(self):
        focus = Focus.building("bp1")
        assert focus.state == FocusType.BUILDING
        assert focus.value == "bp1"
        assert focus.is_building
        assert not focus.is_connected

    def test_connected_factory(self):
        focus = Focus.connected("bp1")
        assert focus.is_connected
        assert focus.value == "bp1"

    def test_none_with_value_rejected(self):
        with pytest.raises(ValidationError, match="must be empty"):
            Focus(state=FocusType.NONE, value="bp1")

    def test_building_without_value_rejected(self):
        with pytest.raises(ValidationError, match="is required"):
            Focus(state=FocusType.BUILDING)

    def test_connected_with_empty_value_rejected(self):
        with pytest.raises(ValidationError):
            Focus(state=FocusType.CONNECTED, value="")

    def test_frozen(self):
        focus = Focus.building("bp1")
        with pytest.raises(ValidationError):
            focus.value = "other"

    def test_enum_values(self):
        assert [t.value for t in FocusType] == ["NONE", "BUILDING", "CONNECTED"]


# ── ShellContext transitions ─────────────────────────────────────────────


class TestShellContextTransitions:
    def test_starts_unfocused(self):
        ctx = ShellContext()
        assert ctx.focus == Focus.none()
        assert ctx.assignments is None

    def test_focus_blueprint(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        assert ctx.focus == Focus.building("bp1")

    def test_connect_keeps_value_and_drops_store(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        ctx.reset_assignments({"master"})
        ctx.connect_cluster()
        assert ctx.focus == Focus.connected("bp1")
        assert ctx.assignments is None

    def test_reset_focus(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        ctx.connect_cluster()
        ctx.reset_focus()
        assert ctx.focus.state == FocusType.NONE
        assert ctx.focus.value is None

    def test_reset_assignments_is_fresh(self):
        ctx = ShellContext()
        first = ctx.reset_assignments({"master"})
        first.assign("h1", "master")
        second = ctx.reset_assignments({"master"})
        assert second is not first
        assert second.snapshot() == {"master": []}


# ── Guards ───────────────────────────────────────────────────────────────


class TestGuards:
    def _guards(self, ctx):
        return (
            ctx.can_build(),
            ctx.can_assign_or_preview(),
            ctx.can_create(),
            ctx.can_delete(),
        )

    def test_none(self):
        assert self._guards(ShellContext()) == (True, False, False, False)

    def test_building(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        assert self._guards(ctx) == (False, True, True, False)

    def test_connected(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        ctx.connect_cluster()
        assert self._guards(ctx) == (False, False, False, True)


# ── Prompt ───────────────────────────────────────────────────────────────


class TestPrompt:
    def test_default_prompt(self):
        assert ShellContext().prompt() == "ambari-shell>"

    def test_custom_prompt_name(self):
        assert ShellContext(prompt_name="prod").prompt() == "prod>"

    def test_building_prompt(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        assert ctx.prompt() == "blueprint:bp1>"

    def test_connected_prompt(self):
        ctx = ShellContext()
        ctx.focus_blueprint("bp1")
        ctx.connect_cluster()
        assert ctx.prompt() == "cluster:bp1>"
