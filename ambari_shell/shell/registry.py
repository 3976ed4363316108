"""Explicit command registry.

Each command is a :class:`CommandSpec`: a name (possibly several words,
e.g. ``cluster build``), an availability guard evaluated before every
offer or execution, a handler receiving the parsed options, and the
option declarations used by the dispatcher.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ambari_shell.state.context import ShellContext
from ambari_shell.ui import render_multi_value_map
from ambari_shell.workflow.cluster_build import ClusterBuildWorkflow

logger = logging.getLogger(__name__)

Guard = Callable[[], bool]
Handler = Callable[[Dict[str, str]], str]


def always() -> bool:
    return True


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CommandOption:
    """A ``--key value`` option accepted by a command."""

    key: str
    help: str = ""
    required: bool = True


@dataclass(frozen=True)
class CommandSpec:
    """A registered shell command."""

    name: str
    handler: Handler
    guard: Guard = always
    options: Tuple[CommandOption, ...] = ()
    help: str = ""

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(self.name.split())

    def option(self, key: str) -> Optional[CommandOption]:
        for opt in self.options:
            if opt.key == key:
                return opt
        return None

    def is_available(self) -> bool:
        return bool(self.guard())

    def usage(self) -> str:
        parts = [self.name]
        for opt in self.options:
            token = f"--{opt.key} <{opt.key}>"
            parts.append(token if opt.required else f"[{token}]")
        return " ".join(parts)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass
class CommandRegistry:
    """Name → :class:`CommandSpec` mapping, in registration order."""

    _commands: Dict[str, CommandSpec] = field(default_factory=dict)

    def register(self, spec: CommandSpec) -> CommandSpec:
        if spec.name in self._commands:
            raise ValueError(f"Command '{spec.name}' is already registered")
        self._commands[spec.name] = spec
        return spec

    def get(self, name: str) -> Optional[CommandSpec]:
        return self._commands.get(name)

    def names(self) -> List[str]:
        return list(self._commands)

    def available(self) -> List[CommandSpec]:
        """Commands whose guard passes right now."""
        return [spec for spec in self._commands.values() if spec.is_available()]

    def match(self, tokens: Sequence[str]) -> Tuple[Optional[CommandSpec], List[str]]:
        """Find the longest command name that prefixes *tokens*.

        Returns the spec (or ``None``) and the tokens left after the name.
        """
        best: Optional[CommandSpec] = None
        for spec in self._commands.values():
            words = spec.words
            if tuple(tokens[: len(words)]) != words:
                continue
            if best is None or len(words) > len(best.words):
                best = spec
        if best is None:
            return None, list(tokens)
        return best, list(tokens[len(best.words):])

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


# ---------------------------------------------------------------------------
# Default command set
# ---------------------------------------------------------------------------


def _lines(items: Sequence[str], empty: str) -> str:
    return "\n".join(items) if items else empty


def build_registry(workflow: ClusterBuildWorkflow) -> CommandRegistry:
    """Register the cluster, blueprint and host commands for one session."""
    ctx: ShellContext = workflow.context
    client = workflow.client
    registry = CommandRegistry()

    registry.register(CommandSpec(
        name="cluster build",
        handler=lambda opts: workflow.start_build(opts["blueprint"]),
        guard=ctx.can_build,
        options=(
            CommandOption(
                "blueprint",
                help="Id of the blueprint, use 'blueprints' command to see the list",
            ),
        ),
        help="Starts to build a cluster",
    ))
    registry.register(CommandSpec(
        name="cluster assign",
        handler=lambda opts: workflow.assign_host(opts["host"], opts["hostGroup"]),
        guard=ctx.can_assign_or_preview,
        options=(
            CommandOption("host", help="Fully qualified host name"),
            CommandOption("hostGroup", help="Host group which to assign the host"),
        ),
        help="Assign host to host group",
    ))
    registry.register(CommandSpec(
        name="cluster preview",
        handler=lambda opts: render_multi_value_map(
            workflow.preview_assignments(), "HOSTGROUP", "HOST",
        ),
        guard=ctx.can_assign_or_preview,
        help="Shows the currently assigned hosts",
    ))
    registry.register(CommandSpec(
        name="cluster create",
        handler=lambda opts: workflow.create_cluster(),
        guard=ctx.can_create,
        help="Create a cluster based on current blueprint and assigned hosts",
    ))
    registry.register(CommandSpec(
        name="cluster delete",
        handler=lambda opts: workflow.delete_cluster(),
        guard=ctx.can_delete,
        help="Delete the cluster",
    ))
    registry.register(CommandSpec(
        name="blueprints",
        handler=lambda opts: _lines(client.blueprint_ids(), "No blueprints available"),
        help="Lists the available blueprints",
    ))
    registry.register(CommandSpec(
        name="hosts",
        handler=lambda opts: _lines(client.host_names(), "No hosts available"),
        help="Lists the hosts registered with the server",
    ))

    logger.debug("Registered commands: %s", ", ".join(registry.names()))
    return registry
