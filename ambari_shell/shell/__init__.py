"""Command registry and interactive dispatch loop."""

from ambari_shell.shell.registry import (
    CommandOption,
    CommandRegistry,
    CommandSpec,
    build_registry,
)
from ambari_shell.shell.repl import (
    CommandParseError,
    dispatch,
    parse_options,
    run_script,
    run_shell,
)

__all__ = [
    "CommandOption",
    "CommandParseError",
    "CommandRegistry",
    "CommandSpec",
    "build_registry",
    "dispatch",
    "parse_options",
    "run_script",
    "run_shell",
]
