"""Line parsing, dispatch and the interactive loop.

A line such as::

    cluster assign --host node1.example.com --hostGroup master

is split with :mod:`shlex`, matched against the registry by its longest
command-name prefix, and the remaining ``--key value`` / ``--key=value``
tokens are checked against the command's declared options before the
handler runs.  Guards are evaluated at dispatch time, never cached.
"""

from __future__ import annotations

import logging
import shlex
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ambari_shell import ui
from ambari_shell.ambari.client import AmbariClientError
from ambari_shell.shell.registry import CommandRegistry, CommandSpec
from ambari_shell.state.context import ShellContext

logger = logging.getLogger(__name__)

EXIT_WORDS = frozenset({"exit", "quit"})
HELP_WORD = "help"

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class CommandParseError(ValueError):
    """Raised when a command line cannot be turned into options."""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def tokenize(line: str) -> List[str]:
    try:
        return shlex.split(line, comments=True)
    except ValueError as exc:
        raise CommandParseError(f"Cannot parse command line: {exc}") from exc


def parse_options(spec: CommandSpec, tokens: Sequence[str]) -> Dict[str, str]:
    """Turn ``--key value`` tokens into a dict and check required options."""
    options: Dict[str, str] = {}
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        if not token.startswith("--") or token == "--":
            raise CommandParseError(f"Unexpected argument '{token}' for '{spec.name}'")
        key, sep, value = token[2:].partition("=")
        if spec.option(key) is None:
            raise CommandParseError(f"Unknown option '--{key}' for '{spec.name}'")
        if not sep:
            idx += 1
            if idx >= len(tokens) or tokens[idx].startswith("--"):
                raise CommandParseError(f"Option '--{key}' requires a value")
            value = tokens[idx]
        if not value.strip():
            raise CommandParseError(f"Option '--{key}' requires a non-empty value")
        options[key] = value
        idx += 1

    missing = [o.key for o in spec.options if o.required and o.key not in options]
    if missing:
        raise CommandParseError(
            "Missing required option(s): " + ", ".join(f"--{k}" for k in missing)
        )
    return options


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def render_help(registry: CommandRegistry) -> str:
    """List the commands available in the current state."""
    lines = ["Available commands:"]
    for spec in registry.available():
        lines.append(f"  {spec.usage():<50} {spec.help}")
    lines.append(f"  {HELP_WORD:<50} Lists the available commands")
    lines.append(f"  {'exit':<50} Leaves the shell")
    return "\n".join(lines)


def dispatch(registry: CommandRegistry, line: str) -> str:
    """Execute one command line and return its status text.

    Syntax errors and unavailable commands are reported as text; errors
    raised by the handler itself propagate to the caller.
    """
    try:
        tokens = tokenize(line)
    except CommandParseError as exc:
        return str(exc)
    if not tokens:
        return ""
    if tokens == [HELP_WORD]:
        return render_help(registry)

    spec, rest = registry.match(tokens)
    if spec is None:
        return f"Command '{line.strip()}' not found (try '{HELP_WORD}')"
    if not spec.is_available():
        logger.debug("Command %s rejected by guard", spec.name)
        return f"Command '{spec.name}' was found but is not currently available"

    try:
        options = parse_options(spec, rest)
    except CommandParseError as exc:
        return f"{exc}\nUsage: {spec.usage()}"

    logger.debug("Executing %s %s", spec.name, options)
    return spec.handler(options)


def is_exit(line: str) -> bool:
    return line.strip().lower() in EXIT_WORDS


# ---------------------------------------------------------------------------
# Loops
# ---------------------------------------------------------------------------


def execute(
    registry: CommandRegistry,
    line: str,
    write: Writer,
    on_error: Writer,
) -> bool:
    """Dispatch *line*, writing the result.  Returns ``False`` on error."""
    try:
        result = dispatch(registry, line)
    except AmbariClientError as exc:
        logger.error("Command '%s' failed: %s", line.strip(), exc)
        on_error(str(exc))
        return False
    if result:
        write(result)
    return True


def run_shell(
    registry: CommandRegistry,
    context: ShellContext,
    *,
    read_line: Reader = ui.read_line,
    write: Writer = ui.plain,
    on_error: Writer = ui.error_msg,
) -> None:
    """Read-dispatch-print until ``exit``, EOF or Ctrl-C."""
    while True:
        try:
            line = read_line(context.prompt())
        except (EOFError, KeyboardInterrupt):
            write("")
            break
        if is_exit(line):
            break
        execute(registry, line, write, on_error)
    logger.info("Shell session ended")


def run_script(
    registry: CommandRegistry,
    lines: Iterable[str],
    *,
    write: Writer = ui.plain,
    on_error: Writer = ui.error_msg,
    echo: Optional[Writer] = None,
) -> int:
    """Execute *lines* in order; stops at ``exit``.

    Blank lines and ``#`` comments are skipped.  Returns the number of
    commands that raised a client error.
    """
    errors = 0
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if is_exit(line):
            break
        if echo is not None:
            echo(line)
        if not execute(registry, line, write, on_error):
            errors += 1
    return errors
