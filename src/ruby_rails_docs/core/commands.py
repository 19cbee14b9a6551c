"""
External command execution for the documentation pipeline.

Every tool the pipeline drives (git, rake, sdoc, sdoc-merge) goes through
``run_checked`` so that logging and failure reporting look the same for
each step. Runners are plain callables taking an ``ExternalCommand`` and
returning a ``CommandResult``; tests substitute their own.
"""

import logging
import os
import shlex
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Tuple

from ruby_rails_docs.core.errors import CommandFailedError, CommandNotFoundError

logger = logging.getLogger(__name__)

# Lines of captured stderr kept as the failure diagnostic
DIAGNOSTIC_TAIL_LINES = 20


@dataclass(frozen=True)
class ExternalCommand:
    """
    One external process invocation.

    ``env`` only holds the overrides; the child inherits the rest of the
    parent environment. ``cwd`` of None means the current directory.
    """
    argv: Tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Optional[Path] = None

    def describe(self) -> str:
        """Render the command as ``[cwd] KEY=value argv...`` with shell escaping."""
        parts = []
        env = " ".join(
            f"{shlex.quote(key)}={shlex.quote(value)}" for key, value in self.env.items()
        )
        if env:
            parts.append(env)
        parts.append(shlex.join(self.argv))
        rendered = " ".join(parts)
        if self.cwd is not None:
            rendered = f"[{self.cwd}] {rendered}"
        return rendered


@dataclass
class CommandResult:
    """
    Outcome of one external command.
    """
    returncode: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


CommandRunner = Callable[[ExternalCommand], CommandResult]


class SubprocessRunner:
    """Run commands with ``subprocess.run``, blocking until they exit."""

    def _child_env(self, overrides: Mapping[str, str]) -> Optional[Dict[str, str]]:
        if not overrides:
            return None
        env = os.environ.copy()
        env.update(overrides)
        return env

    def __call__(self, command: ExternalCommand) -> CommandResult:
        start = time.perf_counter()
        completed = subprocess.run(  # noqa: S603 - argv list, no shell
            list(command.argv),
            capture_output=True,
            text=True,
            cwd=str(command.cwd) if command.cwd is not None else None,
            env=self._child_env(command.env),
        )
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )


def _diagnostic(stderr: str) -> Optional[str]:
    lines = stderr.strip().splitlines()
    if not lines:
        return None
    return "\n".join(lines[-DIAGNOSTIC_TAIL_LINES:])


def run_checked(runner: CommandRunner, command: ExternalCommand) -> CommandResult:
    """Run a command and raise unless it exits with status 0.

    Args:
        runner: Callable executing the command.
        command: The command to run.

    Returns:
        The successful CommandResult.

    Raises:
        CommandNotFoundError: If the process could not be started (missing or
            non-executable program, unusable working directory).
        CommandFailedError: If the command exited with a non-zero status.
    """
    rendered = command.describe()
    logger.info(rendered)

    try:
        result = runner(command)
    except OSError as exc:
        raise CommandNotFoundError(
            f"The execution of the command {rendered} failed: "
            f"{command.argv[0]!r} could not be started ({exc.strerror or exc}). Aborting",
            command=command,
        ) from exc

    if result.stdout:
        logger.debug(result.stdout.rstrip())
    if result.stderr:
        logger.debug(result.stderr.rstrip())

    if not result.ok:
        raise CommandFailedError(
            f"The execution of the command {rendered} failed with status "
            f"{result.returncode}. Aborting",
            command=command,
            returncode=result.returncode,
            diagnostic=_diagnostic(result.stderr),
        )

    return result
