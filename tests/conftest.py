"""
Root pytest configuration and shared fixtures.

External tools (git, rake, sdoc, sdoc-merge) are simulated by FakeRunner,
which records every command and creates the directories the real tools
would have written.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Set, Union

import pytest

from ruby_rails_docs.config import DocsConfig, set_config
from ruby_rails_docs.core.commands import CommandResult, ExternalCommand
from ruby_rails_docs.core.generator import GenerationRequest


class FakeRunner:
    """Command runner that records invocations instead of spawning processes.

    Args:
        fail_on: Substring of ``ExternalCommand.describe()`` (or predicate)
            selecting the command that should exit with ``fail_status``.
        fail_status: Exit status reported for the failing command.
    """

    def __init__(
        self,
        fail_on: Optional[Union[str, Callable[[ExternalCommand], bool]]] = None,
        fail_status: int = 2,
    ):
        self.calls: List[ExternalCommand] = []
        self.workspaces: Set[Path] = set()
        self.fail_on = fail_on
        self.fail_status = fail_status

    def _should_fail(self, command: ExternalCommand) -> bool:
        if self.fail_on is None:
            return False
        if callable(self.fail_on):
            return self.fail_on(command)
        return self.fail_on in command.describe()

    def _write_docs(self, target: Path) -> None:
        self.workspaces.add(target.parent)
        target.mkdir(parents=True)
        (target / "index.html").write_text(f"<title>{target.name}</title>")

    def __call__(self, command: ExternalCommand) -> CommandResult:
        self.calls.append(command)
        if self._should_fail(command):
            return CommandResult(returncode=self.fail_status, stderr="simulated failure\n")

        argv = command.argv
        if "--op" in argv:
            self._write_docs(Path(argv[argv.index("--op") + 1]))
        elif "-o" in argv:
            self._write_docs(Path(argv[argv.index("-o") + 1]))
        elif argv[-1] == "rdoc":
            rdoc = Path(command.cwd) / "doc" / "rdoc"
            rdoc.mkdir(parents=True)
            (rdoc / "index.html").write_text("rails")
        return CommandResult(returncode=0)

    def argvs(self) -> List[List[str]]:
        return [list(call.argv) for call in self.calls]

    def count(self, fragment: str) -> int:
        return sum(1 for call in self.calls if fragment in call.describe())


@pytest.fixture
def fake_runner():
    """Create a FakeRunner that succeeds for every command."""
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunners configured to fail on a given command."""
    return FakeRunner


@pytest.fixture
def generation_request(tmp_path):
    """Create sdoc, Ruby and Rails directories and a request pointing at them."""
    sdoc_dir = tmp_path / "sdoc"
    (sdoc_dir / "lib").mkdir(parents=True)
    (sdoc_dir / "bin").mkdir()
    (sdoc_dir / "bin" / "sdoc").write_text("#!/usr/bin/env ruby\n")
    (sdoc_dir / "bin" / "sdoc-merge").write_text("#!/usr/bin/env ruby\n")

    ruby_dir = tmp_path / "ruby"
    rails_dir = tmp_path / "rails"
    ruby_dir.mkdir()
    rails_dir.mkdir()

    return GenerationRequest(
        output_dir=tmp_path / "output",
        sdoc_dir=sdoc_dir,
        ruby_dir=ruby_dir,
        rails_dir=rails_dir,
    )


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Drop the package log handler after each test.

    The handler binds to the current sys.stderr, which CliRunner replaces
    for the duration of an invocation.
    """
    yield
    logger = logging.getLogger("ruby_rails_docs")
    for handler in [h for h in logger.handlers if getattr(h, "_ruby_rails_docs", False)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def docs_config():
    """Install a quiet, environment-independent global configuration."""
    config = DocsConfig(log_level="WARNING")
    set_config(config)
    yield config
    set_config(None)
