"""Exception types raised by the documentation pipeline."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ruby_rails_docs.core.commands import ExternalCommand


class DocsError(Exception):
    """Base class for ruby-rails-docs failures."""


class CommandFailedError(DocsError):
    """An external command exited with a non-zero status.

    Attributes:
        command: The command that was run.
        returncode: Process exit status (None when it never started).
        diagnostic: Tail of the captured stderr, if any.
    """

    def __init__(
        self,
        message: str,
        command: "ExternalCommand",
        returncode: Optional[int] = None,
        diagnostic: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.command = command
        self.returncode = returncode
        self.diagnostic = diagnostic


class CommandNotFoundError(CommandFailedError):
    """The executable of an external command could not be started."""
