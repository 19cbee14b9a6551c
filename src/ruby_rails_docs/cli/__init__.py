"""ruby-rails-docs CLI.

All commands emit JSON envelopes to stdout (errors to stderr) so the
results of a batch run can be consumed by scripts.
"""

from ruby_rails_docs.cli.config import CLIContext, create_context
from ruby_rails_docs.cli.logging import (
    CLILogContext,
    cli_command,
    get_cli_logger,
    get_request_id,
    set_request_id,
)
from ruby_rails_docs.cli.main import cli
from ruby_rails_docs.cli.output import emit, emit_error, emit_success
from ruby_rails_docs.cli.registry import get_context, set_context
from ruby_rails_docs.cli.resilience import handle_keyboard_interrupt

__all__ = [
    # Entry point
    "cli",
    # Context
    "CLIContext",
    "create_context",
    "get_context",
    "set_context",
    # Output
    "emit",
    "emit_error",
    "emit_success",
    # Logging
    "CLILogContext",
    "cli_command",
    "get_cli_logger",
    "get_request_id",
    "set_request_id",
    # Resilience
    "handle_keyboard_interrupt",
]
