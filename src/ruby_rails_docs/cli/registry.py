"""Command registry for the ruby-rails-docs CLI.

Centralized registration of all commands.
"""

from typing import Optional

import click

from ruby_rails_docs.cli.config import CLIContext

# Module-level storage for CLI context (for testing)
_cli_context: Optional[CLIContext] = None


def set_context(ctx: Optional[CLIContext]) -> None:
    """Set the CLI context at module level.

    Primarily used for testing when not using Click's context.
    """
    global _cli_context
    _cli_context = ctx


def get_context(ctx: Optional[click.Context] = None) -> CLIContext:
    """Get CLI context from Click context or module-level storage.

    Raises:
        RuntimeError: If no context is available.
    """
    if ctx is not None:
        obj = ctx.find_object(dict)
        if obj and "cli_context" in obj:
            return obj["cli_context"]

    if _cli_context is not None:
        return _cli_context

    raise RuntimeError("No CLI context available. Call set_context() first.")


def register_all_commands(cli: click.Group) -> None:
    """Register all commands with the CLI.

    Commands are lazily imported to avoid circular dependencies.
    """
    from ruby_rails_docs.cli.commands import (
        check_cmd,
        generate_cmd,
        plan_cmd,
    )

    cli.add_command(generate_cmd)
    cli.add_command(plan_cmd)
    cli.add_command(check_cmd)

    @cli.command("version")
    def version() -> None:
        """Show CLI version information."""
        from ruby_rails_docs import __version__
        from ruby_rails_docs.cli.output import emit_success

        emit_success({"name": "ruby-rails-docs", "version": __version__})
