"""Generation commands for the ruby-rails-docs CLI.

Provides:
- generate: build and publish merged docs for every version pair
- plan: preview pairs, git tags and output directories without running anything
"""

import time
from dataclasses import asdict
from typing import Any, Dict, Tuple

import click

from ruby_rails_docs.cli.logging import cli_command, get_cli_logger
from ruby_rails_docs.cli.output import emit_error, emit_success
from ruby_rails_docs.cli.registry import get_context
from ruby_rails_docs.cli.resilience import handle_keyboard_interrupt
from ruby_rails_docs.core.errors import CommandFailedError, CommandNotFoundError
from ruby_rails_docs.core.generator import plan_pairs
from ruby_rails_docs.core.responses import ErrorCode, ErrorType

logger = get_cli_logger()

_SETTINGS_REMEDIATION = (
    "Pass --output-dir, --sdoc-dir, --ruby-dir and --rails-dir, or set the "
    "matching RUBY_RAILS_DOCS_* environment variables."
)

ruby_version_option = click.option(
    "--ruby-version",
    "ruby_versions",
    multiple=True,
    required=True,
    help="Ruby version (repeatable), e.g. 2.0.0-p195.",
)
rails_version_option = click.option(
    "--rails-version",
    "rails_versions",
    multiple=True,
    required=True,
    help="Rails version (repeatable), e.g. 4.0.0-rc.1.",
)


def _command_details(exc: CommandFailedError) -> Dict[str, Any]:
    command = exc.command
    return {
        "command": list(command.argv),
        "env": dict(command.env),
        "cwd": str(command.cwd) if command.cwd is not None else None,
        "returncode": exc.returncode,
        "diagnostic": exc.diagnostic,
    }


@click.command("generate")
@ruby_version_option
@rails_version_option
@click.pass_context
@cli_command("generate")
@handle_keyboard_interrupt()
def generate_cmd(
    ctx: click.Context,
    ruby_versions: Tuple[str, ...],
    rails_versions: Tuple[str, ...],
) -> None:
    """Generate merged documentation for every Ruby x Rails version pair.

    Stops at the first failing external command; pairs already published
    are left in place.
    """
    cli_ctx = get_context(ctx)
    try:
        generator = cli_ctx.create_generator()
    except ValueError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.VALIDATION_ERROR.value,
            error_type=ErrorType.VALIDATION.value,
            remediation=_SETTINGS_REMEDIATION,
        )

    start_time = time.perf_counter()
    try:
        published = generator.generate(list(ruby_versions), list(rails_versions))
    except CommandNotFoundError as exc:
        logger.error(exc.message)
        emit_error(
            exc.message,
            code=ErrorCode.COMMAND_NOT_FOUND.value,
            error_type=ErrorType.EXTERNAL.value,
            remediation=f"Install {exc.command.argv[0]} or point the matching "
            "RUBY_RAILS_DOCS_*_BIN variable at it.",
            details=_command_details(exc),
        )
    except CommandFailedError as exc:
        logger.error(exc.message)
        emit_error(
            exc.message,
            code=ErrorCode.COMMAND_FAILED.value,
            error_type=ErrorType.EXTERNAL.value,
            details=_command_details(exc),
        )
    duration_ms = (time.perf_counter() - start_time) * 1000

    emit_success(
        {
            "published": [asdict(item) for item in published],
            "count": len(published),
        },
        telemetry={"duration_ms": round(duration_ms, 2)},
    )


@click.command("plan")
@ruby_version_option
@rails_version_option
@click.pass_context
@cli_command("plan")
def plan_cmd(
    ctx: click.Context,
    ruby_versions: Tuple[str, ...],
    rails_versions: Tuple[str, ...],
) -> None:
    """Show the version pairs, tags and output directories generate would use."""
    cli_ctx = get_context(ctx)
    try:
        output_dir = cli_ctx.require_output_dir()
    except ValueError as exc:
        emit_error(
            str(exc),
            code=ErrorCode.VALIDATION_ERROR.value,
            error_type=ErrorType.VALIDATION.value,
            remediation="Pass --output-dir or set RUBY_RAILS_DOCS_OUTPUT_DIR.",
        )

    planned = plan_pairs(output_dir, list(ruby_versions), list(rails_versions))
    emit_success(
        {
            "pairs": [asdict(item) for item in planned],
            "count": len(planned),
        }
    )
