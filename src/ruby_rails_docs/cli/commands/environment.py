"""Environment verification command for the ruby-rails-docs CLI."""

import shutil
from pathlib import Path
from typing import Any, Dict, List

import click

from ruby_rails_docs.cli.logging import cli_command
from ruby_rails_docs.cli.output import emit_error, emit_success
from ruby_rails_docs.cli.registry import get_context
from ruby_rails_docs.core.responses import ErrorCode, ErrorType


def _check_tool(tool_name: str) -> bool:
    return shutil.which(tool_name) is not None


@click.command("check")
@click.pass_context
@cli_command("check")
def check_cmd(ctx: click.Context) -> None:
    """Verify executables, sdoc files and source trees are in place."""
    cli_ctx = get_context(ctx)
    config = cli_ctx.config

    tools = {
        name: _check_tool(name)
        for name in (config.git_bin, config.ruby_bin, config.rake_bin)
    }

    paths: Dict[str, bool] = {}
    sdoc_dir = cli_ctx.resolve("sdoc_dir")
    if sdoc_dir is not None:
        for relative in ("lib", "bin/sdoc", "bin/sdoc-merge"):
            paths[str(sdoc_dir / relative)] = (sdoc_dir / relative).exists()
    for setting in ("ruby_dir", "rails_dir"):
        tree = cli_ctx.resolve(setting)
        if tree is not None:
            paths[str(tree)] = Path(tree).is_dir()

    missing: List[str] = cli_ctx.missing_settings()
    missing += [tool for tool, available in tools.items() if not available]
    missing += [path for path, present in paths.items() if not present]

    data: Dict[str, Any] = {
        "tools": tools,
        "paths": paths,
        "all_available": not missing,
    }

    if missing:
        emit_error(
            f"Required tools or paths missing: {', '.join(missing)}",
            code=ErrorCode.MISSING_REQUIRED.value,
            error_type=ErrorType.VALIDATION.value,
            remediation="Install missing tools and point the directory options at existing checkouts.",
            details={**data, "missing": missing},
        )

    emit_success(data)
