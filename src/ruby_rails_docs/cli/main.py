"""ruby-rails-docs CLI entry point.

JSON output on stdout, logs on stderr.
"""

from typing import Optional

import click

from ruby_rails_docs.cli.config import create_context
from ruby_rails_docs.cli.registry import register_all_commands


@click.group()
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Directory receiving the merged documentation (env: RUBY_RAILS_DOCS_OUTPUT_DIR).",
)
@click.option(
    "--sdoc-dir",
    type=click.Path(file_okay=False),
    help="Checkout of sdoc with lib/ and bin/ (env: RUBY_RAILS_DOCS_SDOC_DIR).",
)
@click.option(
    "--ruby-dir",
    type=click.Path(file_okay=False),
    help="Git checkout of Ruby (env: RUBY_RAILS_DOCS_RUBY_DIR).",
)
@click.option(
    "--rails-dir",
    type=click.Path(file_okay=False),
    help="Git checkout of Rails (env: RUBY_RAILS_DOCS_RAILS_DIR).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override RUBY_RAILS_DOCS_LOG_LEVEL.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    output_dir: Optional[str],
    sdoc_dir: Optional[str],
    ruby_dir: Optional[str],
    rails_dir: Optional[str],
    log_level: Optional[str],
) -> None:
    """Build merged Ruby and Rails API documentation with sdoc."""
    ctx.ensure_object(dict)
    cli_context = create_context(
        output_dir=output_dir,
        sdoc_dir=sdoc_dir,
        ruby_dir=ruby_dir,
        rails_dir=rails_dir,
    )
    if log_level:
        cli_context.config.log_level = log_level.upper()
    cli_context.config.setup_logging()
    ctx.obj["cli_context"] = cli_context


# Register all commands
register_all_commands(cli)


if __name__ == "__main__":
    cli()
