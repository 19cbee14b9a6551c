"""CLI commands."""

from ruby_rails_docs.cli.commands.environment import check_cmd
from ruby_rails_docs.cli.commands.generate import generate_cmd, plan_cmd

__all__ = [
    "check_cmd",
    "generate_cmd",
    "plan_cmd",
]
