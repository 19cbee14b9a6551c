"""CLI module entry point.

Enables running the CLI via: python -m ruby_rails_docs.cli
"""

from ruby_rails_docs.cli.main import cli

if __name__ == "__main__":
    cli()
