"""
Runtime configuration for ruby-rails-docs.

Supports configuration via:
1. Command-line options (highest priority, applied by the CLI layer)
2. Environment variables
3. Default values (lowest priority)

Environment variables:
- RUBY_RAILS_DOCS_OUTPUT_DIR: Directory receiving the merged documentation sets
- RUBY_RAILS_DOCS_SDOC_DIR: Checkout of the sdoc gem (provides lib/, bin/sdoc, bin/sdoc-merge)
- RUBY_RAILS_DOCS_RUBY_DIR: Git checkout of the Ruby source tree
- RUBY_RAILS_DOCS_RAILS_DIR: Git checkout of the Rails source tree
- RUBY_RAILS_DOCS_RUBY_BIN: Ruby interpreter executable (default: ruby)
- RUBY_RAILS_DOCS_RAKE_BIN: Rake executable (default: rake)
- RUBY_RAILS_DOCS_GIT_BIN: Git executable (default: git)
- RUBY_RAILS_DOCS_WORKSPACE_PREFIX: Prefix of the temporary workspace directory
- RUBY_RAILS_DOCS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- RUBY_RAILS_DOCS_STRUCTURED_LOGGING: Emit JSON-style log lines (true/false)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


DEFAULT_WORKSPACE_PREFIX = "ruby-rails-docs"


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


@dataclass
class DocsConfig:
    """Settings shared by the CLI and the generation pipeline."""

    # Directories
    output_dir: Optional[Path] = None
    sdoc_dir: Optional[Path] = None
    ruby_dir: Optional[Path] = None
    rails_dir: Optional[Path] = None

    # External executables
    ruby_bin: str = "ruby"
    rake_bin: str = "rake"
    git_bin: str = "git"

    workspace_prefix: str = DEFAULT_WORKSPACE_PREFIX

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = False

    @classmethod
    def from_env(cls) -> "DocsConfig":
        """Create configuration from environment variables over defaults."""
        config = cls()
        config._load_env()
        return config

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if output_dir := _env_path("RUBY_RAILS_DOCS_OUTPUT_DIR"):
            self.output_dir = output_dir
        if sdoc_dir := _env_path("RUBY_RAILS_DOCS_SDOC_DIR"):
            self.sdoc_dir = sdoc_dir
        if ruby_dir := _env_path("RUBY_RAILS_DOCS_RUBY_DIR"):
            self.ruby_dir = ruby_dir
        if rails_dir := _env_path("RUBY_RAILS_DOCS_RAILS_DIR"):
            self.rails_dir = rails_dir

        if ruby_bin := os.environ.get("RUBY_RAILS_DOCS_RUBY_BIN"):
            self.ruby_bin = ruby_bin
        if rake_bin := os.environ.get("RUBY_RAILS_DOCS_RAKE_BIN"):
            self.rake_bin = rake_bin
        if git_bin := os.environ.get("RUBY_RAILS_DOCS_GIT_BIN"):
            self.git_bin = git_bin

        if prefix := os.environ.get("RUBY_RAILS_DOCS_WORKSPACE_PREFIX"):
            self.workspace_prefix = prefix

        if level := os.environ.get("RUBY_RAILS_DOCS_LOG_LEVEL"):
            self.log_level = level.upper()
        if structured := os.environ.get("RUBY_RAILS_DOCS_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

    def setup_logging(self) -> None:
        """Configure logging based on settings.

        Safe to call repeatedly: the package handler is installed once and
        only its level and format are refreshed afterwards.
        """
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
                '"logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )

        root_logger = logging.getLogger("ruby_rails_docs")
        root_logger.setLevel(level)

        handler = next(
            (h for h in root_logger.handlers if getattr(h, "_ruby_rails_docs", False)),
            None,
        )
        if handler is None:
            handler = logging.StreamHandler()
            handler._ruby_rails_docs = True  # type: ignore[attr-defined]
            root_logger.addHandler(handler)
        handler.setFormatter(formatter)


# Global configuration instance
_config: Optional[DocsConfig] = None


def get_config() -> DocsConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = DocsConfig.from_env()
    return _config


def set_config(config: Optional[DocsConfig]) -> None:
    """Set the global configuration instance (None forces a reload from env)."""
    global _config
    _config = config
