"""CLI configuration and request resolution.

Combines command-line overrides with the environment-driven DocsConfig
to produce the GenerationRequest a command runs with.
"""

from pathlib import Path
from typing import Dict, List, Optional

from ruby_rails_docs.config import DocsConfig, get_config
from ruby_rails_docs.core.commands import CommandRunner
from ruby_rails_docs.core.generator import (
    GenerationRequest,
    RubyRailsDocumentations,
    Toolchain,
)

# CLI option name -> environment variable, for diagnostics
SETTING_SOURCES: Dict[str, str] = {
    "output_dir": "RUBY_RAILS_DOCS_OUTPUT_DIR",
    "sdoc_dir": "RUBY_RAILS_DOCS_SDOC_DIR",
    "ruby_dir": "RUBY_RAILS_DOCS_RUBY_DIR",
    "rails_dir": "RUBY_RAILS_DOCS_RAILS_DIR",
}


def _option_name(setting: str) -> str:
    return "--" + setting.replace("_", "-")


class CLIContext:
    """CLI execution context with resolved configuration.

    Resolution order for every directory:
    1. CLI option (highest priority)
    2. DocsConfig (environment variables)
    """

    def __init__(
        self,
        output_dir: Optional[str] = None,
        sdoc_dir: Optional[str] = None,
        ruby_dir: Optional[str] = None,
        rails_dir: Optional[str] = None,
        config: Optional[DocsConfig] = None,
    ):
        self._overrides = {
            "output_dir": output_dir,
            "sdoc_dir": sdoc_dir,
            "ruby_dir": ruby_dir,
            "rails_dir": rails_dir,
        }
        self._config = config or get_config()

    @property
    def config(self) -> DocsConfig:
        """Get the underlying configuration."""
        return self._config

    def resolve(self, setting: str) -> Optional[Path]:
        override = self._overrides.get(setting)
        if override:
            return Path(override).expanduser().resolve()
        configured = getattr(self._config, setting)
        if configured is not None:
            return Path(configured).resolve()
        return None

    def missing_settings(self) -> List[str]:
        """CLI option names of directories that could not be resolved."""
        return [
            _option_name(setting)
            for setting in SETTING_SOURCES
            if self.resolve(setting) is None
        ]

    def require_request(self) -> GenerationRequest:
        """Build the generation request, raising if a directory is unresolved.

        Raises:
            ValueError: If any of the four directories is missing.
        """
        missing = self.missing_settings()
        if missing:
            raise ValueError(f"Missing required settings: {', '.join(missing)}")
        return GenerationRequest(
            output_dir=self.resolve("output_dir"),
            sdoc_dir=self.resolve("sdoc_dir"),
            ruby_dir=self.resolve("ruby_dir"),
            rails_dir=self.resolve("rails_dir"),
        )

    def require_output_dir(self) -> Path:
        """Resolve the output root, raising if it is not configured.

        Raises:
            ValueError: If no output directory was given.
        """
        output_dir = self.resolve("output_dir")
        if output_dir is None:
            raise ValueError(f"Missing required settings: {_option_name('output_dir')}")
        return output_dir

    def toolchain(self) -> Toolchain:
        return Toolchain(
            ruby=self._config.ruby_bin,
            rake=self._config.rake_bin,
            git=self._config.git_bin,
        )

    def create_generator(
        self,
        runner: Optional[CommandRunner] = None,
    ) -> RubyRailsDocumentations:
        """Create a generator for the resolved request."""
        return RubyRailsDocumentations(
            self.require_request(),
            runner=runner,
            toolchain=self.toolchain(),
            workspace_prefix=self._config.workspace_prefix,
        )


def create_context(
    output_dir: Optional[str] = None,
    sdoc_dir: Optional[str] = None,
    ruby_dir: Optional[str] = None,
    rails_dir: Optional[str] = None,
) -> CLIContext:
    """Create a CLI context with optional overrides."""
    return CLIContext(
        output_dir=output_dir,
        sdoc_dir=sdoc_dir,
        ruby_dir=ruby_dir,
        rails_dir=rails_dir,
    )
