"""Core documentation pipeline for ruby-rails-docs."""

from ruby_rails_docs.core.commands import (
    CommandResult,
    CommandRunner,
    ExternalCommand,
    SubprocessRunner,
    run_checked,
)
from ruby_rails_docs.core.errors import (
    CommandFailedError,
    CommandNotFoundError,
    DocsError,
)
from ruby_rails_docs.core.generator import (
    GenerationRequest,
    PlannedPair,
    PublishedDocs,
    RubyRailsDocumentations,
    Toolchain,
    plan_pairs,
)
from ruby_rails_docs.core.labels import DocLabels
from ruby_rails_docs.core.versions import (
    ManyVersions,
    SingleVersion,
    VersionPair,
    as_version_arg,
    expand_pairs,
    rails_git_tag,
    ruby_git_tag,
)
from ruby_rails_docs.core.workspace import temporary_workspace

__all__ = [
    # Pipeline
    "GenerationRequest",
    "PlannedPair",
    "PublishedDocs",
    "RubyRailsDocumentations",
    "Toolchain",
    "plan_pairs",
    "DocLabels",
    # Versions
    "ManyVersions",
    "SingleVersion",
    "VersionPair",
    "as_version_arg",
    "expand_pairs",
    "rails_git_tag",
    "ruby_git_tag",
    # External commands
    "CommandResult",
    "CommandRunner",
    "ExternalCommand",
    "SubprocessRunner",
    "run_checked",
    "temporary_workspace",
    # Errors
    "CommandFailedError",
    "CommandNotFoundError",
    "DocsError",
]
