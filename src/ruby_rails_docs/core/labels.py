"""Display names and deterministic artifact names for a version pair."""

from __future__ import annotations

from dataclasses import dataclass

from ruby_rails_docs.core.versions import VersionPair


@dataclass(frozen=True)
class DocLabels:
    """Human readable project names used in titles and directory names.

    ``rails_output_name`` only appears in the published directory name,
    which spells Rails out in full.
    """

    ruby_name: str = "Ruby"
    rails_name: str = "Rails"
    rails_output_name: str = "Ruby on Rails"

    def title(self, pair: VersionPair) -> str:
        """Title of the merged documentation set."""
        return (
            f"{self.ruby_name} v{pair.ruby_version}, "
            f"{self.rails_name} v{pair.rails_version}"
        )

    def names(self) -> str:
        """Comma separated names passed to sdoc-merge, in input order."""
        return f"{self.ruby_name},{self.rails_name}"

    def output_dir_name(self, pair: VersionPair) -> str:
        """Name of the published directory under the output root."""
        return (
            f"{self.ruby_name} v{pair.ruby_version}, "
            f"{self.rails_output_name} v{pair.rails_version}"
        )


def ruby_docs_name(ruby_version: str) -> str:
    return f"ruby-docs-v{ruby_version}"


def rails_docs_name(rails_version: str) -> str:
    return f"rails-docs-v{rails_version}"


def merged_docs_name(pair: VersionPair) -> str:
    return f"merged-docs-ruby-v{pair.ruby_version}-rails-v{pair.rails_version}"
