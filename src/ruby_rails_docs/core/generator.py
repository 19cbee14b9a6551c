"""
Combined Ruby + Rails API documentation generation.

For every (Ruby, Rails) version pair the pipeline:

1. checks out the Ruby tag and runs sdoc over the Ruby tree,
2. checks out the Rails tag, runs ``rake clobber`` and ``rake rdoc``,
3. merges both sets with sdoc-merge,
4. copies the merged set to ``<output>/Ruby v<R>, Ruby on Rails v<F>``.

Intermediate artifacts live in one temporary workspace per ``generate``
call and are reused when already present, so a pair that shares a Ruby
or Rails version with an earlier pair skips that half of the work.

Equivalent manual session::

    cd ruby
    SDOC_FORCE_MAIN_PAGE=README ruby -I sdoc/lib sdoc/bin/sdoc --github --all -o sdoc .
    cd ../rails
    rake -I sdoc/lib rdoc
    cd ..
    ruby -I sdoc/lib sdoc/bin/sdoc-merge --title 'Ruby v2.0.0-p195, Rails v4.0.0-rc.1' \\
        --op merged --names 'Ruby,Rails' ruby/sdoc rails/doc/rdoc/
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from ruby_rails_docs.config import DEFAULT_WORKSPACE_PREFIX
from ruby_rails_docs.core.commands import (
    CommandResult,
    CommandRunner,
    ExternalCommand,
    SubprocessRunner,
    run_checked,
)
from ruby_rails_docs.core.labels import (
    DocLabels,
    merged_docs_name,
    rails_docs_name,
    ruby_docs_name,
)
from ruby_rails_docs.core.versions import (
    VersionArg,
    VersionPair,
    as_version_arg,
    expand_pairs,
    rails_git_tag,
    ruby_git_tag,
)
from ruby_rails_docs.core.workspace import temporary_workspace

logger = logging.getLogger(__name__)

VersionsInput = Union[str, Sequence[str], VersionArg]

# Selects README as sdoc's main page for the Ruby tree
SDOC_MAIN_PAGE_ENV = {"SDOC_FORCE_MAIN_PAGE": "README"}


@dataclass(frozen=True)
class GenerationRequest:
    """Locations fixed for the lifetime of a generation run.

    Attributes:
        output_dir: Root directory receiving one directory per version pair.
        sdoc_dir: Checkout of sdoc providing ``lib``, ``bin/sdoc`` and ``bin/sdoc-merge``.
        ruby_dir: Git checkout of Ruby.
        rails_dir: Git checkout of Rails.
    """

    output_dir: Path
    sdoc_dir: Path
    ruby_dir: Path
    rails_dir: Path

    @property
    def sdoc_lib_dir(self) -> Path:
        return self.sdoc_dir / "lib"

    @property
    def sdoc_bin(self) -> Path:
        return self.sdoc_dir / "bin" / "sdoc"

    @property
    def sdoc_merge_bin(self) -> Path:
        return self.sdoc_dir / "bin" / "sdoc-merge"


@dataclass(frozen=True)
class Toolchain:
    """Executables invoked by the pipeline."""

    ruby: str = "ruby"
    rake: str = "rake"
    git: str = "git"


@dataclass
class PublishedDocs:
    """
    Result of one version pair.
    """
    ruby_version: str
    rails_version: str
    output_dir: Path
    ruby_docs_reused: bool = False
    rails_docs_reused: bool = False
    merged_docs_reused: bool = False


@dataclass
class PlannedPair:
    """
    What ``generate`` would do for one version pair.
    """
    ruby_version: str
    rails_version: str
    ruby_tag: str
    rails_tag: str
    output_dir: Path


def plan_pairs(
    output_dir: Path,
    ruby_versions: VersionsInput,
    rails_versions: VersionsInput,
    labels: Optional[DocLabels] = None,
) -> List[PlannedPair]:
    """Preview pairs, git tags and output directories for a run.

    Only the output root is needed; no checkout or sdoc path is touched.
    """
    labels = labels or DocLabels()
    ruby = as_version_arg(ruby_versions)
    rails = as_version_arg(rails_versions)
    return [
        PlannedPair(
            ruby_version=pair.ruby_version,
            rails_version=pair.rails_version,
            ruby_tag=ruby_git_tag(pair.ruby_version),
            rails_tag=rails_git_tag(pair.rails_version),
            output_dir=output_dir / labels.output_dir_name(pair),
        )
        for pair in expand_pairs(ruby, rails)
    ]


class RubyRailsDocumentations:
    """Generates merged Ruby and Rails documentation for version pairs.

    The Ruby and Rails working trees are checked out and cleaned in place,
    so a single instance must own them for the duration of a run.

    Example:
        >>> docs = RubyRailsDocumentations(request)
        >>> docs.generate(["2.0.0-p195", "1.9.3-p429"], "4.0.0")
    """

    def __init__(
        self,
        request: GenerationRequest,
        *,
        runner: Optional[CommandRunner] = None,
        toolchain: Optional[Toolchain] = None,
        labels: Optional[DocLabels] = None,
        workspace_prefix: str = DEFAULT_WORKSPACE_PREFIX,
    ):
        self.request = request
        self.runner: CommandRunner = runner or SubprocessRunner()
        self.toolchain = toolchain or Toolchain()
        self.labels = labels or DocLabels()
        self.workspace_prefix = workspace_prefix

    def generate(
        self,
        ruby_versions: VersionsInput,
        rails_versions: VersionsInput,
    ) -> List[PublishedDocs]:
        """Build and publish documentation for every (Ruby, Rails) pair.

        Args:
            ruby_versions: One Ruby version or a list of them.
            rails_versions: One Rails version or a list of them.

        Returns:
            One PublishedDocs per pair, in generation order.

        Raises:
            CommandFailedError: As soon as any external command fails. Pairs
                published before the failure stay in place.
        """
        ruby = as_version_arg(ruby_versions)
        rails = as_version_arg(rails_versions)

        published: List[PublishedDocs] = []
        with temporary_workspace(self.workspace_prefix) as workspace:
            self.request.output_dir.mkdir(parents=True, exist_ok=True)
            for pair in expand_pairs(ruby, rails):
                published.append(self._generate_pair(pair, workspace))
        return published

    def plan(
        self,
        ruby_versions: VersionsInput,
        rails_versions: VersionsInput,
    ) -> List[PlannedPair]:
        """List the pairs ``generate`` would process, without side effects."""
        return plan_pairs(
            self.request.output_dir, ruby_versions, rails_versions, labels=self.labels
        )

    def version_output_dir(self, pair: VersionPair) -> Path:
        return self.request.output_dir / self.labels.output_dir_name(pair)

    def _generate_pair(self, pair: VersionPair, workspace: Path) -> PublishedDocs:
        logger.info(
            "Generating documentation for Ruby %s and Rails %s",
            pair.ruby_version,
            pair.rails_version,
        )
        ruby_docs, ruby_reused = self._create_ruby_docs(pair.ruby_version, workspace)
        rails_docs, rails_reused = self._create_rails_docs(pair.rails_version, workspace)
        merged_docs, merged_reused = self._merge(pair, workspace, ruby_docs, rails_docs)

        output_dir = self.version_output_dir(pair)
        shutil.copytree(merged_docs, output_dir, dirs_exist_ok=True)
        logger.info("Published %s", output_dir)

        return PublishedDocs(
            ruby_version=pair.ruby_version,
            rails_version=pair.rails_version,
            output_dir=output_dir,
            ruby_docs_reused=ruby_reused,
            rails_docs_reused=rails_reused,
            merged_docs_reused=merged_reused,
        )

    # ruby -I sdoc/lib sdoc/bin/sdoc-merge --op <dir> --title <title> --names Ruby,Rails <ruby> <rails>
    def _merge(
        self,
        pair: VersionPair,
        workspace: Path,
        ruby_docs: Path,
        rails_docs: Path,
    ) -> Tuple[Path, bool]:
        target = workspace / merged_docs_name(pair)
        if target.exists():
            logger.info("Reusing merged documentation %s", target)
            return target, True

        self._run(
            [
                self.toolchain.ruby,
                "-I",
                str(self.request.sdoc_lib_dir),
                str(self.request.sdoc_merge_bin),
                "--op",
                str(target),
                "--title",
                self.labels.title(pair),
                "--names",
                self.labels.names(),
                str(ruby_docs),
                str(rails_docs),
            ]
        )
        return target, False

    # cd rails && rake clobber && rake -I sdoc/lib rdoc
    def _create_rails_docs(self, rails_version: str, workspace: Path) -> Tuple[Path, bool]:
        target = workspace / rails_docs_name(rails_version)
        if target.exists():
            logger.info("Reusing Rails documentation %s", target)
            return target, True

        rails_dir = self.request.rails_dir
        self._checkout(rails_dir, rails_git_tag(rails_version))
        self._run([self.toolchain.rake, "clobber"], cwd=rails_dir)
        self._run(
            [self.toolchain.rake, "-I", str(self.request.sdoc_lib_dir), "rdoc"],
            cwd=rails_dir,
        )

        shutil.move(str(rails_dir / "doc" / "rdoc"), str(target))
        return target, False

    # SDOC_FORCE_MAIN_PAGE=README ruby -I sdoc/lib sdoc/bin/sdoc --github --all -o <dir> <ruby>
    def _create_ruby_docs(self, ruby_version: str, workspace: Path) -> Tuple[Path, bool]:
        target = workspace / ruby_docs_name(ruby_version)
        if target.exists():
            logger.info("Reusing Ruby documentation %s", target)
            return target, True

        ruby_dir = self.request.ruby_dir
        self._checkout(ruby_dir, ruby_git_tag(ruby_version))
        self._run(
            [
                self.toolchain.ruby,
                "-I",
                str(self.request.sdoc_lib_dir),
                str(self.request.sdoc_bin),
                "--github",
                "--all",
                "-o",
                str(target),
                str(ruby_dir),
            ],
            env=SDOC_MAIN_PAGE_ENV,
        )
        return target, False

    def _checkout(self, tree: Path, tag: str) -> None:
        self._run([self.toolchain.git, "checkout", tag], cwd=tree)

    def _run(
        self,
        argv: Sequence[str],
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ) -> CommandResult:
        command = ExternalCommand(argv=tuple(argv), env=dict(env or {}), cwd=cwd)
        return run_checked(self.runner, command)
