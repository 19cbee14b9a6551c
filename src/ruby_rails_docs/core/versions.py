"""Version arguments, version pairs and git tag derivation.

A version argument is resolved once, at the API boundary, into either a
``SingleVersion`` or a ``ManyVersions``. ``expand_pairs`` then walks the
cross product of the two arguments, Ruby versions outermost.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple, Union

__all__ = [
    "SingleVersion",
    "ManyVersions",
    "VersionArg",
    "VersionPair",
    "as_version_arg",
    "expand_pairs",
    "ruby_git_tag",
    "rails_git_tag",
]

# 2.0.0 -> v2_0_0, 2.0.0-p195 -> v2_0_0_195
RUBY_VERSION_PATTERN = re.compile(r"(\d)\.(\d)\.(\d)(?:-p(\d+))?", re.ASCII)


@dataclass(frozen=True)
class SingleVersion:
    """Exactly one version identifier."""

    version: str


@dataclass(frozen=True)
class ManyVersions:
    """An ordered list of version identifiers, one run per element."""

    versions: Tuple[str, ...]


VersionArg = Union[SingleVersion, ManyVersions]


@dataclass(frozen=True)
class VersionPair:
    """One Ruby version paired with one Rails version."""

    ruby_version: str
    rails_version: str


def as_version_arg(value: Union[str, Sequence[str], VersionArg]) -> VersionArg:
    """Resolve a raw version argument into the tagged union.

    Args:
        value: A version string, a sequence of version strings, or an
            already resolved ``SingleVersion``/``ManyVersions``.

    Returns:
        The resolved version argument.

    Raises:
        TypeError: If the value is neither a string nor a sequence of strings.
    """
    if isinstance(value, (SingleVersion, ManyVersions)):
        return value
    if isinstance(value, str):
        return SingleVersion(value)
    if isinstance(value, Sequence):
        versions = tuple(value)
        for item in versions:
            if not isinstance(item, str):
                raise TypeError(
                    f"Version lists must contain strings, got {type(item).__name__}"
                )
        return ManyVersions(versions)
    raise TypeError(
        f"Expected a version string or a sequence of them, got {type(value).__name__}"
    )


def expand_pairs(ruby: VersionArg, rails: VersionArg) -> Iterator[VersionPair]:
    """Yield every (Ruby, Rails) pair in nested order.

    Duplicates are not removed; a repeated pair is yielded again.
    """
    if isinstance(ruby, ManyVersions):
        for ruby_version in ruby.versions:
            yield from expand_pairs(SingleVersion(ruby_version), rails)
        return

    if isinstance(rails, ManyVersions):
        for rails_version in rails.versions:
            yield from expand_pairs(ruby, SingleVersion(rails_version))
        return

    yield VersionPair(ruby.version, rails.version)


def ruby_git_tag(version: str) -> str:
    """Translate a Ruby version into the tag used by the ruby/ruby repository.

    Versions that do not match ``D.D.D[-pN]`` fall back to ``v<version>``.
    """
    match = RUBY_VERSION_PATTERN.fullmatch(version)
    if match is None:
        return f"v{version}"

    major, minor, tiny, patch = match.groups()
    tag = f"v{major}_{minor}_{tiny}"
    if patch is not None:
        tag += f"_{patch}"
    return tag


def rails_git_tag(version: str) -> str:
    """Translate a Rails version into its git tag."""
    return f"v{version}"
