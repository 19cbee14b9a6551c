"""Scoped temporary workspace for intermediate documentation artifacts."""

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ruby_rails_docs.config import DEFAULT_WORKSPACE_PREFIX

logger = logging.getLogger(__name__)


@contextmanager
def temporary_workspace(prefix: str = DEFAULT_WORKSPACE_PREFIX) -> Iterator[Path]:
    """Create a scratch directory and remove it, recursively, on exit.

    The directory is removed whether the body returns, raises, or is
    interrupted.

    Example:
        >>> with temporary_workspace() as workspace:
        ...     (workspace / "ruby-docs-v2.0.0").mkdir()
    """
    with tempfile.TemporaryDirectory(prefix=prefix) as temp_dir:
        workspace = Path(temp_dir)
        logger.debug("Created workspace %s", workspace)
        try:
            yield workspace
        finally:
            logger.debug("Removing workspace %s", workspace)
