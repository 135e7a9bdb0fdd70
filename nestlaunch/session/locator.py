"""Host binary locators.

A locator answers `resolve(name)` with the first absolute path the host
reports for an executable, or None. The session launcher takes one as an
explicit dependency so tests can substitute a fake.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Callable, Optional, Protocol

from nestlaunch.common.errors import ResolutionError

logger = logging.getLogger(__name__)

RunFunc = Callable[..., "subprocess.CompletedProcess[str]"]


class BinaryLocator(Protocol):
    """Capability interface for finding executables on the host."""

    def resolve(self, name: str) -> Optional[str]:
        """
        Resolve executable name to a path.

        Args:
            name: Executable name.

        Returns:
            First matching absolute path, or None.
        """


class WhereisLocator:
    """Locator backed by `whereis -b`.

    Keeps whereis's own ordering and takes the first binary it lists.
    """

    def __init__(self, run_func: RunFunc = subprocess.run) -> None:
        self._run_func: RunFunc = run_func

    def resolve(self, name: str) -> Optional[str]:
        """
        Resolve name through whereis.

        Args:
            name: Executable name.

        Returns:
            First binary path whereis reports, or None when it reports none.

        Raises:
            ResolutionError: If whereis itself cannot be run.
        """
        try:
            completed = self._run_func(
                ["whereis", "-b", name],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            raise ResolutionError(f"Binary locator 'whereis' is unavailable: {e}") from e

        if completed.returncode != 0:
            logger.warning("whereis exited with status %d for %s", completed.returncode, name)
            return None
        return self.output_parse(completed.stdout, name)

    @staticmethod
    def output_parse(output: str, name: str) -> Optional[str]:
        """
        Extract the first path from whereis output.

        Args:
            output: Raw whereis stdout, e.g. `Xephyr: /usr/bin/Xephyr`.
            name: Name that was queried.

        Returns:
            First path, or None when the line lists no paths.
        """
        for line in output.splitlines():
            label, sep, paths = line.partition(":")
            if not sep or label.strip() != name:
                continue
            candidates = paths.split()
            if candidates:
                return candidates[0]
        return None


class PathLocator:
    """Locator backed by a PATH search."""

    def __init__(self, search_path: Optional[str] = None) -> None:
        self._search_path: Optional[str] = search_path

    def resolve(self, name: str) -> Optional[str]:
        path = shutil.which(name, path=self._search_path)
        if path is None:
            return None
        return os.path.abspath(path)


def locator_create(kind: str) -> BinaryLocator:
    """
    Create a host locator.

    Args:
        kind: Locator identifier ("whereis" or "path").

    Returns:
        Locator instance.

    Raises:
        ValueError: If kind is not supported.
    """
    normalized = kind.lower()
    if normalized == "whereis":
        return WhereisLocator()
    if normalized == "path":
        return PathLocator()
    raise ValueError(f"Unsupported locator '{kind}'. Supported: whereis, path.")
