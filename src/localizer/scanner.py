"""Resource discovery: located resource files and include/exclude file sets.

Components:
    ResourceFile - Immutable record of one located resource file
    FileSet - Base directory plus include/exclude glob patterns

Glob patterns use '/' separators and match against the path relative to
the base directory. '**' matches any number of directories; a pattern
ending in '/' matches everything below that directory.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath

from localizer.diagnostics import Diagnostic, DiagnosticCode, ResourceReadError

__all__ = ["FileSet", "ResourceFile"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """A located resource file.

    Attributes:
        path: On-disk path
        relative_path: Path relative to the base directory (names the unit)
        last_modified_ns: Modification time in nanoseconds since the epoch
    """

    path: Path
    relative_path: PurePath
    last_modified_ns: int

    @property
    def name(self) -> str:
        """File name (last path component)."""
        return self.path.name

    @classmethod
    def locate(cls, base_dir: Path, relative_path: str | PurePath) -> ResourceFile:
        """Resolve a relative path against base_dir and stat it.

        Raises:
            ResourceReadError: If the file does not exist or cannot be stat'ed
        """
        path = base_dir / relative_path
        try:
            stat = path.stat()
        except OSError as e:
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_UNREADABLE,
                message=f"Cannot access resource file {path}: {e}",
                location=str(path),
            )
            raise ResourceReadError(diagnostic, path=path) from e
        return cls(path=path, relative_path=PurePath(relative_path), last_modified_ns=stat.st_mtime_ns)


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.replace("\\", "/")
    if pattern.endswith("/"):
        pattern += "**"
    return pattern


@dataclass(frozen=True, slots=True)
class FileSet:
    """Files below a base directory selected by glob patterns.

    Example:
        >>> fileset = FileSet(Path("src/main/resources"), excludes=("**/test/**",))
        >>> fileset.matches("org/example/Messages.properties")
        True
    """

    base_dir: Path
    includes: tuple[str, ...] = ("**",)
    excludes: tuple[str, ...] = ()

    def matches(self, relative_path: str | PurePath) -> bool:
        """True if the path matches an include and no exclude."""
        candidate = PurePosixPath(PurePath(relative_path).as_posix())
        if not any(candidate.full_match(_normalize_pattern(p)) for p in self.includes):
            return False
        return not any(candidate.full_match(_normalize_pattern(p)) for p in self.excludes)

    def scan(self) -> list[str]:
        """List selected files as relative paths, sorted for determinism.

        Returns:
            Relative paths using the platform separator

        Raises:
            ResourceReadError: If base_dir is not a directory
        """
        if not self.base_dir.is_dir():
            diagnostic = Diagnostic(
                code=DiagnosticCode.RESOURCE_UNREADABLE,
                message=f"Resource directory does not exist: {self.base_dir}",
                location=str(self.base_dir),
            )
            raise ResourceReadError(diagnostic, path=self.base_dir)

        selected: list[str] = []
        for path in self.base_dir.rglob("*"):
            if not path.is_file():
                continue
            relative = path.relative_to(self.base_dir)
            if self.matches(relative):
                selected.append(os.fspath(relative))
        selected.sort()
        logger.debug("Scanned %s: %d file(s) selected", self.base_dir, len(selected))
        return selected
