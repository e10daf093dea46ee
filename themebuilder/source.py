"""
source.py

Responsibility: turn a starter descriptor string into a typed source, decided once, up front.

A descriptor is either:
- `owner/name[#ref]`: a hosted repository, optionally pinned to a branch or commit
- a filesystem path: a local starter directory

Downstream code dispatches on the returned type and never re-inspects the raw string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from themebuilder.errors import SourceNotDirectoryError, SourceNotFoundError

_REPOSITORY = re.compile(r"^(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+)(?:#(?P<ref>.*))?$")
_DRIVE = re.compile(r"^[A-Za-z]:")


@dataclass(frozen=True)
class RemoteRepository:
    owner: str
    name: str
    ref: str | None = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    def clone_url(self, template: str) -> str:
        """Fill a host template such as ``git@github.com:{slug}.git``."""
        return template.format(slug=self.slug, owner=self.owner, name=self.name)


@dataclass(frozen=True)
class LocalPath:
    path: Path


Source = RemoteRepository | LocalPath


def _looks_like_path(text: str) -> bool:
    return text.startswith((".", "/", "~")) or "\\" in text or bool(_DRIVE.match(text))


def parse_source(descriptor: str, *, cwd: str | Path | None = None) -> Source:
    """
    Classify `descriptor` and, for local paths, check the directory exists.

    Raises SourceNotFoundError for a missing local path and SourceNotDirectoryError when the
    path exists but is not a directory.
    """
    text = descriptor.strip()
    if not text:
        raise SourceNotFoundError("Starter descriptor must not be empty.")

    base = Path(cwd) if cwd is not None else Path.cwd()
    candidate = (base / Path(text).expanduser()).resolve()

    if not candidate.exists() and not _looks_like_path(text):
        m = _REPOSITORY.match(text)
        if m:
            return RemoteRepository(owner=m.group("owner"), name=m.group("name"), ref=m.group("ref") or None)

    if not candidate.exists():
        raise SourceNotFoundError(f"Starter directory does not exist: {candidate}")
    if not candidate.is_dir():
        raise SourceNotDirectoryError(f"Starter path is not a directory: {candidate}")
    return LocalPath(path=candidate)

