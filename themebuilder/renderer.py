"""
renderer.py

Responsibility: put starter files and the configuration overlay on disk.

Rules:
- Walk the starter tree in sorted order so copies are deterministic.
- Prune excluded directory names (dependency and VCS dirs) at every depth.
- Copy files exactly as they exist in the starter, preserving metadata.
- The overlay is a packaged template; if Jinja2 markers are present it is rendered with the
  provided context, otherwise it is copied byte-for-byte.

This module intentionally does NOT know about git, package managers, or CLI parsing.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

from jinja2 import Environment, StrictUndefined, TemplateError

from themebuilder.errors import CopyError

log = logging.getLogger(__name__)

TEMPLATES_PACKAGE = "themebuilder.templates"


@dataclass(frozen=True)
class CopyResult:
    copied_files: int


@dataclass(frozen=True)
class OverlayResult:
    path: Path
    written: bool


def _has_template_markers(text: str) -> bool:
    return ("{{" in text) or ("{%" in text) or ("{#" in text)


def _iter_tree_files(source_dir: Path, *, excluded: frozenset[str], skip: Path | None = None) -> list[Path]:
    """
    Return all files under source_dir except those beneath an excluded directory name,
    in deterministic lexicographic order (relative path ordering).
    """
    files: list[Path] = []
    for root, dirs, filenames in os.walk(source_dir):
        root_path = Path(root)
        # Pruning `dirs` in place stops os.walk from descending.
        dirs[:] = [d for d in dirs if d not in excluded and (skip is None or root_path / d != skip)]
        # Symlinked directories are recreated as links, not followed.
        links = [d for d in dirs if (root_path / d).is_symlink()]
        dirs[:] = [d for d in dirs if d not in links]
        files.extend(root_path / d for d in links)
        for name in filenames:
            if name in excluded:
                continue
            files.append(root_path / name)
    files.sort(key=lambda p: str(p.relative_to(source_dir)).replace(os.sep, "/"))
    return files


def copy_tree(
    *,
    source_dir: str | Path,
    destination_dir: str | Path,
    excluded: Iterable[str],
) -> CopyResult:
    """
    Copy a starter directory into destination_dir, leaving out excluded names.

    - Creates destination directories as needed.
    - If destination_dir lies inside source_dir it is never copied into itself.
    """
    src_dir = Path(source_dir).resolve()
    dst_dir = Path(destination_dir).resolve()
    excluded_names = frozenset(excluded)

    if dst_dir == src_dir:
        raise CopyError(f"Starter directory and project directory are the same: {src_dir}")
    skip = dst_dir if dst_dir.is_relative_to(src_dir) else None

    copied = 0
    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
        for src_path in _iter_tree_files(src_dir, excluded=excluded_names, skip=skip):
            rel = src_path.relative_to(src_dir)
            dst_path = dst_dir / rel
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src_path, dst_path, follow_symlinks=False)
            copied += 1
    except OSError as e:
        raise CopyError(f"Failed copying starter {src_dir} to {dst_dir}: {e}") from e

    log.debug("copied %d files from %s to %s", copied, src_dir, dst_dir)
    return CopyResult(copied_files=copied)


def _check_inside(dst_path: Path, root: Path) -> None:
    """
    Refuse to write through a symlink or anywhere that resolves outside root.
    """
    root_dir = root.resolve()
    for part in (dst_path, *dst_path.parents):
        if part == root or part.resolve() == root_dir:
            break
        if part.is_symlink():
            raise CopyError(f"Refusing to write the overlay through symlink {part}")
    if not dst_path.resolve().is_relative_to(root_dir):
        raise CopyError(f"Overlay path {dst_path} resolves outside {root_dir}")


def render_overlay(
    *,
    template_name: str,
    destination_dir: str | Path,
    context: dict[str, Any],
    root: str | Path | None = None,
) -> OverlayResult:
    """
    Write the packaged overlay template into destination_dir.

    An existing file with the same name is left untouched (`written=False`). Symlinks, and
    destinations that resolve outside `root` (default: destination_dir), raise CopyError.
    """
    dst_dir = Path(destination_dir)
    dst_path = dst_dir / template_name
    _check_inside(dst_path, Path(root) if root is not None else dst_dir)
    if dst_path.exists():
        return OverlayResult(path=dst_path, written=False)

    template_file = resources.files(TEMPLATES_PACKAGE).joinpath(template_name)
    if not template_file.is_file():
        raise CopyError(f"Overlay template not found: {template_name}")

    try:
        dst_dir.mkdir(parents=True, exist_ok=True)
        text = template_file.read_text(encoding="utf-8")
        if _has_template_markers(text):
            env = Environment(
                autoescape=False,
                undefined=StrictUndefined,
                keep_trailing_newline=True,
            )
            try:
                out = env.from_string(text).render(**context)
            except TemplateError as e:
                raise CopyError(f"Failed rendering overlay template: {template_name}") from e
            dst_path.write_text(out, encoding="utf-8", newline="\n")
        else:
            dst_path.write_bytes(template_file.read_bytes())
    except OSError as e:
        raise CopyError(f"Failed writing overlay {dst_path}: {e}") from e

    return OverlayResult(path=dst_path, written=True)
