"""
scaffold.py

Responsibility: create a new theme project from a starter.

High-level flow:
1) Validate the project name (npm rules)
2) Refuse if the target already holds a project (manifest marker present)
3) Parse the starter descriptor into a RemoteRepository or LocalPath
4) Materialize: shallow single-branch git clone, or filtered local copy
5) Overlay the configuration template into `config/`
6) Install dependencies unless told to skip

Steps 1-3 fail before anything is written. Later failures leave whatever was already written
on disk; callers decide whether to remove it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from themebuilder.console import print_step, print_warning
from themebuilder.errors import CommandError, ConflictError, FetchError, InstallError
from themebuilder.naming import validate_project_name
from themebuilder.renderer import copy_tree, render_overlay
from themebuilder.runner import CommandRunner, OutputMode, SubprocessRunner
from themebuilder.settings import ScaffoldOptions, Settings, install_command, load_settings
from themebuilder.source import LocalPath, RemoteRepository, Source, parse_source

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScaffoldResult:
    target: Path
    source: Source
    copied_files: int
    overlay_written: bool
    installed: bool


def clone_command(repo: RemoteRepository, target: Path, *, url_template: str) -> list[str]:
    cmd = ["git", "clone"]
    if repo.ref:
        cmd += ["-b", repo.ref]
    cmd += [repo.clone_url(url_template), str(target), "--single-branch"]
    return cmd


def _check_conflict(target: Path, manifest: str) -> None:
    marker = target / manifest
    if marker.exists():
        raise ConflictError(
            f"A project already exists at {target} ({manifest} found). "
            "Choose a different name or remove the existing directory."
        )


def _clone(repo: RemoteRepository, target: Path, *, runner: CommandRunner, settings: Settings) -> None:
    cmd = clone_command(repo, target, url_template=settings.repository_url)
    try:
        runner.run(cmd, output=OutputMode.CAPTURE)
    except CommandError as e:
        raise FetchError(f"Failed to clone {repo.slug}{'#' + repo.ref if repo.ref else ''}:\n{e}") from e


def _install(target: Path, *, runner: CommandRunner, package_manager: str | None) -> None:
    cmd = install_command(package_manager)
    try:
        runner.run(cmd, cwd=target, output=OutputMode.INHERIT)
    except CommandError as e:
        raise InstallError(
            f"The project files were created in {target}, but installing dependencies failed "
            f"({' '.join(cmd)}). Fix the problem and re-run the install from that directory."
        ) from e


def scaffold(
    project_name: str,
    source: str | None = None,
    options: ScaffoldOptions | Mapping[str, Any] | None = None,
    *,
    cwd: str | Path | None = None,
    runner: CommandRunner | None = None,
    settings: Settings | None = None,
) -> ScaffoldResult:
    """
    Create `project_name` under `cwd` from the starter named by `source`.

    `source` defaults to the configured default starter. Raises a ThemeBuilderError subclass
    on any failure.
    """
    settings = settings or load_settings()
    if not isinstance(options, ScaffoldOptions):
        options = ScaffoldOptions.from_mapping(options)
    runner = runner or SubprocessRunner()
    base = Path(cwd).resolve() if cwd is not None else Path.cwd()

    validate_project_name(project_name)
    target = base / project_name
    _check_conflict(target, settings.manifest)
    starter = parse_source(source or settings.default_starter, cwd=base)

    copied = 0
    if isinstance(starter, RemoteRepository):
        print_step(f"Cloning {starter.slug} into {target}")
        _clone(starter, target, runner=runner, settings=settings)
    elif isinstance(starter, LocalPath):
        print_step(f"Copying {starter.path} into {target}")
        copied = copy_tree(
            source_dir=starter.path,
            destination_dir=target,
            excluded=settings.excluded_paths,
        ).copied_files

    overlay = render_overlay(
        template_name=settings.overlay.template,
        destination_dir=target / settings.overlay.directory,
        context={"project_name": project_name},
        root=target,
    )
    if not overlay.written:
        print_warning(f"Keeping the starter's own {overlay.path.relative_to(target)}")

    installed = False
    if options.skip_install:
        log.debug("skipping dependency install")
    else:
        print_step("Installing dependencies")
        _install(target, runner=runner, package_manager=options.package_manager or settings.package_manager)
        installed = True

    return ScaffoldResult(
        target=target,
        source=starter,
        copied_files=copied,
        overlay_written=overlay.written,
        installed=installed,
    )
