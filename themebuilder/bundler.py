"""
bundler.py

Responsibility: run the theme's bundler build and report the outcome.

The build mode is an explicit argument. It reaches the bundler both as `--mode` and as
`NODE_ENV` in the child's environment; this process's own environment is never modified.
"""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path

from themebuilder.errors import BuildError, CommandError
from themebuilder.runner import CommandRunner, OutputMode, SubprocessRunner

log = logging.getLogger(__name__)


class BuildMode(str, enum.Enum):
    PRODUCTION = "production"
    DEVELOPMENT = "development"


def build_command(mode: BuildMode, *, config_file: str | Path | None = None) -> list[str]:
    cmd = ["npx", "webpack", "--mode", mode.value]
    if config_file is not None:
        cmd += ["--config", str(config_file)]
    return cmd


def build_env(mode: BuildMode, base_env: dict[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base_env is None else base_env)
    env["NODE_ENV"] = mode.value
    return env


def run_build(
    project_dir: str | Path,
    mode: BuildMode = BuildMode.PRODUCTION,
    *,
    runner: CommandRunner | None = None,
    config_file: str | Path | None = None,
) -> None:
    """
    Run the bundler in `project_dir`, raising BuildError if it fails.
    """
    project = Path(project_dir).resolve()
    if not (project / "package.json").is_file():
        raise BuildError(f"No package.json found in {project}; is this a theme project?")

    runner = runner or SubprocessRunner()
    cmd = build_command(mode, config_file=config_file)
    log.debug("building %s in %s mode", project, mode.value)
    try:
        runner.run(cmd, cwd=project, output=OutputMode.INHERIT, env=build_env(mode))
    except CommandError as e:
        raise BuildError(f"{mode.value.capitalize()} build failed in {project}") from e
