"""
runner.py

Responsibility: the single seam through which external commands (git, the package manager,
the bundler) are executed.

Callers pick an `OutputMode`:
- CAPTURE: stdout/stderr are piped and attached to the error on failure (git clone).
- INHERIT: the child writes straight to the terminal so the user sees live progress
  (package install, bundler build).

Anything that needs to run a command takes a `CommandRunner`; tests substitute a fake.
"""

from __future__ import annotations

import enum
import logging
import subprocess
from pathlib import Path
from typing import Protocol

from themebuilder.errors import CommandError

log = logging.getLogger(__name__)


class OutputMode(enum.Enum):
    CAPTURE = "capture"
    INHERIT = "inherit"


class CommandRunner(Protocol):
    def run(
        self,
        cmd: list[str],
        *,
        cwd: Path | None = None,
        output: OutputMode = OutputMode.CAPTURE,
        env: dict[str, str] | None = None,
    ) -> None: ...


class SubprocessRunner:
    """
    Run commands with `subprocess.run`, blocking until they exit.

    Raises CommandError when the command exits non-zero or cannot be started.
    """

    def run(
        self,
        cmd: list[str],
        *,
        cwd: Path | None = None,
        output: OutputMode = OutputMode.CAPTURE,
        env: dict[str, str] | None = None,
    ) -> None:
        log.debug("running %s (cwd=%s, output=%s)", " ".join(cmd), cwd, output.value)
        kwargs: dict[str, object] = {}
        if output is OutputMode.CAPTURE:
            kwargs = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT, "text": True}
        try:
            subprocess.run(cmd, cwd=str(cwd) if cwd else None, env=env, check=True, **kwargs)
        except subprocess.CalledProcessError as e:
            raise CommandError(
                f"Command failed: {' '.join(cmd)}\n\n{e.stdout or ''}".rstrip(),
                cmd=cmd,
                returncode=e.returncode,
                output=e.stdout or "",
            ) from e
        except FileNotFoundError as e:
            raise CommandError(f"Command not found: {cmd[0]}", cmd=cmd) from e
