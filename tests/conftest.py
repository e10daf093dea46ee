"""Shared pytest fixtures for the theme-builder test suite.

Provides reusable fixtures for:
- A recording fake of the external-command runner
- Starter directory trees on disk
- Settings that never depend on what is installed on PATH
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from themebuilder.errors import CommandError
from themebuilder.runner import OutputMode
from themebuilder.settings import Settings


@dataclass
class Call:
    cmd: list[str]
    cwd: Path | None
    output: OutputMode
    env: dict[str, str] | None


@dataclass
class RecordingRunner:
    """Records every command instead of running it; fails for programs in `fail_on`."""

    fail_on: set[str] = field(default_factory=set)
    calls: list[Call] = field(default_factory=list)

    def run(self, cmd, *, cwd=None, output=OutputMode.CAPTURE, env=None):
        self.calls.append(Call(cmd=list(cmd), cwd=cwd, output=output, env=env))
        if cmd[0] in self.fail_on:
            raise CommandError(f"Command failed: {' '.join(cmd)}", cmd=cmd, returncode=1, output="boom")

    def commands(self) -> list[list[str]]:
        return [c.cmd for c in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Resolved temporary directory that is also the current working directory."""
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def settings() -> Settings:
    return Settings(package_manager="yarn")


@pytest.fixture
def make_tree():
    """Write a ``{relative_path: content}`` mapping under a root directory."""

    def _make(root: Path, files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def starter_tree(workdir: Path, make_tree) -> Path:
    """A local starter with dependency and VCS directories at several depths."""
    return make_tree(
        workdir / "old-project",
        {
            "package.json": '{ "name": "test-repo" }',
            "src/layout/theme.liquid": "<html>{{ content_for_layout }}</html>",
            "src/assets/styles.scss": "body { margin: 0; }",
            "node_modules/some-package/index.js": "",
            ".git/index": "",
            "packages/inner/node_modules/dep/index.js": "",
            "packages/inner/.git/HEAD": "ref: refs/heads/main",
            "packages/inner/index.js": "module.exports = 1;",
        },
    )


@pytest.fixture
def make_runner():
    """Build a RecordingRunner that fails for the given program names."""

    def _make(fail_on: set[str] | None = None) -> RecordingRunner:
        return RecordingRunner(fail_on=set(fail_on or ()))

    return _make
