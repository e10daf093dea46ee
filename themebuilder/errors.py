"""
errors.py

Responsibility: the error taxonomy shared by the scaffolder, the build command and the CLI.

Each error class carries its own process exit code so the CLI can map any failure to a
distinct non-zero status without a lookup table.
"""

from __future__ import annotations


class ThemeBuilderError(RuntimeError):
    exit_code = 1


class CommandError(ThemeBuilderError):
    """An external command exited non-zero."""

    exit_code = 1

    def __init__(self, message: str, *, cmd: list[str] | None = None, returncode: int | None = None, output: str = "") -> None:
        self.cmd = list(cmd or [])
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class InvalidNameError(ThemeBuilderError):
    exit_code = 2

    def __init__(self, name: str, problems: list[str]) -> None:
        self.name = name
        self.problems = list(problems)
        lines = "\n".join(f"  * {p}" for p in self.problems)
        super().__init__(f'Cannot create a project called "{name}" because of npm naming restrictions:\n{lines}')


class ConflictError(ThemeBuilderError):
    exit_code = 3


class SourceNotFoundError(ThemeBuilderError):
    exit_code = 4


class SourceNotDirectoryError(SourceNotFoundError):
    pass


class FetchError(ThemeBuilderError):
    exit_code = 5


class CopyError(ThemeBuilderError):
    exit_code = 6


class InstallError(ThemeBuilderError):
    exit_code = 7


class BuildError(ThemeBuilderError):
    exit_code = 8


class SettingsError(ThemeBuilderError):
    exit_code = 9
