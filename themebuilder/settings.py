"""
settings.py

Responsibility: load scaffolder settings and per-run options into typed models.

Settings come from the packaged `defaults.yml`, optionally overlaid by a user YAML file.
Options are the per-invocation switches (`skip_install`, `package_manager`) and may be given
as plain mappings; unknown keys are ignored and missing keys fall back to defaults.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

import yaml

from themebuilder.errors import SettingsError

PACKAGE_MANAGERS: dict[str, list[str]] = {
    "yarn": ["yarnpkg"],
    "npm": ["npm", "install"],
}


@dataclass(frozen=True)
class OverlaySettings:
    template: str = "shopify.yml"
    directory: str = "config"


@dataclass(frozen=True)
class Settings:
    """Values that stay fixed across invocations unless a settings file overrides them."""

    default_starter: str = "shopify/starter-theme"
    repository_url: str = "git@github.com:{slug}.git"
    manifest: str = "package.json"
    excluded_paths: tuple[str, ...] = ("node_modules", ".git")
    overlay: OverlaySettings = field(default_factory=OverlaySettings)
    package_manager: str = ""


@dataclass(frozen=True)
class ScaffoldOptions:
    skip_install: bool = False
    package_manager: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ScaffoldOptions":
        data = data or {}
        skip = data.get("skip_install", data.get("skipInstall", False))
        manager = data.get("package_manager", data.get("packageManager"))
        return cls(skip_install=bool(skip), package_manager=str(manager) if manager else None)


def _read_yaml(text: str, origin: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in {origin}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"{origin} must be a mapping/object at the top level.")
    return data


def _str_value(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise SettingsError(f"`{key}` must be a string.")
    return value


def _settings_from_dict(data: dict[str, Any], base: Settings) -> Settings:
    excluded = data.get("excluded_paths", list(base.excluded_paths))
    if not isinstance(excluded, list) or not all(isinstance(p, str) and p for p in excluded):
        raise SettingsError("`excluded_paths` must be a list of non-empty strings.")

    overlay_raw = data.get("overlay") or {}
    if not isinstance(overlay_raw, dict):
        raise SettingsError("`overlay` must be an object/mapping when provided.")
    overlay = OverlaySettings(
        template=_str_value(overlay_raw, "template", base.overlay.template),
        directory=_str_value(overlay_raw, "directory", base.overlay.directory),
    )

    package_manager = _str_value(data, "package_manager", base.package_manager)
    if package_manager and package_manager not in PACKAGE_MANAGERS:
        raise SettingsError(f"Unknown package manager {package_manager!r} (expected one of: yarn, npm)")

    repository_url = _str_value(data, "repository_url", base.repository_url)
    if "{slug}" not in repository_url and "{owner}" not in repository_url:
        raise SettingsError("`repository_url` must contain a {slug} or {owner}/{name} placeholder.")

    return Settings(
        default_starter=_str_value(data, "default_starter", base.default_starter),
        repository_url=repository_url,
        manifest=_str_value(data, "manifest", base.manifest),
        excluded_paths=tuple(excluded),
        overlay=overlay,
        package_manager=package_manager,
    )


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load packaged defaults, then overlay the user settings file at `path` if given.
    """
    packaged = resources.files("themebuilder").joinpath("defaults.yml").read_text(encoding="utf-8")
    settings = _settings_from_dict(_read_yaml(packaged, "defaults.yml"), Settings())

    if path is None:
        return settings

    user_path = Path(path)
    if not user_path.is_file():
        raise SettingsError(f"Settings file does not exist: {user_path}")
    return _settings_from_dict(_read_yaml(user_path.read_text(encoding="utf-8"), str(user_path)), settings)


def install_command(package_manager: str | None) -> list[str]:
    """
    Return the install argv for `package_manager`, detecting yarn on PATH when unset.
    """
    if not package_manager:
        package_manager = "yarn" if shutil.which("yarnpkg") else "npm"
    try:
        return list(PACKAGE_MANAGERS[package_manager])
    except KeyError:
        raise SettingsError(f"Unknown package manager {package_manager!r} (expected one of: yarn, npm)") from None
