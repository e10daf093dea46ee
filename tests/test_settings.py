"""Unit tests for settings and options (themebuilder.settings)."""

from __future__ import annotations

import pytest

from themebuilder.errors import SettingsError
from themebuilder.settings import ScaffoldOptions, Settings, install_command, load_settings


class TestLoadSettings:
    @pytest.mark.unit
    def test_packaged_defaults(self):
        settings = load_settings()
        assert settings == Settings()

    @pytest.mark.unit
    def test_user_file_overrides(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text(
            "default_starter: acme/base-theme\n"
            "repository_url: 'https://github.com/{slug}.git'\n"
            "package_manager: npm\n"
            "overlay:\n  directory: settings\n"
            "unknown_key: ignored\n",
            encoding="utf-8",
        )

        settings = load_settings(path)

        assert settings.default_starter == "acme/base-theme"
        assert settings.repository_url == "https://github.com/{slug}.git"
        assert settings.package_manager == "npm"
        assert settings.overlay.directory == "settings"
        assert settings.overlay.template == "shopify.yml"
        assert settings.excluded_paths == ("node_modules", ".git")

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(SettingsError, match="does not exist"):
            load_settings(tmp_path / "nope.yml")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "content, message",
        [
            ("- a\n- b\n", "mapping"),
            ("package_manager: pnpm\n", "Unknown package manager"),
            ("excluded_paths: node_modules\n", "excluded_paths"),
            ("repository_url: https://example.com/repo.git\n", "placeholder"),
            ("overlay: [1]\n", "overlay"),
            ("manifest: 3\n", "manifest"),
            ("default_starter: [unclosed\n", "Invalid YAML"),
        ],
    )
    def test_invalid_values(self, tmp_path, content, message):
        path = tmp_path / "settings.yml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(SettingsError, match=message):
            load_settings(path)


class TestScaffoldOptions:
    @pytest.mark.unit
    def test_defaults(self):
        assert ScaffoldOptions.from_mapping(None) == ScaffoldOptions(skip_install=False, package_manager=None)

    @pytest.mark.unit
    def test_camel_case_keys(self):
        opts = ScaffoldOptions.from_mapping({"skipInstall": True, "packageManager": "npm"})
        assert opts == ScaffoldOptions(skip_install=True, package_manager="npm")

    @pytest.mark.unit
    def test_unknown_keys_ignored(self):
        assert ScaffoldOptions.from_mapping({"colors": False}) == ScaffoldOptions()


class TestInstallCommand:
    @pytest.mark.unit
    def test_explicit(self):
        assert install_command("yarn") == ["yarnpkg"]
        assert install_command("npm") == ["npm", "install"]

    @pytest.mark.unit
    def test_detects_yarn(self, monkeypatch):
        monkeypatch.setattr("themebuilder.settings.shutil.which", lambda name: "/usr/bin/yarnpkg")
        assert install_command(None) == ["yarnpkg"]

    @pytest.mark.unit
    def test_falls_back_to_npm(self, monkeypatch):
        monkeypatch.setattr("themebuilder.settings.shutil.which", lambda name: None)
        assert install_command("") == ["npm", "install"]

    @pytest.mark.unit
    def test_unknown(self):
        with pytest.raises(SettingsError):
            install_command("pnpm")
