"""Unit tests for project name validation (themebuilder.naming)."""

from __future__ import annotations

import pytest

from themebuilder.errors import InvalidNameError
from themebuilder.naming import name_problems, validate_project_name


class TestNameProblems:
    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["test-project", "theme", "my.theme", "theme_2", "@acme/theme"])
    def test_valid_names(self, name):
        assert name_problems(name) == []

    @pytest.mark.unit
    def test_empty(self):
        assert name_problems("") == ["name length must be greater than zero"]

    @pytest.mark.unit
    def test_space_is_not_url_friendly(self):
        assert name_problems("test project") == ["name can only contain URL-friendly characters"]

    @pytest.mark.unit
    def test_leading_period(self):
        assert "name cannot start with a period" in name_problems(".theme")

    @pytest.mark.unit
    def test_leading_underscore(self):
        assert "name cannot start with an underscore" in name_problems("_theme")

    @pytest.mark.unit
    def test_surrounding_whitespace(self):
        assert "name cannot contain leading or trailing spaces" in name_problems(" theme")

    @pytest.mark.unit
    def test_capital_letters(self):
        assert name_problems("MyTheme") == ["name can no longer contain capital letters"]

    @pytest.mark.unit
    def test_special_characters(self):
        assert name_problems("theme!") == ["name can no longer contain special characters (\"~'!()*\")"]

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["node_modules", "favicon.ico"])
    def test_blacklisted(self, name):
        assert f"{name} is a blacklisted name" in name_problems(name)

    @pytest.mark.unit
    def test_core_module(self):
        assert name_problems("fs") == ["fs is a core module name"]

    @pytest.mark.unit
    def test_too_long(self):
        assert name_problems("a" * 215) == ["name can no longer contain more than 214 characters"]
        assert name_problems("a" * 214) == []

    @pytest.mark.unit
    def test_reports_every_problem(self):
        assert len(name_problems("_My Theme")) == 3


class TestValidateProjectName:
    @pytest.mark.unit
    def test_returns_name_when_valid(self):
        assert validate_project_name("test-project") == "test-project"

    @pytest.mark.unit
    def test_raises_with_problems(self):
        with pytest.raises(InvalidNameError, match="npm naming restrictions") as exc:
            validate_project_name("test project")
        assert exc.value.name == "test project"
        assert exc.value.problems == ["name can only contain URL-friendly characters"]
        assert exc.value.exit_code == 2
