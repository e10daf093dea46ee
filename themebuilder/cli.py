"""
cli.py

Responsibility: CLI entrypoint for theme-builder.

Commands:
- `create`: scaffold a new theme project (see `scaffold.py`)
- `build`: run the bundler build (see `bundler.py`)

This module only parses arguments, wires settings into the operations and maps errors to
exit codes. Every failure surfaces as a ThemeBuilderError carrying its own exit code.
"""

from __future__ import annotations

import argparse

from themebuilder import __version__
from themebuilder.bundler import BuildMode, run_build
from themebuilder.console import configure_logging, print_error, print_step, print_success
from themebuilder.errors import ThemeBuilderError
from themebuilder.scaffold import scaffold
from themebuilder.settings import ScaffoldOptions, load_settings


def create_cmd(args: argparse.Namespace) -> int:
    settings = load_settings(args.settings)
    options = ScaffoldOptions(skip_install=bool(args.skip_install), package_manager=args.package_manager)
    result = scaffold(args.name, args.starter, options, settings=settings)

    print_success(f"Created {args.name} at {result.target}")
    if not result.installed:
        print_step("Dependencies were not installed; run your package manager's install in the project.")
    return 0


def build_cmd(args: argparse.Namespace) -> int:
    run_build(args.project_dir, BuildMode(args.mode), config_file=args.config)
    print_success(f"{args.mode.capitalize()} build finished")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="theme-builder", description="Scaffold and build Shopify themes")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    c = sub.add_parser("create", parents=[common], help="Create a new theme project from a starter")
    c.add_argument("name", help="Project name (must be a valid npm package name)")
    c.add_argument(
        "starter",
        nargs="?",
        default=None,
        help="Starter: owner/repo[#branch-or-commit] or a local directory (default: settings.default_starter)",
    )
    c.add_argument("--skip-install", action="store_true", help="Do not install dependencies")
    c.add_argument("--package-manager", choices=["yarn", "npm"], default=None, help="Package manager used to install")
    c.add_argument("--settings", default=None, help="YAML file overriding the built-in settings")
    c.set_defaults(func=create_cmd)

    b = sub.add_parser("build", parents=[common], help="Run the bundler build for a theme project")
    b.add_argument(
        "--mode",
        choices=[m.value for m in BuildMode],
        default=BuildMode.PRODUCTION.value,
        help="Build mode (default: production)",
    )
    b.add_argument("--project-dir", default=".", help="Theme project directory (default: current directory)")
    b.add_argument("--config", default=None, help="Bundler configuration file")
    b.set_defaults(func=build_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(bool(args.verbose))
    try:
        return int(args.func(args))
    except ThemeBuilderError as e:
        print_error(str(e))
        return e.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
