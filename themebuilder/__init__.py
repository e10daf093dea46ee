"""
themebuilder package

Developer tooling for Shopify themes, shipped as the `theme-builder` CLI.

Key responsibilities are split across modules:
- `naming.py`: npm package-name validation for new projects
- `source.py`: parse a starter descriptor into a remote repository or a local path
- `renderer.py`: filtered starter copy and configuration overlay rendering
- `runner.py`: the external-command seam (git, package manager, bundler)
- `scaffold.py`: project creation (validate -> materialize -> overlay -> install)
- `bundler.py`: bundler build with an explicit mode
- `settings.py`: packaged YAML defaults, user settings, per-run options
- `cli.py`: CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
