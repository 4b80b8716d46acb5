"""
cli — command-line interface for fxresolver.

Entry points
────────────
  python -m fxresolver   (via fxresolver/__main__.py)
  fxresolver             (via pyproject.toml [project.scripts])

Subcommands: info | refs | closure | system | sdk
"""

from fxresolver.cli.main import build_parser, cmd_closure, cmd_info, cmd_refs, main

__all__ = ["build_parser", "cmd_closure", "cmd_info", "cmd_refs", "main"]
