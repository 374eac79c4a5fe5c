"""Textes d'aide et de version."""

from runmany import __version__

USAGE_TEMPLATE = """\
runmany - v{version}
Easily run multiple long-running commands in parallel.

Usage: runmany [RUNMANY FLAGS] [:: <COMMAND>] [:: <COMMAND>] [:: <COMMAND>]

Flags:
  -h, --help - print help
  -v, --version - print version
  --no-color - do not color command output"""


def usage_text(version: str = __version__) -> str:
    return USAGE_TEMPLATE.format(version=version)


def version_text(version: str = __version__) -> str:
    return f"v{version}"
