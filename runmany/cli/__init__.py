"""Module de ligne de commande.

Le point d'entrée ``main`` est dans runmany.cli.main ; il n'est pas
importé ici car il dépend du module commands.
"""

from runmany.cli.options import (
    RunmanyOptions,
    resolve_options,
    unknown_flags,
)
from runmany.cli.segmenter import (
    SEPARATOR,
    split_groups,
    split_invocation,
)
from runmany.cli.usage import usage_text, version_text

__all__ = [
    "RunmanyOptions",
    "resolve_options",
    "unknown_flags",
    "SEPARATOR",
    "split_groups",
    "split_invocation",
    "usage_text",
    "version_text",
]
