"""Résolution des options globales de runmany."""

from dataclasses import dataclass
from typing import List, Sequence

HELP_FLAGS = ("-h", "--help")
VERSION_FLAGS = ("-v", "--version")
NO_COLOR_FLAGS = ("--no-color",)

KNOWN_FLAGS = HELP_FLAGS + VERSION_FLAGS + NO_COLOR_FLAGS


@dataclass(frozen=True)
class RunmanyOptions:
    """Options globales, lues avant le premier ``::``.

    Attributes:
        help: Afficher l'aide et quitter.
        version: Afficher la version et quitter.
        no_color: Ni préfixe ni couleur sur les lignes des commandes.
    """

    help: bool = False
    version: bool = False
    no_color: bool = False


def _has_any(group: Sequence[str], flags: Sequence[str]) -> bool:
    return any(flag in group for flag in flags)


def resolve_options(group: Sequence[str]) -> RunmanyOptions:
    """Construit les options à partir du groupe d'options.

    Chaque option est recherchée sous sa forme courte et longue,
    n'importe où dans le groupe. Les jetons inconnus sont ignorés
    sans erreur.

    Args:
        group: Groupe d'options (premier groupe du découpage).

    Returns:
        Options résolues.
    """
    return RunmanyOptions(
        help=_has_any(group, HELP_FLAGS),
        version=_has_any(group, VERSION_FLAGS),
        no_color=_has_any(group, NO_COLOR_FLAGS),
    )


def unknown_flags(group: Sequence[str]) -> List[str]:
    """Liste les jetons du groupe qui ne sont pas des options connues."""
    return [token for token in group if token not in KNOWN_FLAGS]
