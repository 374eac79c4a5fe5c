"""Découpage des arguments en groupes.

    runmany --no-color :: npm run watch :: python -m http.server

donne le groupe d'options ``["--no-color"]`` puis deux groupes de
commande.
"""

from typing import List, Sequence, Tuple

SEPARATOR = "::"


def split_groups(args: Sequence[str]) -> List[List[str]]:
    """Découpe les arguments sur chaque jeton ``::``.

    Le premier groupe (options globales) est toujours présent, même
    vide. Les groupes suivants ne sont conservés que s'ils sont non
    vides : deux séparateurs consécutifs ou un séparateur final ne
    produisent pas de commande vide.

    Seul un argument égal à ``::`` sépare les groupes ;
    ``"command::xxx"`` reste un argument ordinaire.

    Args:
        args: Arguments du programme, sans le nom de l'exécutable.

    Returns:
        Liste des groupes, le groupe d'options en tête.
    """
    groups: List[List[str]] = [[]]
    for arg in args:
        if arg == SEPARATOR:
            groups.append([])
        else:
            groups[-1].append(arg)
    return [groups[0]] + [group for group in groups[1:] if group]


def split_invocation(
    args: Sequence[str],
) -> Tuple[List[str], List[List[str]]]:
    """Retourne ``(groupe_options, groupes_commandes)``."""
    options_group, *command_groups = split_groups(args)
    return options_group, command_groups
