"""Palette de couleurs des commandes et colorisation du texte.

La colorisation est déléguée à colorama : une couleur logique
("green", "cyan"...) est traduite en séquence ANSI, sans modifier
le contenu du texte.
"""

from colorama import Fore, Style

PALETTE = ("green", "yellow", "blue", "magenta", "cyan")


def color_for_slot(slot: int) -> str:
    """Retourne la couleur de la commande en position ``slot``.

    La palette est parcourue de façon cyclique : la commande 1 est
    verte, la 6 aussi.

    Args:
        slot: Position 1-based de la commande.

    Returns:
        Nom de couleur logique.

    Raises:
        ValueError: Si slot est inférieur à 1.
    """
    if slot < 1:
        raise ValueError(f"La position doit commencer à 1, reçu: {slot}")
    return PALETTE[(slot - 1) % len(PALETTE)]


def colorize(text: str, color: str) -> str:
    """Applique une couleur colorama à un texte.

    Args:
        text: Texte à styliser.
        color: Nom de couleur logique (ex: 'green').

    Returns:
        Texte entouré des codes de couleur et de réinitialisation.

    Raises:
        ValueError: Si la couleur n'est pas connue de colorama.
    """
    code = getattr(Fore, color.upper(), None)
    if code is None:
        raise ValueError(f"Couleur inconnue: {color}")
    return f"{code}{text}{Style.RESET_ALL}"
