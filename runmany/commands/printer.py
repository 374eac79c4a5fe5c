"""Impression des lignes d'une commande sur la sortie partagée.

Un LinePrinter est partagé par les deux tâches de transfert d'une
commande (stdout et stderr). Chaque ligne est formatée puis écrite
en un seul appel sous verrou : deux lignes ne peuvent jamais se
mélanger.
"""

import sys
import threading
from typing import Callable, Optional, TextIO

from runmany.commands.colors import colorize

Colorizer = Callable[[str, str], str]


def label_for_slot(slot: int) -> str:
    """Retourne le préfixe d'une commande (ex: '[2]: ')."""
    return f"[{slot}]: "


class LinePrinter:
    """Puits de lignes préfixées et colorées, sûr entre threads.

    Attributes:
        prefix: Préfixe ajouté devant chaque ligne (peut être vide).
        color: Couleur logique appliquée à la ligne, ou None.
    """

    def __init__(
        self,
        sink: Optional[TextIO] = None,
        prefix: str = "",
        color: Optional[str] = None,
        colorizer: Colorizer = colorize,
        lock: Optional[threading.Lock] = None,
    ) -> None:
        """Initialise le printer.

        Args:
            sink: Destination des lignes (défaut: sys.stdout au moment
                de l'écriture).
            prefix: Préfixe de chaque ligne.
            color: Couleur logique, None pour du texte brut.
            colorizer: Fonction (texte, couleur) -> texte stylisé.
            lock: Verrou à partager entre printers d'un même sink
                (défaut: verrou propre au printer).
        """
        self._sink = sink
        self.prefix = prefix
        self.color = color
        self._colorizer = colorizer
        self._lock = lock or threading.Lock()

    def format(self, line: str) -> str:
        """Construit la ligne finale, saut de ligne compris."""
        if self.color is not None:
            line = self._colorizer(line, self.color)
        return f"{self.prefix}{line}\n"

    def print(self, line: str) -> None:
        """Écrit une ligne complète de façon atomique."""
        with self._lock:
            sink = self._sink or sys.stdout
            sink.write(self.format(line))
            sink.flush()
