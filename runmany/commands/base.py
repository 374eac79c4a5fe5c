"""Interfaces abstraites et structures de données pour l'exécution
de commandes.

Ce module définit :
    - CommandStatus : État final immuable d'une commande.
    - CommandRunner : Interface abstraite pour les exécuteurs.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class CommandStatus:
    """État final d'une commande lancée par runmany.

    Attributes:
        command: Commande exécutée (exécutable puis arguments).
        return_code: Code de retour, ou None si le processus a été
            interrompu sans code (signal).
        success: True si la commande s'est terminée avec le code 0.
        duration: Durée d'exécution en secondes.
    """

    command: Tuple[str, ...]
    return_code: Optional[int]
    success: bool
    duration: float


class CommandRunner(ABC):
    """Interface abstraite pour l'exécution d'une commande."""

    @abstractmethod
    def run(self, command: Sequence[str]) -> CommandStatus:
        """Exécute une commande jusqu'à sa fin naturelle.

        Args:
            command: Exécutable suivi de ses arguments.

        Returns:
            État final de la commande.

        Raises:
            RunmanyFatalError: Si la commande ne peut pas être lancée,
                lue ou attendue.
        """
        pass
