"""Formateurs des messages d'état affichés pour chaque commande.

Classes :
    CommandFormatter : Interface abstraite de formatage.
    DefaultCommandFormatter : Messages d'annonce et de fin.

Le préfixe [n] et la couleur ne sont pas de leur ressort : ils sont
ajoutés par le LinePrinter de la commande.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from runmany.commands.base import CommandStatus


class CommandFormatter(ABC):
    """Interface abstraite pour formater les messages d'état."""

    @abstractmethod
    def format_spawn(self, command: Sequence[str]) -> str:
        """Formate l'annonce du lancement d'une commande.

        Args:
            command: Exécutable suivi de ses arguments.

        Returns:
            Ligne prête à l'affichage.
        """
        pass

    @abstractmethod
    def format_status(self, status: CommandStatus) -> str:
        """Formate la ligne de fin d'une commande.

        Args:
            status: État final de la commande.

        Returns:
            Ligne prête à l'affichage.
        """
        pass


class DefaultCommandFormatter(CommandFormatter):
    """Messages standards de runmany.

    Example :
        Spawning command: "npm run watch"
        Command finished successfully
        Command exited with status: 2
        Command exited with status: unknown
    """

    UNKNOWN_CODE = "unknown"

    def format_spawn(self, command: Sequence[str]) -> str:
        """Reconstitue la ligne de commande, jetons séparés par un espace."""
        return f'Spawning command: "{" ".join(command)}"'

    def format_status(self, status: CommandStatus) -> str:
        if status.success:
            return "Command finished successfully"
        if status.return_code is None:
            code = self.UNKNOWN_CODE
        else:
            code = str(status.return_code)
        return f"Command exited with status: {code}"
