"""
    ConsoleErrorHandler
"""
import sys
from typing import TextIO, Optional

from runmany.errors.base import ErrorHandler
from runmany.errors.exceptions import (RunmanyError,
                                       ConfigurationError,
                                       SpawnError,
                                       StreamAcquisitionError,
                                       StreamReadError,
                                       ProcessWaitError,
                                       OutputWriteError)


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs sur la sortie d'erreur.

    La sortie standard est réservée aux lignes des commandes : les
    messages d'erreur de runmany vont donc sur stderr, suivis d'une
    suggestion adaptée au type d'erreur.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        """Initialise le handler console.

        Args:
            stream: Flux de sortie (défaut: sys.stderr au moment
                de l'affichage).
        """
        self._stream = stream

    def _print(self, message: str) -> None:
        print(message, file=self._stream or sys.stderr)

    def handle(self, error: BaseException) -> None:
        """Affiche l'erreur avec un message utilisateur."""
        if isinstance(error, KeyboardInterrupt):
            self._print("runmany: interrompu")
        elif isinstance(error, RunmanyError):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def _handle_known_error(self, error: RunmanyError) -> None:
        """Affiche le type et le message, puis une suggestion."""
        self._print(f"runmany: {type(error).__name__}: {error}")

        if isinstance(error, SpawnError):
            self._print(
                "runmany: vérifiez que l'exécutable existe et qu'il est "
                "exécutable."
            )
        elif isinstance(error, ConfigurationError):
            self._print("runmany: vérifiez votre fichier de configuration.")
        elif isinstance(error, (StreamAcquisitionError, StreamReadError)):
            self._print(
                "runmany: la sortie de la commande n'a pas pu être lue "
                "(texte UTF-8 attendu)."
            )
        elif isinstance(error, OutputWriteError):
            self._print("runmany: la sortie de runmany a été fermée.")
        elif isinstance(error, ProcessWaitError):
            self._print("runmany: l'état final de la commande est inconnu.")

    def _handle_unknown_error(self, error: BaseException) -> None:
        """Gère les erreurs inattendues."""
        self._print(f"runmany: erreur inattendue: {error}")
        self._print(f"Type: {type(error).__name__}")
