"""Handlers d'erreurs et politique de sortie de runmany.

Une erreur fatale (RunmanyError) ou une interruption clavier est
diffusée à tous les handlers (console, journal), puis termine le
programme avec un code qui dépend de sa nature :

    1   : erreur de configuration ou erreur fatale d'une commande
    130 : interruption clavier (Ctrl-C)

Les threads des commandes encore actifs sont des threads démons : ils
sont abandonnés à la sortie de l'interpréteur.
"""

import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, NoReturn, Optional

from runmany.errors.exceptions import RunmanyError

FATAL_EXIT_CODE = 1
INTERRUPTED_EXIT_CODE = 130


class ErrorHandler(ABC):
    """Stratégie de signalement d'une erreur (console, journal...)."""

    @abstractmethod
    def handle(self, error: BaseException) -> None:
        """Signale une erreur ou une interruption clavier."""
        pass


class ErrorHandlerChain:
    """Diffuse les erreurs fatales et termine le programme.

    Example :
        errors = ErrorHandlerChain(ConsoleErrorHandler())
        with errors.fatal_errors():
            Orchestrator().run(groups, options)
    """

    def __init__(self, *handlers: ErrorHandler) -> None:
        self.handlers: list[ErrorHandler] = list(handlers)

    def add_handler(self, handler: ErrorHandler) -> None:
        """Ajoute un handler, appelé après ceux déjà enregistrés."""
        self.handlers.append(handler)

    def handle(self, error: BaseException) -> None:
        for handler in self.handlers:
            handler.handle(error)

    @staticmethod
    def exit_code_for(error: BaseException) -> int:
        """Code de sortie du programme pour une erreur donnée."""
        if isinstance(error, KeyboardInterrupt):
            return INTERRUPTED_EXIT_CODE
        return FATAL_EXIT_CODE

    def handle_and_exit(
        self, error: BaseException, exit_code: Optional[int] = None
    ) -> NoReturn:
        """Signale l'erreur puis termine le programme.

        Args:
            error: L'erreur à signaler.
            exit_code: Code imposé (défaut: exit_code_for(error)).
        """
        self.handle(error)
        if exit_code is None:
            exit_code = self.exit_code_for(error)
        sys.exit(exit_code)

    @contextmanager
    def fatal_errors(self) -> Iterator["ErrorHandlerChain"]:
        """Termine le programme sur RunmanyError ou Ctrl-C.

        Les autres exceptions sont des bugs : elles se propagent avec
        leur traceback.
        """
        try:
            yield self
        except (RunmanyError, KeyboardInterrupt) as e:
            self.handle_and_exit(e)
