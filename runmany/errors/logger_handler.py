"""
    LoggerErrorHandler
"""
from runmany.errors.base import ErrorHandler
from runmany.errors.exceptions import RunmanyError
from runmany.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler pour logger les erreurs.

    Enregistre les erreurs dans le journal de diagnostic via le Logger
    injecté au constructeur.
    """

    def __init__(self, logger: Logger) -> None:
        self.logger = logger

    def handle(self, error: BaseException) -> None:
        """Log l'erreur avec son type ; Ctrl-C est un avertissement."""
        if isinstance(error, KeyboardInterrupt):
            self.logger.log_warning("Interruption clavier")
        elif isinstance(error, RunmanyError):
            self.logger.log_error(f"{type(error).__name__}: {str(error)}")
        else:
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {str(error)}"
            )
