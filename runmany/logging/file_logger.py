"""Implémentation concrète du logger avec fichier."""

import logging
import os
from typing import Optional

from runmany.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class FileLogger(Logger):
    """
    Logger qui écrit dans un fichier.

    Caractéristiques:
    - Logger unique par fichier (évite les conflits)
    - Encodage UTF-8 explicite
    - Flush immédiat après chaque log
    - Pas de propagation (évite les logs en double)
    - Jamais de sortie console : stdout appartient aux commandes

    Les méthodes de log peuvent être appelées depuis plusieurs threads
    à la fois, le module logging sérialisant l'écriture des handlers.
    """

    def __init__(
        self,
        log_file: str,
        level: str = "INFO",
        log_format: Optional[str] = None,
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log
            level: Nom du niveau de log (DEBUG, INFO, WARNING, ERROR)
            log_format: Format des enregistrements (défaut: DEFAULT_FORMAT)
        """
        self.log_file = log_file

        # Créer le répertoire de logs si nécessaire
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        log_level = getattr(logging, level.upper(), logging.INFO)

        self.logger = logging.getLogger(f"runmany.{log_file}")
        self.logger.setLevel(log_level)

        # Éviter les handlers dupliqués
        if not self.logger.handlers:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(log_format or DEFAULT_FORMAT)
            )
            self.logger.addHandler(file_handler)
            self.handler = file_handler
        else:
            self.handler = self.logger.handlers[0]

        self.logger.propagate = False

    def _flush(self) -> None:
        """Force l'écriture immédiate sur le disque."""
        if self.handler:
            self.handler.flush()

    def log_debug(self, message: str) -> None:
        """Log un message de débogage."""
        self.logger.debug(message)
        self._flush()

    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        self.logger.info(message)
        self._flush()

    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        self.logger.warning(message)
        self._flush()

    def log_error(self, message: str) -> None:
        """Log une erreur."""
        self.logger.error(message)
        self._flush()

    def close(self) -> None:
        """Ferme et détache le handler fichier."""
        if self.handler:
            self.handler.close()
            self.logger.removeHandler(self.handler)
            self.handler = None
