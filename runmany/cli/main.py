"""Point d'entrée de la commande ``runmany``.

Les arguments du processus sont lus une seule fois ici, puis
transmis explicitement au découpage, aux options et à
l'Orchestrator.

Codes de sortie :
    0   : exécution normale, quel que soit le résultat des commandes
    1   : erreur fatale (configuration, lancement, lecture d'un flux)
    130 : interruption clavier
"""

import sys
from typing import Optional, Sequence

from colorama import just_fix_windows_console

from runmany.cli.options import resolve_options, unknown_flags
from runmany.cli.segmenter import split_invocation
from runmany.cli.usage import usage_text, version_text
from runmany.commands.orchestrator import Orchestrator
from runmany.config.settings import RunmanySettings, load_settings
from runmany.errors import (
    ConfigurationError,
    ConsoleErrorHandler,
    ErrorHandlerChain,
    LoggerErrorHandler,
)
from runmany.logging.base import Logger
from runmany.logging.file_logger import FileLogger


def build_logger(settings: RunmanySettings) -> Optional[Logger]:
    """Crée le journal de diagnostic s'il est configuré.

    Raises:
        ConfigurationError: Si le fichier de log ne peut pas être ouvert.
    """
    log_file = settings.logging.file
    if log_file is None:
        return None
    try:
        return FileLogger(
            log_file,
            level=settings.logging.level,
            log_format=settings.logging.format,
        )
    except OSError as e:
        raise ConfigurationError(
            f"Journal {log_file} inaccessible: {e}"
        ) from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Exécute runmany.

    Args:
        argv: Arguments sans le nom du programme (défaut:
            sys.argv[1:]).

    Returns:
        Code de sortie du programme. Les erreurs fatales et Ctrl-C
        terminent le programme via SystemExit.
    """
    if argv is None:
        argv = sys.argv[1:]

    options_group, command_groups = split_invocation(argv)
    options = resolve_options(options_group)

    if not argv or options.help:
        print(usage_text())
        return 0

    if options.version:
        print(version_text())
        return 0

    errors = ErrorHandlerChain(ConsoleErrorHandler())
    with errors.fatal_errors():
        logger = build_logger(load_settings())
        if logger:
            errors.add_handler(LoggerErrorHandler(logger))
            for token in unknown_flags(options_group):
                logger.log_debug(f"Option inconnue ignorée : {token}")

        just_fix_windows_console()
        Orchestrator(logger=logger).run(command_groups, options)

    return 0
