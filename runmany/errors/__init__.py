"""Module de gestion des erreurs."""

from runmany.errors.base import (ErrorHandler,
                                 ErrorHandlerChain,
                                 FATAL_EXIT_CODE,
                                 INTERRUPTED_EXIT_CODE)
from runmany.errors.exceptions import (RunmanyError,
                                       ConfigurationError,
                                       RunmanyFatalError,
                                       SpawnError,
                                       StreamAcquisitionError,
                                       StreamReadError,
                                       ProcessWaitError,
                                       OutputWriteError)
from runmany.errors.console_handler import ConsoleErrorHandler
from runmany.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "RunmanyError",
    "ConfigurationError",
    "RunmanyFatalError",
    "SpawnError",
    "StreamAcquisitionError",
    "StreamReadError",
    "ProcessWaitError",
    "OutputWriteError",
    "ErrorHandler",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    "ErrorHandlerChain",
    "FATAL_EXIT_CODE",
    "INTERRUPTED_EXIT_CODE",
]
