"""
Runmany - Exécution parallèle de plusieurs commandes longues.

Modules disponibles:
- cli: Point d'entrée, découpage des arguments et options globales
- commands: Exécution concurrente des commandes (LinePrinter,
  ProcessCommandRunner, Orchestrator)
- config: Chargement de configuration (TOML, JSON, Pydantic)
- logging: Journal de diagnostic (Logger, FileLogger)
- errors: Exceptions et handlers d'erreurs
"""

__version__ = "0.1.0"

from runmany.cli import (
    RunmanyOptions,
    resolve_options,
    split_groups,
    split_invocation,
)
from runmany.commands import (
    CommandStatus,
    LinePrinter,
    Orchestrator,
    ProcessCommandRunner,
)
from runmany.cli.main import main

__all__ = [
    "__version__",
    "RunmanyOptions",
    "resolve_options",
    "split_groups",
    "split_invocation",
    "CommandStatus",
    "LinePrinter",
    "Orchestrator",
    "ProcessCommandRunner",
    "main",
]
