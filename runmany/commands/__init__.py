"""Module d'exécution concurrente des commandes.

Classes disponibles :
    CommandStatus : État final immuable d'une commande.
    CommandRunner : Interface abstraite pour les exécuteurs.
    CommandFormatter : Interface abstraite de formatage.
    DefaultCommandFormatter : Messages d'annonce et de fin.
    LinePrinter : Sortie préfixée et colorée, sûre entre threads.
    ProcessCommandRunner : Exécuteur concret via subprocess.
    Orchestrator : Lancement parallèle de toutes les commandes.
    TaskGroup : Threads démons avec attente collective.
"""

from runmany.commands.base import (
    CommandStatus,
    CommandRunner,
)
from runmany.commands.colors import PALETTE, color_for_slot, colorize
from runmany.commands.formatter import (
    CommandFormatter,
    DefaultCommandFormatter,
)
from runmany.commands.printer import LinePrinter, label_for_slot
from runmany.commands.runner import ProcessCommandRunner
from runmany.commands.orchestrator import Orchestrator
from runmany.commands.tasks import TaskGroup

__all__ = [
    # Structures de données
    "CommandStatus",
    # Interfaces abstraites
    "CommandRunner",
    "CommandFormatter",
    # Couleurs
    "PALETTE",
    "color_for_slot",
    "colorize",
    # Implémentations
    "DefaultCommandFormatter",
    "LinePrinter",
    "label_for_slot",
    "ProcessCommandRunner",
    "Orchestrator",
    "TaskGroup",
]
