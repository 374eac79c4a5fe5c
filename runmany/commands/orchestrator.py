"""Lancement concurrent de toutes les commandes demandées.

L'Orchestrator crée un ProcessCommandRunner par groupe de commande,
chacun dans son propre thread, et attend qu'ils aient tous terminé.
L'échec d'une commande n'interrompt jamais les autres.
"""

import threading
from typing import Callable, List, Optional, Sequence, TextIO

from runmany.cli.options import RunmanyOptions
from runmany.commands.base import CommandRunner, CommandStatus
from runmany.commands.colors import color_for_slot
from runmany.commands.formatter import CommandFormatter
from runmany.commands.printer import LinePrinter, label_for_slot
from runmany.commands.runner import ProcessCommandRunner
from runmany.commands.tasks import TaskGroup
from runmany.logging.base import Logger

RunnerFactory = Callable[[LinePrinter, int], CommandRunner]


class Orchestrator:
    """Fan-out/fan-in des commandes sur des threads système.

    Attributes:
        _sink: Sortie commune à toutes les commandes (défaut: stdout).
        _logger: Logger optionnel pour le journal de diagnostic.
        _formatter: Formateur transmis aux exécuteurs par défaut.
        _runner_factory: Fabrique (printer, position) -> CommandRunner.
    """

    def __init__(
        self,
        sink: Optional[TextIO] = None,
        logger: Optional[Logger] = None,
        formatter: Optional[CommandFormatter] = None,
        runner_factory: Optional[RunnerFactory] = None,
    ) -> None:
        self._sink = sink
        self._logger = logger
        self._formatter = formatter
        self._runner_factory = runner_factory or self._default_runner
        # Tous les printers écrivent sur le même sink : un seul verrou
        # garantit qu'aucune ligne n'est coupée par une autre commande.
        self._sink_lock = threading.Lock()

    def _default_runner(
        self, printer: LinePrinter, slot: int
    ) -> CommandRunner:
        return ProcessCommandRunner(
            printer,
            formatter=self._formatter,
            logger=self._logger,
            slot=slot,
        )

    def make_printer(
        self, slot: int, options: RunmanyOptions
    ) -> LinePrinter:
        """Crée le printer de la commande en position ``slot``.

        Sans couleur, ni préfixe ni style ne sont appliqués.
        """
        if options.no_color:
            return LinePrinter(self._sink, lock=self._sink_lock)
        return LinePrinter(
            self._sink,
            prefix=label_for_slot(slot),
            color=color_for_slot(slot),
            lock=self._sink_lock,
        )

    def run(
        self,
        groups: Sequence[Sequence[str]],
        options: RunmanyOptions,
    ) -> List[CommandStatus]:
        """Exécute toutes les commandes en parallèle.

        Args:
            groups: Groupes de commande (exécutable puis arguments).
            options: Options globales résolues.

        Returns:
            États finaux, dans l'ordre des commandes.

        Raises:
            RunmanyFatalError: Dès la première erreur fatale d'une
                commande ; les autres threads sont abandonnés.
        """
        tasks = TaskGroup()
        for slot, group in enumerate(groups, start=1):
            runner = self._runner_factory(
                self.make_printer(slot, options), slot
            )
            tasks.start(runner.run, tuple(group), name=f"runmany-{slot}")

        if self._logger:
            self._logger.log_info(f"{len(groups)} commande(s) lancée(s)")

        statuses = tasks.wait()

        if self._logger:
            failed = sum(1 for status in statuses if not status.success)
            self._logger.log_info(
                f"Toutes les commandes sont terminées "
                f"({failed} en échec sur {len(statuses)})"
            )
        return statuses
