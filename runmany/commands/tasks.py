"""Groupe de threads démons avec attente collective.

Utilisé deux fois : l'Orchestrator lance un thread par commande, et
chaque ProcessCommandRunner lance un thread par flux de sortie.

La première exception levée par une tâche est relancée dans le
thread qui attend, sans attendre les autres tâches. Les threads sont
des démons : ils ne retiennent pas l'interpréteur à la sortie.
"""

import queue
import threading
from typing import Any, Callable, List, Optional


class TaskGroup:
    """Lance N tâches concurrentes et attend leurs N résultats."""

    def __init__(self, name: str = "runmany") -> None:
        self._name = name
        self._outcomes: "queue.Queue[tuple]" = queue.Queue()
        self._threads: List[threading.Thread] = []

    def start(
        self,
        target: Callable[..., Any],
        *args: Any,
        name: Optional[str] = None,
    ) -> threading.Thread:
        """Démarre ``target(*args)`` dans un nouveau thread démon.

        Args:
            target: Fonction à exécuter.
            *args: Arguments positionnels de la fonction.
            name: Nom du thread (défaut: '<groupe>-<index>').

        Returns:
            Le thread démarré.
        """
        index = len(self._threads)

        def _run() -> None:
            try:
                result = target(*args)
            except Exception as e:
                self._outcomes.put((index, None, e))
            else:
                self._outcomes.put((index, result, None))

        thread = threading.Thread(
            target=_run,
            name=name or f"{self._name}-{index}",
            daemon=True,
        )
        self._threads.append(thread)
        thread.start()
        return thread

    def wait(self) -> List[Any]:
        """Attend la fin de toutes les tâches démarrées.

        Returns:
            Résultats des tâches, dans l'ordre de démarrage.

        Raises:
            Exception: La première exception levée par une tâche,
                dès son arrivée.
        """
        results: List[Any] = [None] * len(self._threads)
        for _ in self._threads:
            index, result, error = self._outcomes.get()
            if error is not None:
                raise error
            results[index] = result
        return results
