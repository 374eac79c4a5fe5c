"""Exécuteur d'une commande via subprocess.

Ce module fournit ProcessCommandRunner, qui gère un processus enfant
de bout en bout :

    1. annonce de la commande via le LinePrinter ;
    2. lancement avec stdout et stderr capturés ;
    3. transfert concurrent des deux flux, ligne par ligne, vers le
       même LinePrinter ;
    4. attente de la fin des deux flux, puis du processus ;
    5. affichage d'une ligne d'état final.

Example :
    Exécution d'une commande avec préfixe et couleur :

        from runmany.commands import LinePrinter, ProcessCommandRunner

        printer = LinePrinter(prefix="[1]: ", color="green")
        status = ProcessCommandRunner(printer, slot=1).run(
            ["npm", "run", "watch"]
        )
        print(status.return_code)

Toute erreur de lancement, d'accès aux flux, de lecture ou d'attente
lève une RunmanyFatalError : elle n'est pas isolée à la commande.
"""

import subprocess  # nosec B404
import time
from typing import BinaryIO, Iterator, Optional, Sequence, Tuple

from runmany.commands.base import CommandRunner, CommandStatus
from runmany.commands.formatter import (
    CommandFormatter,
    DefaultCommandFormatter,
)
from runmany.commands.printer import LinePrinter
from runmany.commands.tasks import TaskGroup
from runmany.errors.exceptions import (
    OutputWriteError,
    ProcessWaitError,
    SpawnError,
    StreamAcquisitionError,
    StreamReadError,
)
from runmany.logging.base import Logger


def decode_line(raw: bytes) -> str:
    """Décode une ligne brute lue sur un flux enfant.

    Retire le '\\n' final puis un éventuel '\\r', et décode en UTF-8
    strict.

    Raises:
        UnicodeDecodeError: Si la ligne n'est pas de l'UTF-8 valide.
    """
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8")


class ProcessCommandRunner(CommandRunner):
    """Exécuteur d'une commande avec transfert de ses deux flux.

    Attributes:
        _printer: LinePrinter partagé par stdout et stderr.
        _formatter: Formateur des lignes d'annonce et de fin.
        _logger: Logger optionnel pour le journal de diagnostic.
        _slot: Position de la commande, pour les logs et les erreurs.
    """

    def __init__(
        self,
        printer: LinePrinter,
        formatter: Optional[CommandFormatter] = None,
        logger: Optional[Logger] = None,
        slot: Optional[int] = None,
    ) -> None:
        self._printer = printer
        self._formatter = formatter or DefaultCommandFormatter()
        self._logger = logger
        self._slot = slot

    def _tag(self, message: str) -> str:
        if self._slot is None:
            return message
        return f"[{self._slot}] {message}"

    def _log(self, message: str) -> None:
        """Envoie un message au logger si disponible."""
        if self._logger:
            self._logger.log_info(self._tag(message))

    def _log_debug(self, message: str) -> None:
        if self._logger:
            self._logger.log_debug(self._tag(message))

    def _spawn(self, command: Tuple[str, ...]) -> subprocess.Popen:
        """Lance le processus avec stdout et stderr redirigés."""
        if not command:
            raise SpawnError("Commande vide", self._slot)
        try:
            return subprocess.Popen(  # nosec B603
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            raise SpawnError(
                f"Échec du lancement de {command[0]!r}: {e}", self._slot
            ) from e

    def _take_streams(
        self, proc: subprocess.Popen
    ) -> Tuple[BinaryIO, BinaryIO]:
        """Récupère les flux stdout et stderr du processus."""
        if proc.stdout is None:
            raise StreamAcquisitionError(
                "stdout du processus indisponible", self._slot
            )
        if proc.stderr is None:
            raise StreamAcquisitionError(
                "stderr du processus indisponible", self._slot
            )
        return proc.stdout, proc.stderr

    def _read_lines(
        self, stream: BinaryIO, stream_name: str
    ) -> Iterator[str]:
        """Lit et décode les lignes d'un flux enfant jusqu'à sa fin.

        Raises:
            StreamReadError: En cas d'erreur d'E/S ou de décodage.
        """
        try:
            with stream:
                for raw in stream:
                    yield decode_line(raw)
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(
                f"Lecture de {stream_name} impossible: {e}", self._slot
            ) from e

    def _print(self, line: str) -> None:
        """Écrit une ligne via le printer partagé.

        Raises:
            OutputWriteError: Si la sortie de runmany est fermée.
        """
        try:
            self._printer.print(line)
        except OSError as e:
            raise OutputWriteError(
                f"Écriture sur la sortie impossible: {e}", self._slot
            ) from e

    def _forward(self, stream: BinaryIO, stream_name: str) -> int:
        """Transfère chaque ligne du flux vers le printer.

        Returns:
            Nombre de lignes transférées.
        """
        count = 0
        for line in self._read_lines(stream, stream_name):
            self._print(line)
            count += 1
        self._log_debug(f"Fin de {stream_name} après {count} ligne(s)")
        return count

    def _wait(self, proc: subprocess.Popen) -> Optional[int]:
        """Attend la fin du processus.

        Returns:
            Code de retour, ou None si le processus a été tué par
            un signal.
        """
        try:
            return_code = proc.wait()
        except OSError as e:
            raise ProcessWaitError(
                f"Attente du processus {proc.pid} impossible: {e}",
                self._slot,
            ) from e
        if return_code < 0:
            return None
        return return_code

    def run(self, command: Sequence[str]) -> CommandStatus:
        """Exécute la commande jusqu'à sa fin naturelle.

        Args:
            command: Exécutable suivi de ses arguments.

        Returns:
            État final de la commande.

        Raises:
            SpawnError: Si le processus ne peut pas être lancé.
            StreamAcquisitionError: Si un flux est indisponible.
            StreamReadError: Si la lecture d'un flux échoue.
            ProcessWaitError: Si l'attente du processus échoue.
            OutputWriteError: Si la sortie de runmany est fermée.
        """
        command = tuple(command)
        self._print(self._formatter.format_spawn(command))

        start = time.monotonic()
        proc = self._spawn(command)
        self._log(f"Lancement : {' '.join(command)} (pid {proc.pid})")
        stdout, stderr = self._take_streams(proc)

        forwarders = TaskGroup(name=f"runmany-{self._slot}")
        forwarders.start(self._forward, stdout, "stdout")
        forwarders.start(self._forward, stderr, "stderr")
        forwarders.wait()

        return_code = self._wait(proc)
        status = CommandStatus(
            command=command,
            return_code=return_code,
            success=return_code == 0,
            duration=time.monotonic() - start,
        )
        self._log(
            f"Fin de {' '.join(command)} : code {return_code} "
            f"en {status.duration:.2f}s"
        )
        self._print(self._formatter.format_status(status))
        return status
