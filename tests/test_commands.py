"""Tests pour le module commands."""

import io
import re
import signal
import subprocess
import sys
import threading
from unittest.mock import MagicMock, patch

import pytest
from colorama import Fore, Style

from runmany.cli.options import RunmanyOptions
from runmany.commands import (
    PALETTE,
    CommandRunner,
    CommandStatus,
    DefaultCommandFormatter,
    LinePrinter,
    Orchestrator,
    ProcessCommandRunner,
    TaskGroup,
    color_for_slot,
    colorize,
    label_for_slot,
)
from runmany.commands.runner import decode_line
from runmany.errors import (
    OutputWriteError,
    ProcessWaitError,
    SpawnError,
    StreamAcquisitionError,
    StreamReadError,
)
from runmany.logging.base import Logger


def python_command(code: str) -> list:
    """Commande lançant l'interpréteur courant sur un script en ligne."""
    return [sys.executable, "-c", code]


# --- Tests CommandStatus ---


class TestCommandStatus:
    """Tests pour la dataclass CommandStatus."""

    def test_creation_avec_tous_les_champs(self):
        """Test de la création avec tous les champs."""
        status = CommandStatus(
            command=("ls", "-la"),
            return_code=0,
            success=True,
            duration=0.5,
        )
        assert status.command == ("ls", "-la")
        assert status.return_code == 0
        assert status.success is True
        assert status.duration == 0.5

    def test_frozen(self):
        """Test que la dataclass est immuable."""
        status = CommandStatus(("ls",), 0, True, 0.0)
        with pytest.raises(AttributeError):
            status.return_code = 1


# --- Tests DefaultCommandFormatter ---


class TestDefaultCommandFormatter:
    """Tests pour les messages d'annonce et de fin."""

    def setup_method(self):
        self.formatter = DefaultCommandFormatter()

    def test_format_spawn_joint_les_jetons(self):
        """La ligne de commande est reconstruite avec des espaces."""
        message = self.formatter.format_spawn(["npm", "run", "watch"])
        assert message == 'Spawning command: "npm run watch"'

    def test_format_status_succes(self):
        status = CommandStatus(("true",), 0, True, 0.1)
        assert (
            self.formatter.format_status(status)
            == "Command finished successfully"
        )

    def test_format_status_code_non_zero(self):
        status = CommandStatus(("false",), 3, False, 0.1)
        assert (
            self.formatter.format_status(status)
            == "Command exited with status: 3"
        )

    def test_format_status_sans_code(self):
        """Un processus tué par un signal donne 'unknown'."""
        status = CommandStatus(("sleep",), None, False, 0.1)
        assert (
            self.formatter.format_status(status)
            == "Command exited with status: unknown"
        )


# --- Tests couleurs ---


class TestColors:
    """Tests pour la palette et la colorisation."""

    def test_palette_de_cinq_couleurs(self):
        assert PALETTE == ("green", "yellow", "blue", "magenta", "cyan")

    @pytest.mark.parametrize(
        "slot, expected",
        [(1, "green"), (2, "yellow"), (5, "cyan"), (6, "green"),
         (12, "yellow")],
    )
    def test_color_for_slot_cyclique(self, slot, expected):
        assert color_for_slot(slot) == expected

    def test_color_for_slot_zero_leve_erreur(self):
        with pytest.raises(ValueError):
            color_for_slot(0)

    def test_colorize_encadre_le_texte(self):
        """Le texte est conservé, entouré des codes colorama."""
        assert colorize("bonjour", "green") == (
            f"{Fore.GREEN}bonjour{Style.RESET_ALL}"
        )

    def test_colorize_couleur_inconnue(self):
        with pytest.raises(ValueError):
            colorize("texte", "chartreuse")


# --- Tests LinePrinter ---


class TestLinePrinter:
    """Tests pour LinePrinter."""

    def test_ligne_brute_sans_prefixe(self):
        sink = io.StringIO()
        LinePrinter(sink).print("hello")
        assert sink.getvalue() == "hello\n"

    def test_prefixe_et_couleur(self):
        """Le préfixe précède la ligne colorée."""
        sink = io.StringIO()
        printer = LinePrinter(sink, prefix="[1]: ", color="green")
        printer.print("hello")
        assert sink.getvalue() == (
            f"[1]: {Fore.GREEN}hello{Style.RESET_ALL}\n"
        )

    def test_colorizer_injecte(self):
        sink = io.StringIO()
        printer = LinePrinter(
            sink,
            color="blue",
            colorizer=lambda text, color: f"<{color}>{text}",
        )
        printer.print("x")
        assert sink.getvalue() == "<blue>x\n"

    def test_un_seul_write_par_ligne(self):
        """Chaque ligne est écrite en un seul appel puis flushée."""
        sink = MagicMock()
        LinePrinter(sink, prefix="[2]: ").print("ligne")
        sink.write.assert_called_once_with("[2]: ligne\n")
        sink.flush.assert_called_once()

    def test_sortie_standard_par_defaut(self, capsys):
        LinePrinter().print("vers stdout")
        assert capsys.readouterr().out == "vers stdout\n"

    def test_label_for_slot(self):
        assert label_for_slot(3) == "[3]: "

    def test_ecritures_concurrentes_non_melangees(self):
        """Deux threads sur le même printer n'altèrent aucune ligne."""
        sink = io.StringIO()
        printer = LinePrinter(sink, prefix="[1]: ")

        def produce(name):
            for i in range(500):
                printer.print(f"{name}-{i:03d}")

        threads = [
            threading.Thread(target=produce, args=(name,))
            for name in ("out", "err")
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = sink.getvalue().splitlines()
        assert len(lines) == 1000
        assert all(
            re.fullmatch(r"\[1\]: (out|err)-\d{3}", line) for line in lines
        )


# --- Tests TaskGroup ---


class TestTaskGroup:
    """Tests pour le groupe de threads."""

    def test_resultats_dans_l_ordre_de_demarrage(self):
        release = threading.Event()
        tasks = TaskGroup()
        tasks.start(lambda: release.wait(5) and "lent")
        tasks.start(lambda: "rapide")
        release.set()
        assert tasks.wait() == ["lent", "rapide"]

    def test_premiere_erreur_relancee(self):
        """L'erreur est relancée sans attendre la tâche bloquée."""
        blocker = threading.Event()
        tasks = TaskGroup()
        tasks.start(blocker.wait)

        def fail():
            raise SpawnError("introuvable", 2)

        tasks.start(fail)
        with pytest.raises(SpawnError):
            tasks.wait()
        blocker.set()

    def test_threads_demons(self):
        tasks = TaskGroup()
        thread = tasks.start(lambda: None, name="runmany-test")
        tasks.wait()
        assert thread.daemon is True
        assert thread.name == "runmany-test"

    def test_groupe_vide(self):
        assert TaskGroup().wait() == []


# --- Tests ProcessCommandRunner ---


class TestDecodeLine:
    """Tests pour le découpage des lignes brutes."""

    def test_retire_le_saut_de_ligne(self):
        assert decode_line(b"hello\n") == "hello"

    def test_retire_crlf(self):
        assert decode_line(b"hello\r\n") == "hello"

    def test_derniere_ligne_sans_saut(self):
        assert decode_line(b"fin") == "fin"

    def test_utf8(self):
        assert decode_line("éàü\n".encode("utf-8")) == "éàü"

    def test_utf8_invalide(self):
        with pytest.raises(UnicodeDecodeError):
            decode_line(b"\xff\xfe\n")


class TestProcessCommandRunnerMocked:
    """Tests de ProcessCommandRunner avec Popen simulé."""

    def setup_method(self):
        self.sink = io.StringIO()
        self.printer = LinePrinter(self.sink, prefix="[1]: ")
        self.mock_logger = MagicMock(spec=Logger)
        self.runner = ProcessCommandRunner(
            self.printer, logger=self.mock_logger, slot=1,
        )

    def _make_mock_proc(self, stdout=b"", stderr=b"", returncode=0):
        """Crée un mock de Popen configuré."""
        mock_proc = MagicMock()
        mock_proc.pid = 4242
        mock_proc.stdout = io.BytesIO(stdout)
        mock_proc.stderr = io.BytesIO(stderr)
        mock_proc.wait.return_value = returncode
        return mock_proc

    def _lines(self):
        return self.sink.getvalue().splitlines()

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_deux_flux_captures(self, mock_popen):
        """stdout et stderr passent par le même printer."""
        mock_popen.return_value = self._make_mock_proc(
            stdout=b"sortie\n", stderr=b"erreur\n",
        )
        status = self.runner.run(["cmd", "arg"])

        lines = self._lines()
        assert lines[0] == '[1]: Spawning command: "cmd arg"'
        assert sorted(lines[1:3]) == ["[1]: erreur", "[1]: sortie"]
        assert lines[3] == "[1]: Command finished successfully"
        assert status.success is True
        assert status.command == ("cmd", "arg")

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_popen_configure_avec_pipes(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc()
        self.runner.run(["cmd", "-x"])

        args, kwargs = mock_popen.call_args
        assert args[0] == ["cmd", "-x"]
        assert kwargs["stdout"] == subprocess.PIPE
        assert kwargs["stderr"] == subprocess.PIPE

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_code_non_zero(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(returncode=2)
        status = self.runner.run(["false"])

        assert status.success is False
        assert status.return_code == 2
        assert self._lines()[-1] == "[1]: Command exited with status: 2"

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_tue_par_signal(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(returncode=-9)
        status = self.runner.run(["sleep", "100"])

        assert status.return_code is None
        assert (
            self._lines()[-1] == "[1]: Command exited with status: unknown"
        )

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_commande_introuvable(self, mock_popen):
        """L'échec du lancement est fatal, après l'annonce."""
        mock_popen.side_effect = FileNotFoundError(
            "No such file or directory: 'inexistant'"
        )
        with pytest.raises(SpawnError) as exc_info:
            self.runner.run(["inexistant"])

        assert exc_info.value.slot == 1
        assert self._lines() == ['[1]: Spawning command: "inexistant"']

    def test_commande_vide(self):
        with pytest.raises(SpawnError):
            self.runner.run([])

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_flux_indisponible(self, mock_popen):
        mock_proc = self._make_mock_proc()
        mock_proc.stderr = None
        mock_popen.return_value = mock_proc

        with pytest.raises(StreamAcquisitionError):
            self.runner.run(["cmd"])

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_ligne_non_utf8_fatale(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(
            stdout=b"ok\n\xff\xfe\n",
        )
        with pytest.raises(StreamReadError):
            self.runner.run(["cmd"])
        mock_popen.return_value.wait.assert_not_called()

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_attente_echouee(self, mock_popen):
        """Une erreur de wait() est fatale et porte la position."""
        mock_proc = self._make_mock_proc(stdout=b"ok\n")
        mock_proc.wait.side_effect = OSError("wait échoué")
        mock_popen.return_value = mock_proc

        with pytest.raises(ProcessWaitError) as exc_info:
            self.runner.run(["cmd"])

        assert exc_info.value.slot == 1
        assert str(exc_info.value).startswith("[1] ")
        assert "4242" in str(exc_info.value)
        assert "wait échoué" in str(exc_info.value)

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_sortie_fermee_pendant_le_transfert(self, mock_popen):
        """Une écriture refusée n'est pas une erreur de lecture du flux."""
        sink = MagicMock()
        sink.write.side_effect = [None, BrokenPipeError(32, "Broken pipe")]
        runner = ProcessCommandRunner(LinePrinter(sink), slot=2)
        mock_popen.return_value = self._make_mock_proc(stdout=b"ligne\n")

        with pytest.raises(OutputWriteError) as exc_info:
            runner.run(["cmd"])

        assert not isinstance(exc_info.value, StreamReadError)
        assert exc_info.value.slot == 2
        assert isinstance(exc_info.value.__cause__, BrokenPipeError)

    def test_sortie_fermee_avant_le_lancement(self):
        """L'annonce impossible à écrire empêche le lancement."""
        sink = MagicMock()
        sink.write.side_effect = BrokenPipeError(32, "Broken pipe")
        runner = ProcessCommandRunner(LinePrinter(sink), slot=3)

        with patch("runmany.commands.runner.subprocess.Popen") as mock_popen:
            with pytest.raises(OutputWriteError):
                runner.run(["cmd"])
        mock_popen.assert_not_called()

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_log_lancement_et_fin(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc()
        self.runner.run(["ls", "-la"])

        messages = [
            call.args[0] for call in self.mock_logger.log_info.call_args_list
        ]
        assert any("ls -la" in m and "4242" in m for m in messages)
        assert any("code 0" in m for m in messages)

    @patch("runmany.commands.runner.subprocess.Popen")
    def test_sans_logger(self, mock_popen):
        mock_popen.return_value = self._make_mock_proc(stdout=b"ok\n")
        runner = ProcessCommandRunner(LinePrinter(self.sink))
        assert runner.run(["echo", "ok"]).success is True


class TestProcessCommandRunnerReal:
    """Tests de ProcessCommandRunner avec de vrais processus."""

    def test_une_ligne_puis_succes(self):
        """Annonce, ligne transmise et fin, préfixées à l'identique."""
        sink = io.StringIO()
        runner = ProcessCommandRunner(LinePrinter(sink, prefix="[1]: "))
        command = python_command("print('hello')")

        status = runner.run(command)

        assert sink.getvalue().splitlines() == [
            f'[1]: Spawning command: "{" ".join(command)}"',
            "[1]: hello",
            "[1]: Command finished successfully",
        ]
        assert status.success is True

    def test_code_de_sortie_exact(self):
        sink = io.StringIO()
        runner = ProcessCommandRunner(LinePrinter(sink))

        status = runner.run(python_command("raise SystemExit(7)"))

        assert status.return_code == 7
        assert sink.getvalue().splitlines()[-1] == (
            "Command exited with status: 7"
        )

    def test_stderr_transmis(self):
        sink = io.StringIO()
        runner = ProcessCommandRunner(LinePrinter(sink))

        runner.run(python_command(
            "import sys; sys.stderr.write('attention\\n')"
        ))

        assert "attention" in sink.getvalue().splitlines()

    @pytest.mark.skipif(
        sys.platform == "win32", reason="signaux POSIX uniquement"
    )
    def test_signal_donne_unknown(self):
        sink = io.StringIO()
        runner = ProcessCommandRunner(LinePrinter(sink))

        status = runner.run(python_command(
            f"import os; os.kill(os.getpid(), {int(signal.SIGKILL)})"
        ))

        assert status.return_code is None
        assert sink.getvalue().splitlines()[-1] == (
            "Command exited with status: unknown"
        )

    def test_executable_introuvable(self):
        runner = ProcessCommandRunner(LinePrinter(io.StringIO()), slot=4)
        with pytest.raises(SpawnError):
            runner.run(["runmany-executable-inexistant-8f3a"])


# --- Tests Orchestrator ---


class FakeRunner(CommandRunner):
    """Exécuteur factice qui imprime une ligne et retourne un code."""

    def __init__(self, printer, slot, return_code=0, error=None):
        self.printer = printer
        self.slot = slot
        self.return_code = return_code
        self.error = error

    def run(self, command):
        if self.error is not None:
            raise self.error
        self.printer.print(" ".join(command))
        return CommandStatus(
            tuple(command), self.return_code, self.return_code == 0, 0.0,
        )


class TestOrchestrator:
    """Tests pour l'Orchestrator."""

    def setup_method(self):
        self.sink = io.StringIO()
        self.runners = []

    def _factory(self, return_codes=None, errors=None):
        return_codes = return_codes or {}
        errors = errors or {}

        def factory(printer, slot):
            runner = FakeRunner(
                printer, slot,
                return_code=return_codes.get(slot, 0),
                error=errors.get(slot),
            )
            self.runners.append(runner)
            return runner

        return factory

    def test_un_printer_par_commande(self):
        """Préfixe = position, couleur = entrée cyclique de la palette."""
        orchestrator = Orchestrator(self.sink, runner_factory=self._factory())
        groups = [["cmd%d" % i] for i in range(1, 7)]

        orchestrator.run(groups, RunmanyOptions())

        by_slot = {runner.slot: runner.printer for runner in self.runners}
        assert sorted(by_slot) == [1, 2, 3, 4, 5, 6]
        assert by_slot[2].prefix == "[2]: "
        assert by_slot[2].color == "yellow"
        assert by_slot[6].color == "green"

    def test_sans_couleur_ni_prefixe(self):
        orchestrator = Orchestrator(self.sink, runner_factory=self._factory())

        orchestrator.run([["a"], ["b"]], RunmanyOptions(no_color=True))

        for runner in self.runners:
            assert runner.printer.prefix == ""
            assert runner.printer.color is None
        assert sorted(self.sink.getvalue().splitlines()) == ["a", "b"]

    def test_etats_dans_l_ordre_des_commandes(self):
        orchestrator = Orchestrator(
            self.sink, runner_factory=self._factory(return_codes={2: 1}),
        )

        statuses = orchestrator.run(
            [["un"], ["deux"], ["trois"]], RunmanyOptions(),
        )

        assert [s.command for s in statuses] == [
            ("un",), ("deux",), ("trois",),
        ]
        assert [s.success for s in statuses] == [True, False, True]

    def test_aucune_commande(self):
        orchestrator = Orchestrator(self.sink, runner_factory=self._factory())
        assert orchestrator.run([], RunmanyOptions()) == []

    def test_erreur_fatale_propagee(self):
        orchestrator = Orchestrator(
            self.sink,
            runner_factory=self._factory(
                errors={2: SpawnError("introuvable", 2)}
            ),
        )
        with pytest.raises(SpawnError):
            orchestrator.run([["a"], ["b"]], RunmanyOptions())

    def test_log_resume(self):
        mock_logger = MagicMock(spec=Logger)
        orchestrator = Orchestrator(
            self.sink,
            logger=mock_logger,
            runner_factory=self._factory(return_codes={1: 3}),
        )

        orchestrator.run([["a"], ["b"]], RunmanyOptions())

        last = mock_logger.log_info.call_args_list[-1].args[0]
        assert "1 en échec sur 2" in last

    def test_deux_commandes_reelles_sans_ligne_corrompue(self):
        """Chaque ligne imprimée est une ligne complète d'une commande."""
        orchestrator = Orchestrator(self.sink)
        groups = [
            python_command(
                f"for i in range(300): print('{name}-%03d' % i)"
            )
            for name in ("alpha", "beta")
        ]

        statuses = orchestrator.run(groups, RunmanyOptions(no_color=True))

        assert all(status.success for status in statuses)
        lines = [
            line for line in self.sink.getvalue().splitlines()
            if not line.startswith(("Spawning command", "Command "))
        ]
        assert len(lines) == 600
        assert all(
            re.fullmatch(r"(alpha|beta)-\d{3}", line) for line in lines
        )
        assert [l for l in lines if l.startswith("alpha")] == [
            "alpha-%03d" % i for i in range(300)
        ]

    def test_echec_d_une_commande_n_arrete_pas_l_autre(self):
        orchestrator = Orchestrator(self.sink)
        groups = [
            python_command("raise SystemExit(5)"),
            python_command("import time; time.sleep(0.2); print('fini')"),
        ]

        statuses = orchestrator.run(groups, RunmanyOptions())

        assert statuses[0].return_code == 5
        assert statuses[1].success is True
        output = self.sink.getvalue()
        assert "[2]: " in output
        assert "fini" in output
