"""
Module contenant les exceptions personnalisées de runmany.

Deux familles coexistent :
    - ConfigurationError : fichier de configuration absent ou invalide.
    - RunmanyFatalError : échec interne pendant l'exécution d'une
      commande (lancement, flux, attente). Ces erreurs interrompent
      tout le programme.

Le code de sortie d'une commande enfant n'est jamais une erreur.
"""
from typing import Optional


class RunmanyError(Exception):
    """Exception de base pour toutes les erreurs de runmany."""
    pass


class ConfigurationError(RunmanyError):
    """Configuration introuvable ou invalide."""
    pass


class RunmanyFatalError(RunmanyError):
    """Erreur interne non récupérable liée à une commande.

    Attributes:
        slot: Position (1-based) de la commande concernée, si connue.
    """

    def __init__(self, message: str, slot: Optional[int] = None) -> None:
        super().__init__(message)
        self.slot = slot

    def __str__(self) -> str:
        message = super().__str__()
        if self.slot is None:
            return message
        return f"[{self.slot}] {message}"


class SpawnError(RunmanyFatalError):
    """Impossible de lancer le processus (introuvable, permission...)."""
    pass


class StreamAcquisitionError(RunmanyFatalError):
    """Impossible d'obtenir stdout ou stderr du processus enfant."""
    pass


class StreamReadError(RunmanyFatalError):
    """Erreur d'E/S ou ligne non décodable pendant la lecture d'un flux."""
    pass


class ProcessWaitError(RunmanyFatalError):
    """Échec de l'attente de fin du processus enfant."""
    pass


class OutputWriteError(RunmanyFatalError):
    """Écriture impossible sur la sortie de runmany (pipe fermé...)."""
    pass
