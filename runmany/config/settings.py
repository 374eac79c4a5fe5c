"""Réglages persistants de runmany.

La ligne de commande reste la seule source des options d'exécution
(--help, --version, --no-color). Le fichier de configuration, en TOML
ou en JSON, ne règle que le journal de diagnostic :

    [logging]
    file = "~/.cache/runmany/runmany.log"
    level = "DEBUG"

Ordre de recherche :
    1. Variable d'environnement RUNMANY_CONFIG (le fichier doit exister)
    2. DEFAULT_SEARCH_PATHS, premier fichier existant
    3. Valeurs par défaut (journal désactivé)
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from runmany.errors.exceptions import ConfigurationError
from runmany.logging.file_logger import DEFAULT_FORMAT

CONFIG_ENV_VAR = "RUNMANY_CONFIG"

DEFAULT_SEARCH_PATHS = (
    "~/.config/runmany/config.toml",
    "~/.runmany.toml",
)


class LoggingSettings(BaseModel):
    """Section [logging] : journal de diagnostic optionnel."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    file: Optional[str] = None
    level: str = "INFO"
    format: str = DEFAULT_FORMAT

    @field_validator("level")
    @classmethod
    def must_be_known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Niveau de log inconnu: {v}")
        return level

    @field_validator("file")
    @classmethod
    def expand_user(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return str(Path(v).expanduser())


class RunmanySettings(BaseModel):
    """Racine du fichier de configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    logging: LoggingSettings = LoggingSettings()


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Lit un fichier de réglages TOML ou JSON.

    Le format est déduit de l'extension.

    Raises:
        ConfigurationError: Si l'extension n'est pas supportée, si le
            fichier est illisible ou si son contenu n'est pas une table.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                f"Extension non supportée: {suffix or '(aucune)'}. "
                "Utilisez .toml ou .json"
            )
    except (OSError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Lecture de {path} impossible: {e}"
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} doit contenir une table de réglages"
        )
    return data


def _find_config_file(
    search_paths: Sequence[Union[str, Path]],
) -> Optional[Path]:
    """Cherche le fichier de config dans les emplacements définis."""
    for path in search_paths:
        path = Path(path).expanduser()
        if path.is_file():
            return path
    return None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    search_paths: Optional[Sequence[Union[str, Path]]] = None,
) -> RunmanySettings:
    """Charge les réglages de runmany.

    Args:
        environ: Environnement à consulter (défaut: os.environ).
        search_paths: Emplacements candidats (défaut:
            DEFAULT_SEARCH_PATHS).

    Returns:
        Réglages validés, ou les valeurs par défaut si aucun fichier
        n'est trouvé.

    Raises:
        ConfigurationError: Si RUNMANY_CONFIG désigne un fichier absent,
            ou si le fichier trouvé est illisible ou invalide.
    """
    environ = os.environ if environ is None else environ
    if search_paths is None:
        search_paths = DEFAULT_SEARCH_PATHS

    explicit = environ.get(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit).expanduser()
        if not config_path.is_file():
            raise ConfigurationError(
                f"{CONFIG_ENV_VAR} désigne un fichier absent: {config_path}"
            )
    else:
        config_path = _find_config_file(search_paths)

    if config_path is None:
        return RunmanySettings()

    data = read_config_file(config_path)
    try:
        return RunmanySettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration invalide ({config_path}): {e}"
        ) from e
