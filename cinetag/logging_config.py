"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console (stderr) : colorée, niveau piloté par --verbose / --quiet
- fichier : JSON sérialisé avec rotation, pour l'historique des écritures
  sur la taxonomie (créations, suppressions, fusions)
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Niveaux console selon le nombre de -v passes en ligne de commande
_VERBOSITY_LEVELS = {0: None, 1: "INFO", 2: "DEBUG"}


def console_level(base_level: str, verbose: int = 0, quiet: bool = False) -> str:
    """
    Determine le niveau console effectif.

    Args :
        base_level : Niveau configure (Settings.log_level)
        verbose : Nombre de -v (1 = INFO, 2 et plus = DEBUG)
        quiet : Mode silencieux, seules les erreurs sont affichees

    Retourne :
        Le nom du niveau loguru a appliquer
    """
    if quiet:
        return "ERROR"
    override = _VERBOSITY_LEVELS.get(min(verbose, 2))
    return override or base_level


def configure_logging(
    log_level: str = "WARNING",
    log_file: Optional[Path] = Path("logs/cinetag.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure les handlers loguru de l'application.

    Args :
        log_level : Niveau minimum pour la console
        log_file : Fichier JSON de l'historique, None pour le desactiver
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs a conserver
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format="{message}",
            serialize=True,
            rotation=rotation_size,
            retention=retention_count,
            compression="zip",
            enqueue=True,
        )

    logger.debug("Logging configure (console={}, fichier={})", log_level, log_file)
