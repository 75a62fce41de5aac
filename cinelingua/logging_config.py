"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console colorée, filtrée au niveau demandé
- fichier JSON (tous les niveaux), avec rotation et rétention

Les messages du cycle de vie des pages portent le nom de la page dans
`extra["page"]` (logger.bind), affiché en console et sérialisé dans le
fichier ; les autres messages portent "-".
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[page]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinelingua.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure les sorties de log de CineLingua.

    Args :
        log_level : Niveau minimum en console (les re-requêtes et le cycle de
            vie des pages sont en DEBUG)
        log_file : Fichier JSON, créé avec son répertoire
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conservés
    """
    logger.remove()
    logger.configure(extra={"page": "-"})

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), console_level=log_level)
