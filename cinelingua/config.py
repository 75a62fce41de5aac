"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINELINGUA_,
et peut optionnellement être fournie via un fichier .env.

La clé API TMDB est lue une seule fois, à la construction du client API.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cinelingua/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINELINGUA_.
    Exemple : CINELINGUA_DEFAULT_LANGUAGE=fr-FR
    """

    model_config = SettingsConfigDict(
        env_prefix="CINELINGUA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API TMDB (OPTIONNELLE - les pages d'entités affichent une erreur si absente)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3")
    tmdb_timeout: float = Field(default=30.0, gt=0)

    # Langues
    default_language: str = Field(default="en-US")

    # Préfixe absolu des URLs publiques (liens hreflang), ex: https://cinelingua.example
    base_path: str = Field(default="")

    # Sessions visiteurs en mémoire (éviction LRU et expiration après inactivité)
    max_sessions: int = Field(default=1000, gt=0)
    session_idle_timeout: float = Field(default=3600.0, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinelingua.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("base_path")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Le préfixe est concaténé à des chemins commençant par /."""
        return v.rstrip("/")

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)
