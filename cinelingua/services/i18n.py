"""
Traductions de l'interface (libellés des pages).

Les catalogues sont des fichiers JSON par langue et par namespace, au format
i18next : `locales/{langue}/{namespace}.json`. Une page déclare les
namespaces nécessaires à son rendu ; le traducteur est lié à un namespace
principal, les autres restent accessibles via la syntaxe "namespace:clé".

Chaîne de repli d'une clé : "fr-FR" -> "fr" -> langue par défaut -> la clé elle-même.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Optional

from loguru import logger

LOCALES_DIR = Path(__file__).parent.parent / "locales"


class Translator:
    """
    Traducteur lié à une langue et à un namespace principal.

    Example:
        t = i18n.translator("fr-FR", ["common", "movie"]).with_namespaces("movie")
        t("cast")            # clé du namespace movie
        t("common:loading")  # clé d'un autre namespace
    """

    def __init__(
        self,
        catalogs: list[dict[str, dict[str, str]]],
        namespace: str = "common",
    ) -> None:
        """
        Args:
            catalogs: Catalogues par ordre de priorité (namespace -> clé -> texte)
            namespace: Namespace utilisé pour les clés sans préfixe
        """
        self._catalogs = catalogs
        self.namespace = namespace

    def with_namespaces(self, namespace: str) -> "Translator":
        """Renvoie un traducteur sur les mêmes catalogues, lié à un autre namespace."""
        return Translator(self._catalogs, namespace)

    def __call__(self, key: str, **variables: str) -> str:
        namespace, sep, name = key.partition(":")
        if not sep:
            namespace, name = self.namespace, key

        for catalog in self._catalogs:
            text = catalog.get(namespace, {}).get(name)
            if text is not None:
                return text.format(**variables) if variables else text
        return name


class I18n:
    """
    Chargeur de catalogues de traduction de l'interface.

    Attributes:
        default_language: Langue de repli quand une clé manque
    """

    def __init__(self, default_language: str, locales_dir: Path = LOCALES_DIR) -> None:
        self.default_language = default_language
        self._locales_dir = Path(locales_dir)

    @property
    def available_languages(self) -> list[str]:
        """Langues de l'interface pour lesquelles un répertoire de catalogues existe."""
        if not self._locales_dir.is_dir():
            return []
        return sorted(p.name for p in self._locales_dir.iterdir() if p.is_dir())

    def fallback_chain(self, language: Optional[str]) -> list[str]:
        """Langues à consulter, de la plus précise à la langue par défaut."""
        chain: list[str] = []
        for code in (language, self.default_language):
            if not code:
                continue
            short = code.replace("_", "-").split("-")[0]
            for candidate in (code, short):
                if candidate not in chain:
                    chain.append(candidate)
        return chain

    def load(self, language: str, namespace: str) -> dict[str, str]:
        """
        Charge un catalogue.

        Returns:
            Dictionnaire clé -> texte (vide si le fichier n'existe pas)
        """
        return _read_catalog(self._locales_dir / language / f"{namespace}.json")

    def translator(
        self, language: Optional[str], namespaces: Iterable[str]
    ) -> Translator:
        """
        Prépare un traducteur pour une langue et des namespaces requis.

        Args:
            language: Langue effective de la page
            namespaces: Namespaces à précharger (le premier devient le namespace principal)
        """
        namespaces = list(namespaces) or ["common"]
        catalogs = [
            {namespace: self.load(code, namespace) for namespace in namespaces}
            for code in self.fallback_chain(language)
        ]
        return Translator(catalogs, namespaces[0])


@lru_cache(maxsize=128)
def _read_catalog(path: Path) -> dict[str, str]:
    """Lit un catalogue JSON (mis en mémoire, les fichiers ne changent pas à chaud)."""
    if not path.is_file():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Catalogue de traduction invalide", path=str(path), error=str(e))
        return {}
