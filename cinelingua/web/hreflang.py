"""
Liens alternatifs hreflang pour le référencement.

Une page d'entité est disponible dans chacune des langues de ses
traductions, à l'adresse `{url}/{code}`. Le lien x-default pointe sur l'URL
canonique.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from markupsafe import Markup, escape


@dataclass(frozen=True)
class HreflangLink:
    """Lien <link rel="alternate"> vers une version linguistique de la page."""

    hreflang: str
    href: str

    def __html__(self) -> str:
        return (
            f'<link rel="alternate" hreflang="{escape(self.hreflang)}" '
            f'href="{escape(self.href)}">'
        )


def build_hreflang_links(
    url: str, translation_codes: Optional[Sequence[str]]
) -> list[HreflangLink]:
    """
    Construit les liens alternatifs d'une page.

    Args:
        url: URL canonique de la page
        translation_codes: Codes des langues disponibles, dans l'ordre d'affichage

    Returns:
        Le lien x-default puis un lien par code, dans l'ordre reçu
    """
    links = [HreflangLink("x-default", url)]
    links.extend(
        HreflangLink(code, f"{url}/{code}") for code in (translation_codes or ())
    )
    return links


def render_hreflang_tags(
    url: str,
    translation_codes: Optional[Sequence[str]],
    extra: Optional[str] = None,
) -> Markup:
    """
    Rend les balises <link> à injecter dans le <head>.

    Args:
        url: URL canonique de la page
        translation_codes: Codes des langues disponibles
        extra: Balisage supplémentaire ajouté tel quel à la fin
    """
    tags = [link.__html__() for link in build_hreflang_links(url, translation_codes)]
    if extra:
        tags.append(str(extra))
    return Markup("\n".join(tags))
