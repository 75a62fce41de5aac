"""
Pages d'entités : film, série TV, personnalité.

Chaque vue reçoit l'entité déjà projetée dans la langue du visiteur et
prépare le contexte de son template. Les pages sont construites au
démarrage avec le client API du container.
"""

from typing import Any, Optional

from ..core.entities.media import Entity
from ..core.ports.api_clients import EntityKind, IMetadataAPIClient
from .page import CallingApiPage, PageBody, with_calling_api

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
MAX_CAST = 12
MAX_KNOWN_FOR = 12


def _image_url(path: Optional[str]) -> Optional[str]:
    return f"{TMDB_IMAGE_BASE_URL}{path}" if path else None


def _year(date: Optional[str]) -> Optional[int]:
    return int(date[:4]) if date and len(date) >= 4 and date[:4].isdigit() else None


def _cast(credits: Optional[dict[str, Any]]) -> list[dict[str, Any]]:
    """Acteurs principaux, dans l'ordre du générique."""
    cast = sorted((credits or {}).get("cast", []), key=lambda c: c.get("order", 0))
    return [
        {
            "id": member.get("id"),
            "name": member.get("name", ""),
            "character": member.get("character", ""),
            "profile_url": _image_url(member.get("profile_path")),
        }
        for member in cast[:MAX_CAST]
    ]


def _crew_names(credits: Optional[dict[str, Any]], job: str) -> list[str]:
    return [
        member.get("name", "")
        for member in (credits or {}).get("crew", [])
        if member.get("job") == job
    ]


def _known_for(data: Entity) -> list[dict[str, Any]]:
    """Rôles les plus populaires d'une personnalité, films et séries confondus."""
    roles = []
    for kind, credits_key, title_key, date_key in (
        (EntityKind.MOVIE, "movie_credits", "title", "release_date"),
        (EntityKind.TV, "tv_credits", "name", "first_air_date"),
    ):
        for role in (data.get(credits_key) or {}).get("cast", []):
            roles.append({
                "kind": kind.value,
                "id": role.get("id"),
                "title": role.get(title_key, ""),
                "character": role.get("character", ""),
                "year": _year(role.get(date_key)),
                "popularity": role.get("popularity", 0.0),
            })
    roles.sort(key=lambda r: r["popularity"], reverse=True)
    return roles[:MAX_KNOWN_FOR]


def movie_view(data: Optional[Entity], base_path: str, pathname: str) -> PageBody:
    """Fiche film."""
    if not data:
        return PageBody("error.html")
    credits = data.get("credits")
    return PageBody(
        "entities/movie.html",
        {
            "movie": data,
            "title": data.get("title") or data.get("original_title", ""),
            "year": _year(data.get("release_date")),
            "poster_url": _image_url(data.get("poster_path")),
            "genres": [g.get("name", "") for g in data.get("genres", [])],
            "directors": _crew_names(credits, "Director"),
            "cast": _cast(credits),
            "base_path": base_path,
            "pathname": pathname,
        },
    )


def tv_view(data: Optional[Entity], base_path: str, pathname: str) -> PageBody:
    """Fiche série TV."""
    if not data:
        return PageBody("error.html")
    return PageBody(
        "entities/tv.html",
        {
            "show": data,
            "title": data.get("name") or data.get("original_name", ""),
            "year": _year(data.get("first_air_date")),
            "poster_url": _image_url(data.get("poster_path")),
            "genres": [g.get("name", "") for g in data.get("genres", [])],
            "creators": [c.get("name", "") for c in data.get("created_by", [])],
            "season_count": data.get("number_of_seasons"),
            "cast": _cast(data.get("credits")),
            "base_path": base_path,
            "pathname": pathname,
        },
    )


def person_view(data: Optional[Entity], base_path: str, pathname: str) -> PageBody:
    """Fiche personnalité."""
    if not data:
        return PageBody("error.html")
    return PageBody(
        "entities/person.html",
        {
            "person": data,
            "title": data.get("name", ""),
            "profile_url": _image_url(data.get("profile_path")),
            "known_for": _known_for(data),
            "base_path": base_path,
            "pathname": pathname,
        },
    )


def build_pages(api: IMetadataAPIClient) -> dict[EntityKind, CallingApiPage]:
    """Construit les pages d'entités liées au client API."""
    return {
        EntityKind.MOVIE: with_calling_api(
            api_call=lambda id, language: api.movie(id, language=language),
            namespaces="movie",
            namespaces_required=["common", "movie"],
        )(movie_view),
        EntityKind.TV: with_calling_api(
            api_call=lambda id, language: api.tv(id, language=language),
            namespaces="tv",
            namespaces_required=["common", "tv"],
        )(tv_view),
        EntityKind.PERSON: with_calling_api(
            api_call=lambda id, language: api.person(id, language=language),
            namespaces="person",
            namespaces_required=["common", "person"],
        )(person_view),
    }
