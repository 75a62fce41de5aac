"""
Point d'entrée CLI de CineLingua.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import asyncio
from typing import Annotated, Optional

import httpx
import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from .config import Settings
from .container import Container
from .core.entities.language import LanguageSelection
from .core.entities.media import Entity, entity_translations
from .core.ports.api_clients import EntityKind
from .logging_config import configure_logging
from .services.app_state import AppState, with_translations
from .services.translations import retrieve_data_with_fallback

app = typer.Typer(
    name="cinelingua",
    help="Navigateur de métadonnées films, séries et personnalités",
)
container = Container()
console = Console()

# Champs affichés par type d'entité
_DISPLAY_FIELDS = {
    EntityKind.MOVIE: ("title", "original_title", "release_date", "tagline", "overview"),
    EntityKind.TV: ("name", "original_name", "first_air_date", "overview"),
    EntityKind.PERSON: ("name", "birthday", "place_of_birth", "biography"),
}


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"URL de l'API : {config.tmdb_base_url}")
    typer.echo(f"Langue par défaut : {config.default_language}")
    typer.echo(f"Préfixe des URLs : {config.base_path or '(relatif)'}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def show(
    kind: Annotated[EntityKind, typer.Argument(help="Type d'entité")],
    entity_id: Annotated[int, typer.Argument(help="Identifiant TMDB")],
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Langue de traduction (ex: fr-FR)"),
    ] = None,
) -> None:
    """Affiche une entité dans la langue choisie, avec repli sur la langue par défaut."""
    try:
        data = asyncio.run(_fetch(kind, entity_id, language))
    except httpx.HTTPStatusError as e:
        console.print(f"[red]Erreur API {e.response.status_code}[/red] pour {kind.value}/{entity_id}")
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        console.print(f"[red]API injoignable :[/red] {e}")
        raise typer.Exit(code=1)

    selection = LanguageSelection(language, get_config().default_language)
    projected = retrieve_data_with_fallback(
        data, selection.default_code, selection.translation_code
    )
    state = with_translations(AppState(), entity_translations(data))

    table = Table(title=f"{kind.value} {entity_id} ({selection.resolved})")
    table.add_column("Champ", style="cyan")
    table.add_column("Valeur")
    for field in _DISPLAY_FIELDS[kind]:
        value = projected.get(field)
        if value:
            table.add_row(field, str(value))
    console.print(table)

    codes = state.available_languages_codes
    if codes:
        console.print(f"[dim]Langues disponibles : {', '.join(codes)}[/dim]")


async def _fetch(kind: EntityKind, entity_id: int, language: Optional[str]) -> Entity:
    """Récupère l'entité dans la langue effective puis ferme le client."""
    client = container.tmdb_client()
    selection = LanguageSelection(language, get_config().default_language)
    try:
        return await client.fetch(kind, entity_id, language=selection.resolved)
    finally:
        await client.close()


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web CineLingua."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("cinelingua.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.info("Démarrage de CineLingua")
    app()


if __name__ == "__main__":
    main()
