"""
Tests for TMDBClient - TMDB API client implementation.

Uses respx to mock httpx calls and verifies:
- movie/person/tv hit the right endpoint with their default sub-resources
- language defaults to "en"
- the API key is bound once to the decorated client
- HTTP errors propagate unchanged (no retry)
"""

import httpx
import pytest
import respx

from cinelingua.adapters.api.tmdb_client import DEFAULT_APPEND, TMDBClient
from cinelingua.core.ports.api_clients import EntityKind, IMetadataAPIClient
from tests.fixtures.tmdb_responses import (
    TMDB_MOVIE_RESPONSE,
    TMDB_NOT_FOUND_RESPONSE,
    TMDB_PERSON_RESPONSE,
    TMDB_TV_RESPONSE,
)

BASE_URL = "https://api.themoviedb.org/3"


@pytest.fixture
def tmdb_client() -> TMDBClient:
    """TMDBClient avec un client httpx cree a la demande."""
    return TMDBClient(api_key="test_api_key")


class TestTMDBClientInterface:
    """Test TMDBClient implements IMetadataAPIClient correctly."""

    def test_implements_interface(self, tmdb_client: TMDBClient):
        """TMDBClient should implement IMetadataAPIClient."""
        assert isinstance(tmdb_client, IMetadataAPIClient)

    def test_source_property_returns_tmdb(self, tmdb_client: TMDBClient):
        """source property should return 'tmdb'."""
        assert tmdb_client.source == "tmdb"

    def test_default_append_table(self):
        """Les sous-ressources par defaut dependent du type d'entite."""
        assert DEFAULT_APPEND[EntityKind.MOVIE] == ("credits", "translations")
        assert DEFAULT_APPEND[EntityKind.TV] == ("credits", "translations")
        assert DEFAULT_APPEND[EntityKind.PERSON] == (
            "movie_credits",
            "tv_credits",
            "translations",
        )


class TestTMDBFetch:
    """Tests for movie(), person() and tv()."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_movie_returns_parsed_body(self, tmdb_client: TMDBClient):
        """movie() renvoie le corps JSON de /movie/{id}."""
        route = respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        data = await tmdb_client.movie(550, language="fr-FR")

        assert data == TMDB_MOVIE_RESPONSE
        params = route.calls.last.request.url.params
        assert params["language"] == "fr-FR"
        assert params["append_to_response"] == "credits,translations"
        assert params["api_key"] == "test_api_key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_person_uses_person_defaults(self, tmdb_client: TMDBClient):
        """person() joint les credits films, series et les traductions."""
        route = respx.get(f"{BASE_URL}/person/287").mock(
            return_value=httpx.Response(200, json=TMDB_PERSON_RESPONSE)
        )

        data = await tmdb_client.person("287", language="en-US")

        assert data["name"] == "Brad Pitt"
        params = route.calls.last.request.url.params
        assert params["append_to_response"] == "movie_credits,tv_credits,translations"

    @pytest.mark.asyncio
    @respx.mock
    async def test_tv_uses_tv_endpoint(self, tmdb_client: TMDBClient):
        """tv() interroge /tv/{id}."""
        route = respx.get(f"{BASE_URL}/tv/1399").mock(
            return_value=httpx.Response(200, json=TMDB_TV_RESPONSE)
        )

        data = await tmdb_client.tv(1399, language="de-DE")

        assert data["name"] == "Game of Thrones"
        assert route.called

    @pytest.mark.parametrize("language", [None, ""])
    @pytest.mark.asyncio
    @respx.mock
    async def test_language_defaults_to_en(self, tmdb_client: TMDBClient, language):
        """Sans langue, la requete est faite en anglais."""
        route = respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.movie(550, language=language)

        assert route.calls.last.request.url.params["language"] == "en"

    @pytest.mark.asyncio
    @respx.mock
    async def test_custom_append_overrides_defaults(self, tmdb_client: TMDBClient):
        """Une liste append explicite remplace celle par defaut."""
        route = respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.movie(550, language="en", append=["videos"])

        assert route.calls.last.request.url.params["append_to_response"] == "videos"

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_append_omits_parameter(self, tmdb_client: TMDBClient):
        """Une liste append vide n'ajoute pas le parametre."""
        route = respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.movie(550, language="en", append=[])

        assert "append_to_response" not in route.calls.last.request.url.params

    @pytest.mark.asyncio
    @respx.mock
    async def test_single_request_per_call(self, tmdb_client: TMDBClient):
        """Chaque operation fait exactement une requete."""
        respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await tmdb_client.movie(550, language="en")

        assert respx.calls.call_count == 1


class TestTMDBErrors:
    """Les erreurs HTTP sont propagees sans retry."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_not_found_raises_http_status_error(self, tmdb_client: TMDBClient):
        """404 remonte en httpx.HTTPStatusError."""
        respx.get(f"{BASE_URL}/movie/999999").mock(
            return_value=httpx.Response(404, json=TMDB_NOT_FOUND_RESPONSE)
        )

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await tmdb_client.movie(999999, language="en")
        assert exc_info.value.response.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_is_not_retried(self, tmdb_client: TMDBClient):
        """429 n'est pas relance : une seule requete, erreur propagee."""
        respx.get(f"{BASE_URL}/movie/550").mock(return_value=httpx.Response(429))

        with pytest.raises(httpx.HTTPStatusError):
            await tmdb_client.movie(550, language="en")
        assert respx.calls.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_propagates(self, tmdb_client: TMDBClient):
        """Les erreurs de transport remontent telles quelles."""
        respx.get(f"{BASE_URL}/tv/1399").mock(side_effect=httpx.ConnectError("down"))

        with pytest.raises(httpx.ConnectError):
            await tmdb_client.tv(1399, language="en")


class TestTMDBAuthentication:
    """Liaison de la cle API au client decore."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_decorates_existing_client(self):
        """La cle v3 est ajoutee aux parametres du client fourni."""
        http_client = httpx.AsyncClient(base_url=BASE_URL)
        client = TMDBClient(api_key="abc123", client=http_client)
        route = respx.get(f"{BASE_URL}/person/287").mock(
            return_value=httpx.Response(200, json=TMDB_PERSON_RESPONSE)
        )

        await client.person(287, language="fr")

        assert http_client.params["api_key"] == "abc123"
        assert route.calls.last.request.url.params["api_key"] == "abc123"
        await client.close()
        assert http_client.is_closed

    @pytest.mark.asyncio
    @respx.mock
    async def test_v4_token_uses_bearer_header(self):
        """Un Read Access Token v4 passe en header Authorization."""
        token = "eyJ" + "a" * 60
        client = TMDBClient(api_key=token)
        route = respx.get(f"{BASE_URL}/movie/550").mock(
            return_value=httpx.Response(200, json=TMDB_MOVIE_RESPONSE)
        )

        await client.movie(550, language="en")

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {token}"
        assert "api_key" not in request.url.params
        await client.close()
