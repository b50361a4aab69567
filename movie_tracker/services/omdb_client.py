"""
OMDb client - the external catalog gateway.

Wraps the OMDb HTTP API (http://www.omdbapi.com/) and normalizes its answers
into MovieDescriptor objects.

Wire contract:
    GET <base_url>?apikey=<key>&i=<imdb id>     exact lookup
    GET <base_url>?apikey=<key>&t=<title>       title lookup
    Response: JSON with "Response": "True" | "False"; on "True" the payload
    carries "Title", "Year", "Poster" and "imdbID", on "False" an "Error".

Failures are surfaced, never retried.
"""

from typing import Any

import httpx
from pydantic import ValidationError

from movie_tracker.exceptions import MovieNotFoundError, UpstreamUnavailableError
from movie_tracker.schemas import MovieDescriptor
from movie_tracker.services.catalog_interface import MovieCatalog
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("omdb_client")

# OMDb "Error" messages that mean "no such movie" rather than a service problem
NOT_FOUND_MARKERS = ("not found", "incorrect imdb id")

MISSING_VALUE = "N/A"


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    if not value or value == MISSING_VALUE:
        return None
    return value


def parse_omdb_payload(payload: Any, query_label: str) -> MovieDescriptor:
    """Turn a decoded OMDb response into a descriptor or the matching error."""
    if not isinstance(payload, dict):
        raise UpstreamUnavailableError(
            f"OMDb returned an unexpected payload for '{query_label}'"
        )

    response_flag = payload.get("Response")
    if response_flag == "False":
        error = str(payload.get("Error") or "")
        if any(marker in error.lower() for marker in NOT_FOUND_MARKERS):
            raise MovieNotFoundError(f"Movie '{query_label}' not found in OMDb")
        raise UpstreamUnavailableError(
            f"OMDb rejected the request for '{query_label}': {error or 'unknown error'}"
        )
    if response_flag != "True":
        raise UpstreamUnavailableError(
            f"OMDb response for '{query_label}' has no valid 'Response' flag"
        )

    imdb_id = _clean(payload.get("imdbID"))
    title = _clean(payload.get("Title"))
    if not imdb_id or not title:
        raise UpstreamUnavailableError(
            f"OMDb response for '{query_label}' is missing imdbID or Title"
        )

    try:
        return MovieDescriptor(
            imdb_id=imdb_id,
            title=title,
            year=_clean(payload.get("Year")),
            poster=_clean(payload.get("Poster")),
        )
    except ValidationError as e:
        raise UpstreamUnavailableError(
            f"OMDb response for '{query_label}' failed validation: {e}"
        ) from e


class OmdbClient(MovieCatalog):
    def __init__(
        self,
        api_key: str | None,
        base_url: str = "http://www.omdbapi.com/",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def fetch_by_imdb_id(self, imdb_id: str) -> MovieDescriptor:
        return await self._query({"i": imdb_id}, imdb_id)

    async def search_by_title(self, title: str) -> MovieDescriptor:
        return await self._query({"t": title}, title)

    async def _query(self, params: dict[str, str], query_label: str) -> MovieDescriptor:
        if not self.api_key:
            raise UpstreamUnavailableError("OMDB_API_KEY is not configured")

        logger.info(f"Querying OMDb for '{query_label}'")
        try:
            response = await self._client.get(
                self.base_url, params={"apikey": self.api_key, **params}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"OMDb returned HTTP {e.response.status_code} for '{query_label}'"
            )
            raise UpstreamUnavailableError(
                f"OMDb returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"OMDb request for '{query_label}' failed: {e!r}")
            raise UpstreamUnavailableError(f"OMDb request failed: {e}") from e
        except ValueError as e:
            logger.warning(f"OMDb response for '{query_label}' is not JSON: {e}")
            raise UpstreamUnavailableError("OMDb returned a non-JSON response") from e

        descriptor = parse_omdb_payload(payload, query_label)
        logger.debug(f"OMDb matched '{query_label}' to {descriptor.imdb_id}")
        return descriptor

    async def close(self):
        await self._client.aclose()
