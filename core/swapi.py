"""
Thin async client for the Star Wars API.

One method call = exactly one outbound GET. No retries, no caching.
Response bodies are returned as parsed JSON, untouched.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import aiohttp

from core.config import DEFAULT_SWAPI_BASE_URL
from core.errors import (
    InvalidToolArgumentsError,
    UpstreamConnectionError,
    UpstreamParseError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

# Same unreserved set as JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "!*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


def encode_path_id(value: str) -> str:
    # "." and ".." survive percent-encoding and would be resolved as
    # relative segments by the URL parser.
    if value.strip() in ("", ".", ".."):
        raise InvalidToolArgumentsError(
            f"Invalid resource id {value!r}",
            details={"id": value},
        )
    return encode_component(value)


class SwapiClient:
    def __init__(
        self,
        base_url: str = DEFAULT_SWAPI_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # -------- URLS --------

    def character_search_url(self, name: str) -> str:
        return f"{self.base_url}/people/?search={encode_component(name)}"

    def planet_url(self, planet_id: str) -> str:
        return f"{self.base_url}/planets/{encode_path_id(planet_id)}/"

    def film_url(self, film_id: str) -> str:
        return f"{self.base_url}/films/{encode_path_id(film_id)}/"

    # -------- ENDPOINTS --------

    async def search_character(self, name: str) -> Any:
        return await self.fetch_json(self.character_search_url(name))

    async def get_planet(self, planet_id: str) -> Any:
        return await self.fetch_json(self.planet_url(planet_id))

    async def get_film(self, film_id: str) -> Any:
        return await self.fetch_json(self.film_url(film_id))

    # -------- TRANSPORT --------

    def _session_kwargs(self) -> Dict[str, Any]:
        if self.timeout is None:
            return {}
        return {"timeout": aiohttp.ClientTimeout(total=self.timeout)}

    async def fetch_json(self, url: str) -> Any:
        logger.debug("GET %s", url)
        try:
            async with aiohttp.ClientSession(**self._session_kwargs()) as session:
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        raise UpstreamStatusError(url, response.status)
                    body = await response.read()
        # Timeouts first: aiohttp's timeout errors are also ClientErrors.
        except asyncio.TimeoutError as exc:
            raise UpstreamConnectionError(
                f"Request to {url} timed out",
                details={"url": url, "timeout": self.timeout},
            ) from exc
        except aiohttp.ClientError as exc:
            raise UpstreamConnectionError(
                f"Request to {url} failed: {exc}",
                details={"url": url},
            ) from exc

        try:
            return json.loads(body)
        except ValueError as exc:
            raise UpstreamParseError(
                f"Response from {url} is not valid JSON: {exc}",
                details={"url": url},
            ) from exc
