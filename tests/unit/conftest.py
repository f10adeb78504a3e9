import asyncio

import pytest

from core.swapi import SwapiClient

BASE_URL = "https://swapi.test/api"

PLANET_1 = {
    "name": "Tatooine",
    "rotation_period": "23",
    "orbital_period": "304",
    "diameter": "10465",
    "climate": "arid",
    "terrain": "desert",
    "url": f"{BASE_URL}/planets/1/",
}

FILM_1 = {
    "title": "A New Hope",
    "episode_id": 4,
    "director": "George Lucas",
    "release_date": "1977-05-25",
    "url": f"{BASE_URL}/films/1/",
}

LUKE_SEARCH = {
    "count": 1,
    "next": None,
    "previous": None,
    "results": [
        {
            "name": "Luke Skywalker",
            "height": "172",
            "homeworld": f"{BASE_URL}/planets/1/",
        }
    ],
}


class RecordingSwapiClient(SwapiClient):
    """Serves canned bodies by URL and records every request."""

    def __init__(self, responses=None, delay=0.0):
        super().__init__(base_url=BASE_URL)
        self.responses = dict(responses or {})
        self.delay = delay
        self.requested = []

    async def fetch_json(self, url):
        self.requested.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        value = self.responses[url]
        if isinstance(value, Exception):
            raise value
        return value


def canned_responses():
    return {
        f"{BASE_URL}/planets/1/": PLANET_1,
        f"{BASE_URL}/films/1/": FILM_1,
        f"{BASE_URL}/people/?search=Luke%20Skywalker": LUKE_SEARCH,
    }


@pytest.fixture
def make_client():
    def factory(responses=None, delay=0.0):
        if responses is None:
            responses = canned_responses()
        return RecordingSwapiClient(responses, delay=delay)

    return factory


@pytest.fixture
def swapi_client(make_client):
    return make_client()
