"""
Shared fixtures: sample API payloads and an in-process fake Freesound server.
"""

import asyncio
import copy
import json
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from freesound_api import FreesoundClient

ENV_VARS = (
    "FREESOUND_API_KEY",
    "FREESOUND_BASE_URL",
    "FREESOUND_TIMEOUT",
    "FREESOUND_LOG_LEVEL",
)

SOUND_PAYLOAD: Dict[str, Any] = {
    "id": 1234,
    "url": "https://freesound.org/people/alice/sounds/1234/",
    "name": "Piano C4.wav",
    "tags": ["piano", "note", "c4"],
    "description": "A single piano note.",
    "geotag": "41.3851 2.1734",
    "created": "2023-05-01T12:30:00",
    "license": "http://creativecommons.org/licenses/by/4.0/",
    "type": "wav",
    "channels": 2,
    "filesize": 1048576,
    "bitrate": 1411.2,
    "bitdepth": 16,
    "duration": 3.5,
    "samplerate": 44100.0,
    "username": "alice",
    "pack": "https://freesound.org/apiv2/packs/99/",
    "download": "https://freesound.org/apiv2/sounds/1234/download/",
    "bookmark": "https://freesound.org/apiv2/sounds/1234/bookmark/",
    "previews": {
        "preview-hq-mp3": "https://cdn.freesound.org/previews/1/1234-hq.mp3",
        "preview-lq-mp3": "https://cdn.freesound.org/previews/1/1234-lq.mp3",
        "preview-hq-ogg": "https://cdn.freesound.org/previews/1/1234-hq.ogg",
        "preview-lq-ogg": "https://cdn.freesound.org/previews/1/1234-lq.ogg",
    },
    "images": {
        "waveform_l": "https://cdn.freesound.org/displays/1/1234_wave_L.png",
        "waveform_m": "https://cdn.freesound.org/displays/1/1234_wave_M.png",
        "spectral_l": "https://cdn.freesound.org/displays/1/1234_spec_L.jpg",
        "spectral_m": "https://cdn.freesound.org/displays/1/1234_spec_M.jpg",
    },
    "num_downloads": 321,
    "avg_rating": 4.5,
    "num_ratings": 12,
    "rate": "https://freesound.org/apiv2/sounds/1234/rate/",
    "comments": "https://freesound.org/apiv2/sounds/1234/comments/",
    "num_comments": 3,
    "comment": "https://freesound.org/apiv2/sounds/1234/comment/",
    "similar_sounds": "https://freesound.org/apiv2/sounds/1234/similar/",
    "analysis": None,
    "analysis_stats": "https://freesound.org/apiv2/sounds/1234/analysis/",
    "analysis_frames": "https://freesound.org/data/analysis/1/1234_frames.json",
}

SEARCH_PAYLOAD: Dict[str, Any] = {
    "count": 2,
    "next": "https://freesound.org/apiv2/search/text/?query=piano&page=2",
    "previous": None,
    "results": [
        {"id": 1234, "name": "Piano C4.wav", "tags": ["piano"], "username": "alice", "license": "Attribution"},
        {"id": 5678, "name": "Piano chord", "tags": ["piano", "chord"], "username": "bob", "license": "Creative Commons 0"},
    ],
}


@pytest.fixture
def sound_payload() -> Dict[str, Any]:
    return copy.deepcopy(SOUND_PAYLOAD)


@pytest.fixture
def search_payload() -> Dict[str, Any]:
    return copy.deepcopy(SEARCH_PAYLOAD)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove FREESOUND_* variables for the test and restore them afterwards."""
    for name in ENV_VARS:
        # setenv first so that undo also removes values a .env file loads
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    return monkeypatch


class FakeFreesound:
    """Records requests and answers them with canned responses per path."""

    def __init__(self):
        self.base_url = ""
        self.requests: List[Dict[str, Any]] = []
        self._routes: Dict[str, Tuple[int, Union[str, bytes], Dict[str, str], float]] = {}

    def respond(
        self,
        path: str,
        payload: Any = None,
        status: int = 200,
        body: Optional[Union[str, bytes]] = None,
        headers: Optional[Dict[str, str]] = None,
        delay: float = 0.0,
    ) -> None:
        """
        Register the response for an API path such as 'search/text/'.

        A bytes body is sent as is, labelled utf-8. ``delay`` holds the
        response back for that many seconds.
        """
        content = body if body is not None else json.dumps(payload)
        self._routes["/apiv2/" + path.lstrip("/")] = (status, content, headers or {}, delay)

    @property
    def last_request(self) -> Dict[str, Any]:
        return self.requests[-1]

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append({
            "method": request.method,
            "path": request.path,
            "query": list(request.query.items()),
        })
        status, content, headers, delay = self._routes.get(
            request.path, (404, json.dumps({"detail": "Not found."}), {}, 0.0)
        )
        if delay:
            await asyncio.sleep(delay)
        if isinstance(content, bytes):
            return web.Response(
                status=status, body=content, headers=headers,
                content_type="application/json", charset="utf-8",
            )
        return web.Response(status=status, text=content, headers=headers, content_type="application/json")


@pytest_asyncio.fixture
async def fake_api():
    fake = FakeFreesound()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    server = TestServer(app)
    await server.start_server()
    fake.base_url = str(server.make_url("/apiv2"))
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def client(fake_api):
    client = FreesoundClient("test-key", base_url=fake_api.base_url)
    yield client
    await client.close()
