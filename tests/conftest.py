import io

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from chesscard.config import settings
from chesscard.card.dependencies import get_http_client
from chesscard.main import app


AVATAR_URL = "https://images.chesscomfiles.com/uploads/v1/user/1.png"

NOT_FOUND_PAYLOAD = {"code": 0, "message": "User \"ghost\" not found."}


def make_png(size=(32, 32), color=(200, 40, 40, 255)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def stats_payload(rapid=1500, blitz=1400, bullet=1300) -> dict:
    payload = {}
    for key, rating in (("chess_rapid", rapid), ("chess_blitz", blitz), ("chess_bullet", bullet)):
        if rating is not None:
            payload[key] = {"last": {"rating": rating, "date": 1700000000, "rd": 50}}
    return payload


class FakeChessCom:
    """In-memory stand-in for api.chess.com plus an avatar CDN."""

    def __init__(self):
        self.profiles: dict[str, tuple[int, object]] = {}
        self.stats: dict[str, tuple[int, object]] = {}
        self.images: dict[str, tuple[int, bytes]] = {}
        self.requests: list[httpx.Request] = []
        self.errors: dict[str, Exception] = {}

    def add_player(self, username, profile=None, stats=None):
        if profile is None:
            profile = {"username": username, "avatar": AVATAR_URL}
        if stats is None:
            stats = stats_payload()
        self.profiles[username] = (200, profile)
        self.stats[username] = (200, stats)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url in self.errors:
            raise self.errors[url]

        if url in self.images:
            status, content = self.images[url]
            return httpx.Response(status, content=content)

        parts = request.url.path.strip("/").split("/")
        if parts[:2] != ["pub", "player"] or len(parts) < 3:
            return httpx.Response(404, content=b"")

        table = self.stats if parts[3:] == ["stats"] else self.profiles
        status, payload = table.get(parts[2], (404, NOT_FOUND_PAYLOAD))
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)


@pytest.fixture
def chesscom():
    fake = FakeChessCom()
    fake.images[AVATAR_URL] = (200, make_png())
    return fake


@pytest.fixture
def http_client(chesscom):
    return httpx.AsyncClient(
        transport=httpx.MockTransport(chesscom.handle),
        base_url=settings.chesscom_api_url,
    )


@pytest.fixture
def client(chesscom):
    async def override_http_client():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(chesscom.handle),
            base_url=settings.chesscom_api_url,
        ) as mock_client:
            yield mock_client

    app.dependency_overrides[get_http_client] = override_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
