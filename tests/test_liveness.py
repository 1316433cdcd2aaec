"""
Tests for the /ping liveness endpoint.
"""

from aiohttp import test_utils

from pumpnotifier.monitor.liveness import PING_BODY, create_app


async def test_ping_returns_static_body():
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        response = await client.get("/ping")

        assert response.status == 200
        assert await response.text() == PING_BODY


async def test_unknown_path_is_404():
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as client:
        response = await client.get("/health")

        assert response.status == 404
