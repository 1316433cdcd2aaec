"""
Liveness endpoint for external health probes.
"""

import asyncio
import logging

from aiohttp import web

logger = logging.getLogger(__name__)

PING_BODY = "Bot is running"


async def handle_ping(request: web.Request) -> web.Response:
    return web.Response(text=PING_BODY)


def create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/ping", handle_ping)
    return app


async def run_liveness_server(port: int, host: str = "0.0.0.0") -> None:
    """Serve `/ping` until cancelled."""
    runner = web.AppRunner(create_app())
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(f"Server is running on port {port}")

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
