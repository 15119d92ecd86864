# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
from aiohttp import web

from ..config import Config
from .convert import handle_convert_image_request, handle_sprite_request


async def health_check_handler(request):
    """Simple health check endpoint."""
    return web.json_response({"status": "ok", "service": "convertkit"})


def create_app() -> web.Application:
    """Create and configure the HTTP application."""
    max_upload_mb = float(Config().get("server.max_upload_mb"))
    app = web.Application(client_max_size=int(max_upload_mb * 1024 * 1024))

    # Convert API endpoints
    app.router.add_post('/api/convert-image', handle_convert_image_request)
    app.router.add_post('/api/generate-svg-sprite', handle_sprite_request)

    app.router.add_get('/api/system/health', health_check_handler)

    return app


async def start_server(host: str = "0.0.0.0", port: int = 8788):
    """Start the HTTP server."""
    app = create_app()

    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()

    logging.getLogger('server').info(
        f"Server on http://{host}:{port}/ (image: /api/convert-image, sprite: /api/generate-svg-sprite)"
    )

    return runner
