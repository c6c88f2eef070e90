"""Entry point for serving the Volunteer Board API.

Configuration such as ``DATABASE_URL``, ``SECRET_KEY``, ``ADMIN_EMAILS``
and ``ADMIN_SECRET`` is read from the environment or a ``.env`` file in
the working directory.  Host and port come from ``HOST`` and ``PORT``
(defaults ``0.0.0.0`` and ``4000``).

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from volunteer_board_api.app.main import app


async def main() -> None:
    """Serve the application until interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "4000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Volunteer Board API listening on http://%s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
