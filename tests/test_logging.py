"""Tests for logging setup and the per-request access line."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from volunteer_board_api.app.core.logging_config import HANDLER_PREFIX, setup_logging

ACCESS_LOGGER = "volunteer_board_api.access"


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.mark.asyncio
async def test_successful_request_is_logged(client: AsyncClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
    await client.get("/api/v1/health", headers={"User-Agent": "board-tests"})

    records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
    assert len(records) == 1
    assert records[0].levelno == logging.INFO
    assert "GET /api/v1/health -> 200" in records[0].getMessage()
    assert "ua=board-tests" in records[0].getMessage()


@pytest.mark.asyncio
async def test_unhandled_error_still_gets_access_line(app: FastAPI, caplog: pytest.LogCaptureFixture) -> None:
    @app.get("/api/v1/boom")
    async def boom() -> None:
        raise RuntimeError("store exploded")

    caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/api/v1/boom")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    records = [r for r in caplog.records if r.name == ACCESS_LOGGER]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
    assert "GET /api/v1/boom -> 500" in records[0].getMessage()


def test_setup_logging_installs_handlers_once(root_logger: logging.Logger, tmp_path) -> None:
    logfile = tmp_path / "logs" / "board.log"
    setup_logging("debug", str(logfile))
    setup_logging("warning", str(logfile))

    names = [h.get_name() for h in root_logger.handlers if (h.get_name() or "").startswith(HANDLER_PREFIX)]
    assert sorted(names) == [f"{HANDLER_PREFIX}.console", f"{HANDLER_PREFIX}.file"]
    assert root_logger.level == logging.WARNING
    assert logfile.parent.is_dir()

    logging.getLogger("volunteer_board_api.tests").warning("written to file")
    for handler in root_logger.handlers:
        handler.flush()
    assert "written to file" in logfile.read_text(encoding="utf-8")


def test_unknown_level_falls_back_to_info(root_logger: logging.Logger) -> None:
    setup_logging("chatty")
    assert root_logger.level == logging.INFO
