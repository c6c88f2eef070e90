"""Test fixtures for the Volunteer Board API test suite."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from volunteer_board_api.app.core.config import Settings
from volunteer_board_api.app.core.db import get_connection, init_db, new_id
from volunteer_board_api.app.core.security import create_access_token
from volunteer_board_api.app.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_SECRET = "legacy-admin-secret"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(
        secret_key="test-secret-key",
        admin_emails=(ADMIN_EMAIL,),
        admin_secret=ADMIN_SECRET,
        database_url=str(tmp_path / "volunteer_board.db"),
        default_page_size=25,
        max_page_size=50,
    )


@pytest.fixture
def db_url(settings: Settings) -> str:
    init_db(settings.database_url)
    return settings.database_url


@pytest.fixture
def app(settings: Settings, db_url: str) -> FastAPI:
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers(settings: Settings) -> dict[str, str]:
    token = create_access_token({"sub": ADMIN_EMAIL}, settings)
    return {"Authorization": f"Bearer {token}"}


def insert_opportunity(database_url: str, **overrides: Any) -> str:
    """Insert an opportunity row directly and return its id."""
    row = {
        "id": new_id(),
        "title": "Community Garden Cleanup",
        "organization": "Green Streets",
        "location": "Riverside Park",
        "description": "Help weed and mulch the shared beds.",
        "date": "2024-03-10",
        "tags": ["Outdoors"],
        "spots_remaining": 5,
    }
    row.update(overrides)
    row["tags"] = json.dumps(row["tags"])
    conn = get_connection(database_url)
    try:
        conn.execute(
            "INSERT INTO opportunities (id, title, organization, location, description, date, tags, spots_remaining) "
            "VALUES (:id, :title, :organization, :location, :description, :date, :tags, :spots_remaining)",
            row,
        )
        conn.commit()
    finally:
        conn.close()
    return row["id"]


def insert_signup(database_url: str, opportunity_id: str | None, created_at: str, **overrides: Any) -> str:
    """Insert a signup row with an explicit timestamp and return its id."""
    row = {
        "id": new_id(),
        "opportunity_id": opportunity_id,
        "volunteer_name": "Jane Volunteer",
        "volunteer_email": "volunteer@example.com",
        "notes": None,
        "created_at": created_at,
    }
    row.update(overrides)
    conn = get_connection(database_url)
    try:
        conn.execute(
            "INSERT INTO signups (id, opportunity_id, volunteer_name, volunteer_email, notes, created_at) "
            "VALUES (:id, :opportunity_id, :volunteer_name, :volunteer_email, :notes, :created_at)",
            row,
        )
        conn.commit()
    finally:
        conn.close()
    return row["id"]


def fetch_one(database_url: str, sql: str, params: tuple = ()) -> Any:
    conn = get_connection(database_url)
    try:
        return conn.execute(sql, params).fetchone()
    finally:
        conn.close()


def spots_remaining(database_url: str, opportunity_id: str) -> int:
    return fetch_one(
        database_url, "SELECT spots_remaining FROM opportunities WHERE id = ?", (opportunity_id,)
    )["spots_remaining"]


def signup_count(database_url: str, opportunity_id: str) -> int:
    return fetch_one(
        database_url, "SELECT COUNT(*) AS n FROM signups WHERE opportunity_id = ?", (opportunity_id,)
    )["n"]
