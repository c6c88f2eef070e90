"""
Business logic for volunteer opportunities.

``OpportunityService`` lists, creates, edits and archives the rows of
the ``opportunities`` table.  Listings are ordered by event date
ascending and paginated with ``services.pagination``.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import get_connection, new_id, transaction
from ..core.errors import NotFoundError, StoreError, ValidationError
from ..schemas.opportunity import Opportunity, OpportunityCreate
from ..schemas.page import Page
from .mapping import OPPORTUNITY_COLUMNS, opportunity_from_row, opportunity_to_columns
from .pagination import PageWindow, build_page

logger = logging.getLogger(__name__)


class OpportunityService:
    """Service for managing opportunities stored in SQLite."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    async def list_opportunities(
        self,
        window: PageWindow,
        tag: Optional[str] = None,
        available_only: bool = False,
    ) -> Page[Opportunity]:
        """Return one page of opportunities ordered by date.

        - ``tag`` keeps opportunities carrying that tag (case insensitive).
        - ``available_only`` keeps opportunities with spots remaining.
        """
        where_clauses: List[str] = []
        params: List[Any] = []
        if tag:
            where_clauses.append(
                "EXISTS (SELECT 1 FROM json_each(opportunities.tags) "
                "WHERE lower(json_each.value) = lower(?))"
            )
            params.append(tag.strip())
        if available_only:
            where_clauses.append("spots_remaining > 0")
        where_sql = f" WHERE {' AND '.join(where_clauses)}" if where_clauses else ""

        conn = get_connection(self.database_url)
        try:
            total = conn.execute(
                f"SELECT COUNT(*) AS total FROM opportunities{where_sql}", tuple(params)
            ).fetchone()["total"]
            rows = conn.execute(
                f"SELECT {OPPORTUNITY_COLUMNS} FROM opportunities{where_sql} "
                "ORDER BY date ASC, created_at ASC LIMIT ? OFFSET ?",
                tuple(params) + (window.limit, window.offset),
            ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed to list opportunities")
            raise StoreError("Failed to fetch opportunities") from exc
        finally:
            conn.close()
        items = [opportunity_from_row(row) for row in rows]
        return build_page(items, window, total, Opportunity)

    async def get_opportunity(self, opportunity_id: str) -> Opportunity:
        """Retrieve a single opportunity or raise ``NotFoundError``."""
        conn = get_connection(self.database_url)
        try:
            row = conn.execute(
                f"SELECT {OPPORTUNITY_COLUMNS} FROM opportunities WHERE id = ?",
                (opportunity_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to load opportunity %s", opportunity_id)
            raise StoreError("Failed to load opportunity") from exc
        finally:
            conn.close()
        if not row:
            raise NotFoundError("Opportunity not found")
        return opportunity_from_row(row)

    async def create_opportunity(self, data: OpportunityCreate, actor: Dict[str, str]) -> Opportunity:
        """Insert a new opportunity and return the stored row."""
        opportunity_id = new_id()
        columns = opportunity_to_columns(data.model_dump())
        columns["id"] = opportunity_id
        names = ", ".join(columns)
        placeholders = ", ".join("?" for _ in columns)
        try:
            with transaction(self.database_url) as conn:
                conn.execute(
                    f"INSERT INTO opportunities ({names}) VALUES ({placeholders})",
                    tuple(columns.values()),
                )
                row = conn.execute(
                    f"SELECT {OPPORTUNITY_COLUMNS} FROM opportunities WHERE id = ?",
                    (opportunity_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to create opportunity '%s'", data.title)
            raise StoreError("Failed to create opportunity") from exc
        logger.info("%s created opportunity %s '%s'", actor.get("sub"), opportunity_id, data.title)
        return opportunity_from_row(row)

    async def update_opportunity(
        self, opportunity_id: str, updates: Dict[str, Any], actor: Dict[str, str]
    ) -> Opportunity:
        """Apply a partial update.

        Only the keys present in ``updates`` are written.  An empty
        update is rejected with ``ValidationError``; an unknown id with
        ``NotFoundError``.
        """
        columns = opportunity_to_columns(updates)
        if not columns:
            raise ValidationError("No updates provided")
        assignments = ", ".join(f"{name} = ?" for name in columns)
        try:
            with transaction(self.database_url) as conn:
                cursor = conn.execute(
                    f"UPDATE opportunities SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    tuple(columns.values()) + (opportunity_id,),
                )
                if cursor.rowcount == 0:
                    raise NotFoundError("Opportunity not found")
                row = conn.execute(
                    f"SELECT {OPPORTUNITY_COLUMNS} FROM opportunities WHERE id = ?",
                    (opportunity_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            logger.exception("Failed to update opportunity %s", opportunity_id)
            raise StoreError("Failed to update opportunity") from exc
        logger.info(
            "%s updated opportunity %s fields=%s", actor.get("sub"), opportunity_id, sorted(columns)
        )
        return opportunity_from_row(row)

    async def delete_opportunity(self, opportunity_id: str, actor: Dict[str, str]) -> None:
        """Archive (delete) an opportunity.

        Signups that referenced it are kept; the foreign key nulls their
        ``opportunity_id``.
        """
        try:
            with transaction(self.database_url) as conn:
                cursor = conn.execute("DELETE FROM opportunities WHERE id = ?", (opportunity_id,))
                if cursor.rowcount == 0:
                    raise NotFoundError("Opportunity not found")
        except sqlite3.Error as exc:
            logger.exception("Failed to delete opportunity %s", opportunity_id)
            raise StoreError("Failed to delete opportunity") from exc
        logger.info("%s archived opportunity %s", actor.get("sub"), opportunity_id)
