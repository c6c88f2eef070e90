"""
Business logic for volunteer signups.

Admission is the only operation that touches two tables: it takes one
spot from an opportunity and records the signup.  Both writes happen
in a single ``BEGIN IMMEDIATE`` transaction and the spot is taken
with a conditional decrement, so the remaining count can never drop
below zero and a signup row never exists without its spot having been
taken.  Concurrent admissions for the last spot serialise on the
write lock; the loser sees ``ConflictError``.
"""

import logging
import sqlite3
from typing import Optional

from ..core.db import get_connection, new_id, transaction
from ..core.errors import ConflictError, NotFoundError, StoreError, ValidationError
from ..schemas.page import Page
from ..schemas.signup import Signup, SignupCreate, SignupReceipt
from .mapping import SIGNUP_COLUMNS, signup_from_row
from .pagination import PageWindow, build_page

logger = logging.getLogger(__name__)

CONFIRMATION_MESSAGE = "Signup recorded. Organizer will follow up soon."


class SignupService:
    """Service for admitting and listing signups."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    async def admit(self, opportunity_id: str, data: SignupCreate) -> SignupReceipt:
        """Admit a volunteer to an opportunity.

        Raises
        ------
        ValidationError
            The body names a different opportunity than the path.  Raised
            before the database is opened.
        NotFoundError
            The opportunity does not exist.
        ConflictError
            The opportunity has no spots remaining; nothing is written.
        StoreError
            The database failed; the transaction is rolled back.
        """
        if data.opportunity_id != opportunity_id:
            raise ValidationError("Opportunity ID mismatch")

        signup_id = new_id()
        try:
            with transaction(self.database_url) as conn:
                taken = conn.execute(
                    "UPDATE opportunities SET spots_remaining = spots_remaining - 1, "
                    "updated_at = CURRENT_TIMESTAMP WHERE id = ? AND spots_remaining > 0",
                    (opportunity_id,),
                ).rowcount
                if taken != 1:
                    exists = conn.execute(
                        "SELECT 1 FROM opportunities WHERE id = ?", (opportunity_id,)
                    ).fetchone()
                    if not exists:
                        raise NotFoundError("Opportunity not found")
                    raise ConflictError("No spots remaining")
                conn.execute(
                    "INSERT INTO signups (id, opportunity_id, volunteer_name, volunteer_email, notes) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        signup_id,
                        opportunity_id,
                        data.volunteer_name,
                        str(data.volunteer_email),
                        data.notes,
                    ),
                )
        except sqlite3.Error as exc:
            logger.exception("Failed to record signup for opportunity %s", opportunity_id)
            raise StoreError("Failed to record signup") from exc
        except ConflictError:
            logger.info("Signup rejected for opportunity %s: no spots remaining", opportunity_id)
            raise
        logger.info("Recorded signup %s for opportunity %s", signup_id, opportunity_id)
        return SignupReceipt(success=True, message=CONFIRMATION_MESSAGE)

    async def list_signups(self, window: PageWindow, opportunity_id: Optional[str] = None) -> Page[Signup]:
        """Return one page of signups, newest first.

        ``opportunity_id`` restricts both the items and the total count
        to a single opportunity.
        """
        where_sql = ""
        params: tuple = ()
        if opportunity_id:
            where_sql = " WHERE opportunity_id = ?"
            params = (opportunity_id,)
        conn = get_connection(self.database_url)
        try:
            total = conn.execute(
                f"SELECT COUNT(*) AS total FROM signups{where_sql}", params
            ).fetchone()["total"]
            rows = conn.execute(
                f"SELECT {SIGNUP_COLUMNS} FROM signups{where_sql} "
                "ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?",
                params + (window.limit, window.offset),
            ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Failed to list signups")
            raise StoreError("Failed to fetch signups") from exc
        finally:
            conn.close()
        return build_page([signup_from_row(row) for row in rows], window, total, Signup)
