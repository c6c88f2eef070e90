"""
Pure transforms between database rows and API entities.

Rows come back from ``sqlite3`` with snake_case columns; entities use
the Pydantic schemas (serialised as camelCase).  Keeping the mapping
free of I/O lets it be tested without a database.
"""

import json
import logging
from typing import Any, Dict, List, Mapping

from ..schemas.opportunity import Opportunity
from ..schemas.signup import Signup

logger = logging.getLogger(__name__)

OPPORTUNITY_COLUMNS = (
    "id, title, organization, location, description, date, tags, spots_remaining"
)
SIGNUP_COLUMNS = (
    "id, opportunity_id, volunteer_name, volunteer_email, notes, created_at"
)

# Entity field -> column for the fields an admin may write.
_WRITABLE_OPPORTUNITY_FIELDS = {
    "title": "title",
    "organization": "organization",
    "location": "location",
    "description": "description",
    "date": "date",
    "tags": "tags",
    "spots_remaining": "spots_remaining",
}


def decode_tags(raw: Any) -> List[str]:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return [str(tag) for tag in raw]
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed tags value %r", raw)
        return []
    if not isinstance(value, list):
        return []
    return [str(tag) for tag in value]


def encode_tags(tags: List[str]) -> str:
    return json.dumps(list(tags))


def opportunity_from_row(row: Mapping[str, Any]) -> Opportunity:
    return Opportunity(
        id=row["id"],
        title=row["title"],
        organization=row["organization"],
        location=row["location"],
        description=row["description"],
        date=row["date"],
        tags=decode_tags(row["tags"]),
        spots_remaining=row["spots_remaining"],
    )


def signup_from_row(row: Mapping[str, Any]) -> Signup:
    return Signup(
        id=row["id"],
        opportunity_id=row["opportunity_id"],
        volunteer_name=row["volunteer_name"],
        volunteer_email=row["volunteer_email"],
        notes=row["notes"],
        created_at=row["created_at"],
    )


def opportunity_to_columns(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate entity fields into column values.

    Unknown keys are dropped and ``tags`` is serialised to JSON text.
    """
    columns: Dict[str, Any] = {}
    for name, value in fields.items():
        column = _WRITABLE_OPPORTUNITY_FIELDS.get(name)
        if column is None:
            continue
        columns[column] = encode_tags(value) if column == "tags" else value
    return columns
