"""Tests for row <-> entity mapping."""

from __future__ import annotations

from volunteer_board_api.app.services.mapping import (
    decode_tags,
    opportunity_from_row,
    opportunity_to_columns,
    signup_from_row,
)


def test_opportunity_row_maps_to_camel_case_entity() -> None:
    row = {
        "id": "op-1",
        "title": "Mock Opportunity",
        "organization": "Test Org",
        "location": "Remote",
        "description": "Help with testing the application.",
        "date": "2024-03-10",
        "tags": '["Remote", "Testing"]',
        "spots_remaining": 5,
    }
    opportunity = opportunity_from_row(row)
    assert opportunity.model_dump(by_alias=True) == {
        "id": "op-1",
        "title": "Mock Opportunity",
        "organization": "Test Org",
        "location": "Remote",
        "description": "Help with testing the application.",
        "date": "2024-03-10",
        "tags": ["Remote", "Testing"],
        "spotsRemaining": 5,
    }


def test_signup_row_with_dangling_reference() -> None:
    row = {
        "id": "sign-1",
        "opportunity_id": None,
        "volunteer_name": "Jane Volunteer",
        "volunteer_email": "volunteer@example.com",
        "notes": None,
        "created_at": "2024-03-08T12:00:00.000Z",
    }
    signup = signup_from_row(row)
    dumped = signup.model_dump(by_alias=True)
    assert dumped["opportunityId"] is None
    assert dumped["volunteerName"] == "Jane Volunteer"
    assert dumped["createdAt"] == "2024-03-08T12:00:00.000Z"


def test_decode_tags_tolerates_bad_values() -> None:
    assert decode_tags(None) == []
    assert decode_tags("") == []
    assert decode_tags("not json") == []
    assert decode_tags('{"a": 1}') == []
    assert decode_tags('["a", 2]') == ["a", "2"]


def test_opportunity_to_columns_encodes_tags_and_drops_unknown_fields() -> None:
    columns = opportunity_to_columns({"title": "New", "tags": ["x"], "id": "nope", "bogus": 1})
    assert columns == {"title": "New", "tags": '["x"]'}
