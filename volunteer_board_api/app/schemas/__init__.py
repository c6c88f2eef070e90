"""
Pydantic schema definitions for API payloads.

Schemas are separated from database rows to decouple the camelCase
API representation from the snake_case storage columns.
"""
