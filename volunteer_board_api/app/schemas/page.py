"""
Generic page envelope returned by list endpoints.
"""

from typing import Generic, List, Optional, TypeVar

from .base import ApiModel

ItemT = TypeVar("ItemT")


class Page(ApiModel, Generic[ItemT]):
    items: List[ItemT]
    page: int
    per_page: int
    total_items: int
    total_pages: int
    has_more: bool
    next_page: Optional[int] = None
