"""Pagination helpers shared by the list operations."""
import math
from dataclasses import dataclass, field
from typing import Generic, List, Tuple, TypeVar

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar("T")


def clamp_pagination(page: int, limit: int) -> Tuple[int, int]:
    """
    Normalise page/limit the same way for every list operation.
    
    page < 1 becomes 1, limit < 1 becomes 10, limit > 100 becomes 100.
    """
    if page < 1:
        page = DEFAULT_PAGE
    if limit < 1:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    return page, limit


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


@dataclass
class Page(Generic[T]):
    """One page of a list operation, with the clamped page/limit actually used."""
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    
    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)
