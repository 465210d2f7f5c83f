"""
Paged list responses shared by the meal, upcoming meal and request listings.
"""

from typing import Generic, TypeVar, Any, List
from pydantic import Field

from domain.schemas.base import CamelModel

T = TypeVar("T")


class PaginatedResponse(CamelModel, Generic[T]):
    """One page of a listing, served as ``{items, total, page, pageSize, hasNext, hasPrev}``"""

    items: List[T] = Field(..., description="Items on this page")
    total: int = Field(..., description="Matching items across all pages")
    page: int = Field(..., ge=1, description="1-based page number")
    page_size: int = Field(..., ge=1, description="Page length requested")
    has_next: bool = False
    has_prev: bool = False


def paginated_response(items: List[Any], total: int, page: int, page_size: int) -> dict:
    """Wrap a page of ``items`` with its position in the full listing"""
    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "has_next": page * page_size < total,
        "has_prev": page > 1,
    }
