from minwiki.schemas.schemas import (
    Page,
    PageBody, PageResponse,
    SearchHit,
    HealthResponse,
)

__all__ = [
    "Page",
    "PageBody", "PageResponse",
    "SearchHit",
    "HealthResponse",
]
