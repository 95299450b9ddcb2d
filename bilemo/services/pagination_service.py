"""
Pagination of list endpoints, served through the tag-aware cache.

A list request is turned into a PageRequest by get_page_request(), then
PaginationService looks the page up in the cache under
"<entity>-<scope>-<page>-<limit>" and runs the repository query on a miss.
The scope ("all" or "customer<id>") keeps a customer-filtered page apart
from the unfiltered page with the same numbers.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from fastapi import HTTPException, Query, status
from sqlalchemy.orm import Session

from bilemo.config import config
from bilemo.i18n import _
from bilemo.persistence.repository import PagedRepository
from bilemo.services.cache_service import CacheItem, TagAwareCache, tag_aware_cache
from bilemo.utils.verbosity_logger import get_logger

logger = get_logger("bilemo.services.pagination")

Serializer = Callable[[Any], Dict[str, Any]]


class PageNotFoundError(Exception):
    """
    Raised when the requested page holds no rows.
    """

    def __init__(self, total_pages: int):
        self.total_pages = total_pages
        super().__init__(
            _("This page does not exist. Total number of pages: %(total)s")
            % {"total": total_pages}
        )


@dataclass(frozen=True)
class PageRequest:
    """Validated 1-based page number and page size."""

    page: int
    limit: int


def _parse_positive(raw: Optional[str], default: int, argument: str) -> int:
    if raw is None:
        return default
    if raw.strip() == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_("Missing value for the %(argument)s argument.")
            % {"argument": argument},
        )
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_("The %(argument)s argument must be a positive integer.")
            % {"argument": argument},
        )
    return value


def get_page_request(
    page: Optional[str] = Query(None), limit: Optional[str] = Query(None)
) -> PageRequest:
    """
    FastAPI dependency reading the page and limit query parameters.

    Absent parameters take the configured defaults; empty, non-numeric,
    zero or negative values are rejected, as is a limit above max_limit.
    """
    pagination_config = config.get_pagination_config()
    the_page = _parse_positive(page, pagination_config["default_page"], "page")
    the_limit = _parse_positive(limit, pagination_config["default_limit"], "limit")

    max_limit = pagination_config["max_limit"]
    if max_limit and the_limit > max_limit:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_("The limit argument cannot exceed %(max)s.") % {"max": max_limit},
        )

    return PageRequest(page=the_page, limit=the_limit)


def total_pages(total_rows: int, limit: int) -> int:
    """Number of non-empty pages for a row count."""
    return math.ceil(total_rows / limit)


class PaginationService:
    """
    Serves list pages, caching the serialized rows per entity and scope.
    """

    def __init__(self, cache: TagAwareCache):
        self.cache = cache

    @staticmethod
    def cache_key(tag: str, scope: str, page_request: PageRequest) -> str:
        """Build the cache key of one page."""
        return f"{tag}-{scope}-{page_request.page}-{page_request.limit}"

    def list_page(
        self,
        db: Session,
        repository: PagedRepository,
        page_request: PageRequest,
        serializer: Serializer,
    ) -> List[Dict[str, Any]]:
        """
        Return one page of all rows of the repository's entity.
        """
        total_rows = repository.count(db)
        self._check_page(total_rows, page_request)
        # Page 1 holds every row when the limit exceeds the row count
        limit = min(page_request.limit, total_rows)

        def compute(item: CacheItem):
            item.tag(repository.tag)
            rows = repository.find_page(db, page_request.page, limit)
            return [serializer(row) for row in rows]

        key = self.cache_key(repository.tag, "all", page_request)
        return self.cache.get(key, compute)

    def list_page_for_customer(
        self,
        db: Session,
        repository: PagedRepository,
        page_request: PageRequest,
        customer_id: int,
        serializer: Serializer,
    ) -> List[Dict[str, Any]]:
        """
        Return one page of the rows owned by a customer.
        """
        total_rows = repository.count_by_customer(db, customer_id)
        self._check_page(total_rows, page_request)
        limit = min(page_request.limit, total_rows)

        def compute(item: CacheItem):
            item.tag(repository.tag)
            rows = repository.find_page_by_customer(
                db, customer_id, page_request.page, limit
            )
            return [serializer(row) for row in rows]

        key = self.cache_key(repository.tag, f"customer{customer_id}", page_request)
        return self.cache.get(key, compute)

    @staticmethod
    def _check_page(total_rows: int, page_request: PageRequest):
        """
        Raise PageNotFoundError when the page lies past the last one.  Called
        before the page query.
        """
        pages = total_pages(total_rows, page_request.limit)
        if page_request.page > pages:
            logger.info(
                "Page %d (limit %d) is out of range, %d page(s) available",
                page_request.page,
                page_request.limit,
                pages,
            )
            raise PageNotFoundError(pages)

    def invalidate(self, *tags: str):
        """Drop every cached page of the given entities."""
        removed = self.cache.invalidate_tags(tags)
        logger.debug("Dropped %d cached page(s) for %s", removed, ", ".join(tags))


pagination_service = PaginationService(tag_aware_cache)
