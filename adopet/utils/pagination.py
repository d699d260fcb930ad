"""
Pagination utilities.

Client-side filtering and slicing of already fetched collections, the page
window shown by the pagination control, and the generation token used to
ignore stale responses.
"""

import math
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from loguru import logger

from ..schemas.pagination import PageWindow

T = TypeVar("T")


def _record_name(record) -> str:
    return getattr(record, "name", "") or ""


def filter_by_name(
    records: Sequence[T],
    term: Optional[str],
    key: Callable[[T], str] = _record_name,
) -> List[T]:
    """
    Keep records whose name contains the search term, ignoring case.

    Args:
        records: Records to filter
        term: Search term; empty or whitespace means no filtering
        key: Function returning the name to match against

    Returns:
        Matching records in their original order
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(records)
    return [record for record in records if needle in key(record).casefold()]


def count_pages(count: int, size: int) -> int:
    """Number of pages needed for ``count`` items, ``ceil(count / size)``."""
    if size < 1:
        raise ValueError("Page size must be at least 1")
    return math.ceil(count / size)


def slice_page(records: Sequence[T], page: int, size: int) -> List[T]:
    """Items on a 0-based page: ``records[page * size : page * size + size]``."""
    if size < 1:
        raise ValueError("Page size must be at least 1")
    if page < 0:
        raise ValueError("Page must be non-negative")
    start = page * size
    return list(records[start:start + size])


class ClientPaginator(Generic[T]):
    """
    Filters and pages a fully fetched collection on the client.

    The current page goes back to 0 whenever the collection or the search term
    changes, so a narrowed result never leaves the page past the end.
    """

    def __init__(
        self,
        page_size: int,
        items: Optional[Sequence[T]] = None,
        key: Callable[[T], str] = _record_name,
    ):
        if page_size < 1:
            raise ValueError("Page size must be at least 1")
        self.page_size = page_size
        self._key = key
        self._items: List[T] = list(items or [])
        self._search_term = ""
        self.current_page = 0

    @property
    def items(self) -> List[T]:
        return list(self._items)

    @property
    def search_term(self) -> str:
        return self._search_term

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the collection (e.g. another species was selected)."""
        self._items = list(items)
        self.current_page = 0

    def set_search_term(self, term: Optional[str]) -> None:
        """Apply a new search term, resetting to the first page if it changed."""
        term = term or ""
        if term != self._search_term:
            self._search_term = term
            self.current_page = 0

    def set_page(self, page: int) -> None:
        """Move to a page, clamped to the last page of the filtered results."""
        if page < 0:
            raise ValueError("Page must be non-negative")
        self.current_page = min(page, max(self.total_pages - 1, 0))

    @property
    def filtered(self) -> List[T]:
        return filter_by_name(self._items, self._search_term, self._key)

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)

    @property
    def total_pages(self) -> int:
        return count_pages(self.filtered_count, self.page_size)

    @property
    def visible(self) -> List[T]:
        """Items on the current page after filtering."""
        return slice_page(self.filtered, self.current_page, self.page_size)

    def window(self, max_visible_pages: int = 5) -> Optional[PageWindow]:
        return compute_page_window(self.total_pages, self.current_page, max_visible_pages)


def compute_page_window(
    total_pages: int,
    current_page: int,
    max_visible_pages: int = 5,
) -> Optional[PageWindow]:
    """
    Work out which page buttons to show.

    A window of ``max_visible_pages`` pages is centred on the current page and
    shifted inwards when it would run past either end. Shortcuts to the first
    and last pages are added when they fall outside the window, with an
    ellipsis when at least one page is skipped.

    Args:
        total_pages: Number of pages
        current_page: Current 0-based page
        max_visible_pages: Number of page buttons in the window

    Returns:
        PageWindow, or None when there is at most one page
    """
    if max_visible_pages < 1:
        raise ValueError("max_visible_pages must be at least 1")
    if total_pages <= 1:
        return None

    current_page = min(max(current_page, 0), total_pages - 1)
    width = min(max_visible_pages, total_pages)

    start = current_page - max_visible_pages // 2
    start = max(0, min(start, total_pages - width))
    pages = list(range(start, start + width))

    first_visible, last_visible = pages[0], pages[-1]
    return PageWindow(
        pages=pages,
        current_page=current_page,
        total_pages=total_pages,
        show_first=first_visible > 0,
        leading_ellipsis=first_visible > 1,
        show_last=last_visible < total_pages - 1,
        trailing_ellipsis=last_visible < total_pages - 2,
        has_previous=current_page > 0,
        has_next=current_page < total_pages - 1,
    )


class RequestSequencer:
    """
    Issues generation tokens for overlapping requests.

    Each fetch takes a token from ``next()``; when the response arrives it is
    applied only if ``is_latest(token)`` still holds.
    """

    def __init__(self, name: str = "request"):
        self.name = name
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def next(self) -> int:
        self._latest += 1
        return self._latest

    def is_latest(self, token: int) -> bool:
        if token != self._latest:
            logger.debug(
                f"Discarding stale {self.name} response (token {token}, latest {self._latest})"
            )
            return False
        return True
