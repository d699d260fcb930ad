"""
Pet List View - filtered, sorted and paginated pet listing.
Backs both the home page grid and the advanced search page.
"""

from typing import Any, Dict, List, Optional
from loguru import logger

from ..config import settings
from ..schemas.pagination import PageResult
from ..schemas.pet_data import Pet, PetFilters, PetStatus, Species
from ..utils.api_clients import AdoptionApiClient, ApiError
from ..utils.helpers import (
    calculate_age_distribution,
    calculate_pet_stats,
    format_results_summary,
)
from ..utils.debounce import Debouncer
from ..utils.pagination import RequestSequencer, count_pages, compute_page_window
from ..utils.validators import sanitize_string, validate_page_params, validate_sort
from .pet_card import BreedImageResolver, build_pet_card


DEGRADED_MESSAGE = "Showing sample data - API unavailable"
EMPTY_TITLE = "No pets found"
EMPTY_MESSAGE = "Try adjusting the filters to find other pets available for adoption."


def get_mock_pets() -> List[Pet]:
    """Sample pets shown when the adoption API cannot be reached."""
    return [
        Pet(
            id="1",
            name="Buddy",
            species=Species.DOG,
            breed="Golden Retriever",
            age_years=3,
            shelter_city="São Paulo",
            status=PetStatus.AVAILABLE,
        ),
        Pet(
            id="2",
            name="Luna",
            species=Species.CAT,
            breed="Persian",
            age_years=2,
            shelter_city="Rio de Janeiro",
            status=PetStatus.AVAILABLE,
        ),
        Pet(
            id="3",
            name="Max",
            species=Species.DOG,
            breed="Labrador",
            age_years=4,
            shelter_city="Belo Horizonte",
            status=PetStatus.AVAILABLE,
        ),
    ]


class PetListView:
    """
    State and loading logic for a paginated pet list.

    Requests are tagged with a generation token so a slow response for old
    filters never replaces the result of a newer request.
    """

    def __init__(
        self,
        client: AdoptionApiClient,
        image_resolver: Optional[BreedImageResolver] = None,
        page_size: Optional[int] = None,
        sort: Optional[str] = None,
        mock_fallback: Optional[bool] = None,
        max_visible_pages: Optional[int] = None,
        debounce_delay: Optional[float] = None,
    ):
        """Initialize the pet list view."""
        self.client = client
        self.image_resolver = image_resolver
        self.mock_fallback = settings.mock_fallback_enabled if mock_fallback is None else mock_fallback
        self.max_visible_pages = max_visible_pages or settings.max_visible_pages

        self.filters = PetFilters()
        self.sort = validate_sort(sort, settings.default_sort)
        self.page = 0
        self.size = page_size or settings.default_page_size

        self.result = PageResult(size=self.size)
        self.images: Dict[str, Optional[str]] = {}
        self.stats_pets: List[Pet] = []

        self.loading = False
        self.error: Optional[str] = None
        self.degraded = False

        self._sequencer = RequestSequencer("pet list")
        self._stats_sequencer = RequestSequencer("pet stats")

        delay = settings.debounce_delay if debounce_delay is None else debounce_delay
        self.name_debouncer: Debouncer[str] = Debouncer(self._apply_name_search, delay)

    def set_filters(self, filters: PetFilters) -> bool:
        """
        Apply new filters.

        Returns:
            True if the filters changed (the page is then reset to 0)
        """
        if filters == self.filters:
            return False
        logger.info(f"Pet filters changed: {filters.to_params()}")
        self.filters = filters
        self.page = 0
        return True

    def search_name(self, term: str) -> None:
        """Update the name box; the list reloads once typing settles."""
        self.name_debouncer.push(sanitize_string(term or "", 100))

    async def _apply_name_search(self, term: str) -> None:
        filters = PetFilters(**{**self.filters.to_params(), "name": term})
        if self.set_filters(filters):
            await self.load()

    @property
    def name_search_pending(self) -> bool:
        return self.name_debouncer.pending

    def set_sort(self, sort: Optional[str]) -> None:
        self.sort = validate_sort(sort, settings.default_sort)

    def set_page(self, page: int) -> None:
        is_valid, error_msg = validate_page_params(page, self.size)
        if not is_valid:
            raise ValueError(error_msg)
        self.page = page

    def set_page_size(self, size: int) -> None:
        is_valid, error_msg = validate_page_params(0, size)
        if not is_valid:
            raise ValueError(error_msg)
        self.size = size
        self.page = 0

    @property
    def empty(self) -> bool:
        return not self.loading and self.result.is_empty

    @property
    def retry_available(self) -> bool:
        return self.error is not None

    async def load(self) -> bool:
        """
        Fetch the current page.

        Returns:
            True if a fresh API result was applied; False on failure (the
            fallback state is applied instead) or when the response was stale
        """
        token = self._sequencer.next()
        self.loading = True

        try:
            result = await self.client.list_pets(
                page=self.page,
                size=self.size,
                sort=self.sort,
                filters=self.filters,
            )
        except ApiError as e:
            if not self._sequencer.is_latest(token):
                return False
            logger.warning(f"Failed to load pets: {e}")
            self._apply_failure(str(e))
            return False

        if not self._sequencer.is_latest(token):
            return False

        self.result = result
        self.error = None
        self.degraded = False
        self.loading = False
        logger.info(f"Loaded {len(result.items)} of {result.total} pets")

        await self._resolve_images(token)
        return True

    async def retry(self) -> bool:
        """Reload after a failure."""
        return await self.load()

    def _apply_failure(self, reason: str) -> None:
        self.loading = False
        self.images = {}

        if self.mock_fallback:
            mock_pets = get_mock_pets()[:self.size]
            self.result = PageResult(
                items=mock_pets,
                page=0,
                size=self.size,
                total=len(mock_pets),
                total_pages=count_pages(len(mock_pets), self.size),
            )
            self.page = 0
            self.degraded = True
            self.error = DEGRADED_MESSAGE
        else:
            self.result = PageResult(size=self.size)
            self.degraded = False
            self.error = f"Could not load pets: {reason}"

    async def _resolve_images(self, token: int) -> None:
        if self.image_resolver is None:
            return
        images = await self.image_resolver.resolve_many(self.result.items)
        if self._sequencer.is_latest(token):
            self.images = images

    async def load_stats(self) -> None:
        """Fetch a large sample with the same filters for statistics and the age chart."""
        token = self._stats_sequencer.next()
        try:
            result = await self.client.list_pets(
                page=0,
                size=settings.stats_sample_size,
                sort=settings.default_sort,
                filters=self.filters,
            )
            pets = result.items
        except ApiError as e:
            logger.error(f"Error fetching pets for statistics: {e}")
            pets = self.result.items

        if self._stats_sequencer.is_latest(token):
            self.stats_pets = pets

    def stats_snapshot(self) -> Dict[str, Any]:
        return {
            "stats": calculate_pet_stats(self.stats_pets),
            "age_distribution": calculate_age_distribution(self.stats_pets),
        }

    def snapshot(self) -> Dict[str, Any]:
        """Renderable state of the list."""
        window = compute_page_window(
            self.result.total_pages, self.result.page, self.max_visible_pages
        )
        snapshot = {
            "pets": [
                build_pet_card(pet, self.images.get(pet.id)) for pet in self.result.items
            ],
            "page": self.result.page,
            "size": self.result.size,
            "total": self.result.total,
            "total_pages": self.result.total_pages,
            "page_window": window.model_dump() if window else None,
            "summary": format_results_summary(
                len(self.result.items),
                self.result.total,
                self.result.page,
                self.result.total_pages,
            ),
            "filters": self.filters.to_params(),
            "query": self.filters.to_query_string(),
            "sort": self.sort,
            "loading": self.loading,
            "error": self.error,
            "degraded": self.degraded,
            "retry_available": self.retry_available,
            "empty": self.empty,
        }
        if self.empty and self.error is None:
            snapshot["message"] = {"title": EMPTY_TITLE, "text": EMPTY_MESSAGE}
        return snapshot
