"""
Breed Explorer View - browse the dog and cat breed catalogs.
The catalog is fetched once per species and filtered and paged on the client.
"""

from typing import Any, Dict, Optional, Union
from loguru import logger

from ..config import settings
from ..schemas.pet_data import BreedData, Species
from ..utils.api_clients import AdoptionApiClient, ApiError
from ..utils.debounce import Debouncer
from ..utils.pagination import ClientPaginator, RequestSequencer
from ..utils.validators import parse_species, sanitize_string


class BreedExplorerView:
    """State and loading logic for the breed explorer."""

    def __init__(
        self,
        client: AdoptionApiClient,
        page_size: Optional[int] = None,
        debounce_delay: Optional[float] = None,
        max_visible_pages: Optional[int] = None,
    ):
        """Initialize the breed explorer."""
        self.client = client
        self.max_visible_pages = max_visible_pages or settings.max_visible_pages
        self.species = Species.DOG
        self.search_term = ""

        self.paginator: ClientPaginator[BreedData] = ClientPaginator(
            page_size or settings.breed_page_size
        )
        delay = settings.debounce_delay if debounce_delay is None else debounce_delay
        self._debouncer: Debouncer[str] = Debouncer(self._apply_search, delay)
        self._sequencer = RequestSequencer("breed catalog")

        self.loading = False
        self.error: Optional[str] = None

    async def select_species(self, species: Union[str, Species]) -> bool:
        """
        Switch species and fetch its full breed catalog.

        Returns:
            True if the catalog was loaded and applied
        """
        self.species = species if isinstance(species, Species) else parse_species(species)
        token = self._sequencer.next()
        self.loading = True
        self.error = None

        try:
            breeds = await self.client.list_breeds(self.species.value)
        except ApiError as e:
            if not self._sequencer.is_latest(token):
                return False
            logger.error(f"Error fetching breeds: {e}")
            self.paginator.set_items([])
            self.error = str(e)
            self.loading = False
            return False

        if not self._sequencer.is_latest(token):
            return False

        self.paginator.set_items(breeds)
        self.loading = False
        logger.info(f"Loaded {len(breeds)} {self.species.value.lower()} breeds")
        return True

    def search(self, term: str) -> None:
        """Update the search box; filtering happens once typing settles."""
        self.search_term = sanitize_string(term, 100)
        self._debouncer.push(self.search_term)

    def search_now(self, term: str) -> None:
        """Apply a search term immediately, skipping the debounce delay."""
        self._debouncer.cancel()
        self.search_term = sanitize_string(term, 100)
        self._apply_search(self.search_term)

    def _apply_search(self, term: str) -> None:
        self.paginator.set_search_term(term)

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    @property
    def applied_search_term(self) -> str:
        return self.paginator.search_term

    def set_page(self, page: int) -> None:
        self.paginator.set_page(page)

    def snapshot(self) -> Dict[str, Any]:
        """Renderable state of the explorer."""
        window = self.paginator.window(self.max_visible_pages)
        visible = self.paginator.visible
        return {
            "species": self.species.value.lower(),
            "search": self.applied_search_term,
            "breeds": [breed.model_dump() for breed in visible],
            "count": self.paginator.filtered_count,
            "page": self.paginator.current_page,
            "total_pages": self.paginator.total_pages,
            "page_window": window.model_dump() if window else None,
            "loading": self.loading,
            "error": self.error,
            "empty": not self.loading and self.error is None and not visible,
        }
