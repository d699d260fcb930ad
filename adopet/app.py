"""
adopet Browser - composition root.
Owns the API client and the breed image cache and hands them to the views.
"""

from typing import Any, Dict, Optional
from loguru import logger

from .config import settings
from .schemas.pet_data import PetFilters
from .utils.api_clients import AdoptionApiClient
from .utils.cache import BreedImageCache
from .views.breed_explorer_view import BreedExplorerView
from .views.pet_card import BreedImageResolver
from .views.pet_detail_view import PetDetailView
from .views.pet_list_view import PetListView


class PetBrowserApp:
    """
    Top-level object wiring the browser together.

    The breed image cache lives here and is shared by every view created
    through this object.
    """

    def __init__(
        self,
        client: Optional[AdoptionApiClient] = None,
        image_cache: Optional[BreedImageCache] = None,
    ):
        """Initialize the browser and its shared collaborators."""
        logger.info("Initializing adopet browser")
        self.client = client or AdoptionApiClient()
        self.image_cache = image_cache or BreedImageCache(
            max_size=settings.breed_image_cache_max_size,
            ttl=settings.breed_image_cache_ttl,
        )
        self.image_resolver = BreedImageResolver(self.client, self.image_cache)

    def pet_list_view(self, **kwargs) -> PetListView:
        return PetListView(self.client, self.image_resolver, **kwargs)

    def breed_explorer_view(self, **kwargs) -> BreedExplorerView:
        return BreedExplorerView(self.client, **kwargs)

    def pet_detail_view(self) -> PetDetailView:
        return PetDetailView(self.client, self.image_resolver)

    async def browse_pets(
        self,
        filters: Optional[PetFilters] = None,
        sort: Optional[str] = None,
        page: int = 0,
        size: Optional[int] = None,
        include_stats: bool = False,
    ) -> Dict[str, Any]:
        """
        Load one page of the pet list.

        Args:
            filters: Active filters
            sort: ``field,direction`` sort parameter
            page: 0-based page
            size: Page size
            include_stats: Also compute statistics and the age distribution

        Returns:
            Pet list snapshot
        """
        view = self.pet_list_view(page_size=size, sort=sort)
        if filters is not None:
            view.set_filters(filters)
        view.set_page(page)

        await view.load()
        snapshot = view.snapshot()

        if include_stats:
            await view.load_stats()
            snapshot.update(view.stats_snapshot())

        return snapshot

    async def browse_breeds(
        self,
        species: str,
        search: str = "",
        page: int = 0,
    ) -> Dict[str, Any]:
        """
        Load one page of the breed explorer.

        Args:
            species: ``dog`` or ``cat``
            search: Breed name filter
            page: 0-based page after filtering

        Returns:
            Breed explorer snapshot
        """
        view = self.breed_explorer_view()
        await view.select_species(species)
        view.search_now(search)
        view.set_page(page)
        return view.snapshot()

    async def pet_details(self, pet_id: str) -> Dict[str, Any]:
        """Load the detail page for one pet."""
        view = self.pet_detail_view()
        await view.load(pet_id)
        return view.snapshot()
