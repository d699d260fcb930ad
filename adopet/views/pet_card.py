"""
Pet card view model and breed image resolution.
"""

import asyncio
from typing import Any, Dict, Iterable, Optional

from loguru import logger

from ..schemas.pet_data import BreedData, Pet
from ..utils.api_clients import AdoptionApiClient
from ..utils.cache import BreedImageCache
from ..utils.helpers import (
    format_age,
    get_species_display_name,
    get_species_emoji,
    get_status_color,
    get_status_display_name,
)


class BreedImageResolver:
    """
    Finds an image for pets that have none of their own.

    Uses the pet's own image when present, otherwise the cached breed image,
    otherwise a breed lookup whose image is stored in the cache.
    """

    def __init__(self, client: AdoptionApiClient, cache: BreedImageCache):
        self.client = client
        self.cache = cache

    async def lookup_breed(self, pet: Pet) -> Optional[BreedData]:
        """Fetch breed metadata for a pet and remember its image."""
        if not pet.breed:
            return None

        breed = await self.client.fetch_breed_data(pet.species.value, pet.breed)
        if breed is not None and breed.image_url:
            self.cache.store(self.cache.make_key(pet.species.value, pet.breed), breed.image_url)
        return breed

    async def resolve(self, pet: Pet) -> Optional[str]:
        """
        Resolve the image to show for a pet.

        Args:
            pet: Pet object

        Returns:
            Image URL, or None when the species placeholder should be shown
        """
        if pet.image_url:
            return pet.image_url
        if not pet.breed:
            return None

        cached = self.cache.lookup(self.cache.make_key(pet.species.value, pet.breed))
        if cached:
            return cached

        breed = await self.lookup_breed(pet)
        if breed is None or not breed.image_url:
            logger.debug(f"No breed image for {pet.name} ({pet.breed})")
            return None
        return breed.image_url

    async def resolve_many(self, pets: Iterable[Pet]) -> Dict[str, Optional[str]]:
        """Resolve images for several pets concurrently, keyed by pet ID."""
        pets = list(pets)
        urls = await asyncio.gather(*(self.resolve(pet) for pet in pets))
        return {pet.id: url for pet, url in zip(pets, urls)}


def build_pet_card(pet: Pet, image_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the data rendered by a pet card.

    Args:
        pet: Pet object
        image_url: Resolved image, None to show the species emoji instead

    Returns:
        Card dictionary
    """
    image_url = image_url or pet.image_url
    return {
        "id": pet.id,
        "name": pet.name,
        "species": pet.species.value,
        "species_label": get_species_display_name(pet.species),
        "breed": pet.breed,
        "age": format_age(pet),
        "shelter_city": pet.shelter_city,
        "status": pet.status.value,
        "status_label": get_status_display_name(pet.status),
        "status_color": get_status_color(pet.status),
        "image_url": image_url,
        "placeholder": None if image_url else get_species_emoji(pet.species),
        "link": f"/pets/{pet.id}",
    }
