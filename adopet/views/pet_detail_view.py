"""
Pet Detail View - a single pet with breed metadata and shelter location.
"""

from typing import Any, Dict, Optional
from loguru import logger

from ..schemas.pet_data import BreedData, Pet
from ..utils.api_clients import AdoptionApiClient, ApiError
from .pet_card import BreedImageResolver, build_pet_card


NOT_FOUND_MESSAGE = "Pet not found"
LOAD_ERROR_MESSAGE = "Could not load pet details"


class PetDetailView:
    """State and loading logic for the pet detail page."""

    def __init__(self, client: AdoptionApiClient, image_resolver: BreedImageResolver):
        self.client = client
        self.image_resolver = image_resolver
        self._reset()

    def _reset(self) -> None:
        self.pet: Optional[Pet] = None
        self.breed: Optional[BreedData] = None
        self.image_url: Optional[str] = None
        self.error: Optional[str] = None
        self.not_found = False

    async def load(self, pet_id: str) -> bool:
        """
        Load a pet and its breed metadata.

        Args:
            pet_id: Pet identifier

        Returns:
            True if the pet was found
        """
        self._reset()

        try:
            pet = await self.client.get_pet(pet_id)
        except ApiError as e:
            logger.error(f"Error retrieving pet {pet_id}: {e}")
            self.error = LOAD_ERROR_MESSAGE
            return False

        if pet is None:
            self.not_found = True
            self.error = NOT_FOUND_MESSAGE
            return False

        self.pet = pet
        self.breed = await self.image_resolver.lookup_breed(pet)
        self.image_url = pet.image_url or (self.breed.image_url if self.breed else None)
        return True

    def snapshot(self) -> Dict[str, Any]:
        """Renderable state of the detail page."""
        if self.pet is None:
            return {"pet": None, "error": self.error, "not_found": self.not_found}

        pet = self.pet
        detail = build_pet_card(pet, self.image_url)
        detail["created_at"] = pet.created_at.isoformat() if pet.created_at else None
        detail["location"] = None
        if pet.has_coordinates:
            detail["location"] = {
                "latitude": pet.shelter_lat,
                "longitude": pet.shelter_lng,
                "label": f"{pet.name} - {pet.shelter_city}",
            }
        detail["breed_info"] = self.breed.model_dump() if self.breed else None

        return {"pet": detail, "error": None, "not_found": False}
