"""Data schemas and models for the adopet browser."""

from .pet_data import Pet, BreedData, PetFilters, PetStatus, Species
from .pagination import PageResult, PageWindow

__all__ = [
    "Pet",
    "BreedData",
    "PetFilters",
    "PetStatus",
    "Species",
    "PageResult",
    "PageWindow",
]
