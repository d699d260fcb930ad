"""Screen controllers for the adopet browser."""

from .pet_card import BreedImageResolver, build_pet_card
from .pet_list_view import PetListView
from .breed_explorer_view import BreedExplorerView
from .pet_detail_view import PetDetailView

__all__ = [
    "BreedImageResolver",
    "build_pet_card",
    "PetListView",
    "BreedExplorerView",
    "PetDetailView",
]
