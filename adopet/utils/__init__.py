"""Utility modules for the adopet browser."""

from .api_clients import AdoptionApiClient, ApiError, ResponseShapeError
from .cache import BreedImageCache
from .debounce import Debouncer
from .pagination import ClientPaginator, RequestSequencer, compute_page_window

__all__ = [
    "AdoptionApiClient",
    "ApiError",
    "ResponseShapeError",
    "BreedImageCache",
    "Debouncer",
    "ClientPaginator",
    "RequestSequencer",
    "compute_page_window",
]
