"""
External API client for the adopet browser.
Handles communication with the pet adoption API (pets and breed catalog).
"""

import asyncio
import math
from typing import List, Dict, Any, Optional, Sequence, Tuple
import aiohttp
from loguru import logger
from pydantic import ValidationError

from ..config import settings
from ..schemas.pet_data import Pet, BreedData, PetFilters
from ..schemas.pagination import PageResult


class ApiError(Exception):
    """Request to the adoption API failed (network error or non-2xx status)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ResponseShapeError(ApiError):
    """Response body does not match any known format."""


def select_best_breed_match(
    breeds: Sequence[BreedData], breed_name: str
) -> Optional[BreedData]:
    """
    Pick the breed that best matches a name.

    Precedence: exact name (ignoring case), then a substring match in either
    direction, then the first breed, then None for an empty list.

    Args:
        breeds: Candidate breeds in API order
        breed_name: Name to match

    Returns:
        Best matching breed or None
    """
    wanted = (breed_name or "").lower()

    for breed in breeds:
        if breed.name.lower() == wanted:
            return breed

    for breed in breeds:
        candidate = breed.name.lower()
        if wanted in candidate or candidate in wanted:
            return breed

    return breeds[0] if breeds else None


def _parse_pets(records: Any) -> List[Pet]:
    """Parse pet records, skipping the ones that fail validation."""
    if not isinstance(records, list):
        raise ResponseShapeError(f"Expected a list of pets, got {type(records).__name__}")

    pets = []
    for record in records:
        if not isinstance(record, dict):
            raise ResponseShapeError(f"Expected a pet object, got {type(record).__name__}")
        try:
            pets.append(Pet.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Failed to create Pet object: {e}")
    return pets


def _parse_breeds(records: List[Any]) -> List[BreedData]:
    """Parse breed records, skipping the ones that fail validation."""
    breeds = []
    for record in records:
        try:
            breeds.append(BreedData.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Failed to create BreedData object: {e}")
    return breeds


def _as_int(payload: Dict[str, Any], key: str, default: int) -> int:
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseShapeError(f"Field '{key}' must be a number, got {value!r}")
    return int(value)


def normalize_page_response(
    payload: Any, requested_page: int = 0, requested_size: int = 10
) -> PageResult:
    """
    Convert any supported pet list response into a PageResult.

    Canonical format::

        {"data": [...], "page": 0, "size": 10, "total": 42, "totalPages": 5}

    Also accepted for compatibility with older backends: a bare list of pets
    (one page holding everything) and a Spring page
    ``{"content", "number", "size", "totalElements", "totalPages"}``.

    Args:
        payload: Decoded JSON body
        requested_page: Page that was requested, used when the body omits it
        requested_size: Size that was requested, used when the body omits it

    Returns:
        Canonical PageResult

    Raises:
        ResponseShapeError: If the body matches none of the formats
    """
    if isinstance(payload, list):
        items = _parse_pets(payload)
        return PageResult(
            items=items,
            page=0,
            size=len(items),
            total=len(items),
            total_pages=1 if items else 0,
        )

    if not isinstance(payload, dict):
        raise ResponseShapeError(f"Unexpected pet list response type: {type(payload).__name__}")

    if isinstance(payload.get("data"), list):
        items = _parse_pets(payload["data"])
        page = _as_int(payload, "page", requested_page)
        size = _as_int(payload, "size", requested_size)
        total = _as_int(payload, "total", len(items))
        reported_pages = payload.get("totalPages")
    elif isinstance(payload.get("content"), list):
        logger.debug("Normalizing legacy Spring page response")
        items = _parse_pets(payload["content"])
        page = _as_int(payload, "number", requested_page)
        size = _as_int(payload, "size", requested_size)
        total = _as_int(payload, "totalElements", len(items))
        reported_pages = payload.get("totalPages")
    else:
        raise ResponseShapeError(
            f"Unknown pet list response format with keys: {sorted(payload.keys())}"
        )

    if page < 0 or size < 0 or total < 0:
        raise ResponseShapeError(f"Negative pagination values: page={page}, size={size}, total={total}")

    if size == 0 and total > 0:
        if requested_size < 1:
            raise ResponseShapeError(f"Page size 0 reported for total={total}")
        logger.warning(f"Server reported size=0 for total={total}, using requested size {requested_size}")
        size = requested_size

    total_pages = math.ceil(total / size) if size > 0 else 0
    if reported_pages is not None and reported_pages != total_pages:
        logger.warning(
            f"Server reported totalPages={reported_pages}, expected {total_pages} "
            f"for total={total} and size={size}"
        )

    return PageResult(
        items=items,
        page=page,
        size=size,
        total=total,
        total_pages=total_pages,
    )


class AdoptionApiClient:
    """Client for the pet adoption API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.api_timeout

    def _get_headers(self) -> Dict[str, str]:
        """Get API request headers."""
        return {"Accept": "application/json"}

    async def _get_json(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> Tuple[int, Any]:
        """
        Perform a GET request.

        Args:
            path: Path below the base URL, e.g. ``/api/pets``
            params: Query parameters

        Returns:
            Tuple of (status, decoded JSON body); the body is None for
            non-2xx responses

        Raises:
            ApiError: On network failure or timeout
            ResponseShapeError: If a 2xx body is not valid JSON
        """
        url = f"{self.base_url}{path}"
        query = {key: str(value) for key, value in (params or {}).items()}
        logger.debug(f"GET {url} with params: {query}")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url,
                    headers=self._get_headers(),
                    params=query,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if not 200 <= response.status < 300:
                        error_text = await response.text()
                        logger.error(
                            f"Adoption API error: {response.status}, "
                            f"message='{response.reason}', "
                            f"url='{response.url}', "
                            f"response='{error_text[:500]}'"
                        )
                        return response.status, None

                    try:
                        return response.status, await response.json(content_type=None)
                    except ValueError as e:
                        raise ResponseShapeError(f"Invalid JSON from {url}: {e}", response.status) from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ApiError(f"Request to {url} failed: {e}") from e

    async def list_pets(
        self,
        page: int = 0,
        size: int = 10,
        sort: Optional[str] = None,
        filters: Optional[PetFilters] = None,
    ) -> PageResult:
        """
        Fetch one page of pets.

        Args:
            page: 0-based page
            size: Page size
            sort: ``field,direction`` sort parameter
            filters: Active filters

        Returns:
            Canonical PageResult

        Raises:
            ApiError: On network failure or non-2xx status
            ResponseShapeError: If the body has an unknown format
        """
        params: Dict[str, Any] = {"page": page, "size": size}
        if sort:
            params["sort"] = sort
        if filters is not None:
            params.update(filters.to_params())

        logger.info(f"Fetching pets: {params}")
        status, payload = await self._get_json("/api/pets", params)
        if payload is None:
            raise ApiError(f"Failed to load pets (HTTP {status})", status)

        return normalize_page_response(payload, page, size)

    async def get_pet(self, pet_id: str) -> Optional[Pet]:
        """
        Fetch a single pet.

        Args:
            pet_id: The pet ID to look up

        Returns:
            Pet, or None if the API answers 404

        Raises:
            ApiError: On network failure or other non-2xx status
            ResponseShapeError: If the body is not a valid pet
        """
        logger.info(f"Fetching pet with ID: {pet_id}")
        status, payload = await self._get_json(f"/api/pets/{pet_id}")

        if status == 404:
            logger.info(f"Pet {pet_id} not found (404)")
            return None
        if payload is None:
            raise ApiError(f"Failed to load pet {pet_id} (HTTP {status})", status)
        if not isinstance(payload, dict):
            raise ResponseShapeError(f"Expected a pet object for {pet_id}", status)

        try:
            return Pet.model_validate(payload)
        except ValidationError as e:
            raise ResponseShapeError(f"Invalid pet {pet_id}: {e}", status) from e

    async def list_breeds(self, species: str, name: Optional[str] = None) -> List[BreedData]:
        """
        Fetch the breed catalog for a species.

        Args:
            species: ``dog`` or ``cat`` (any case)
            name: Optional name filter passed to the API

        Returns:
            Breeds in API order; invalid records are skipped

        Raises:
            ApiError: On network failure or non-2xx status
            ResponseShapeError: If the body is not a list
        """
        params = {}
        if name and name.strip():
            params["name"] = name.strip()

        status, payload = await self._get_json(f"/api/breeds/{species.lower()}", params)
        if payload is None:
            raise ApiError(f"Failed to load {species.lower()} breeds (HTTP {status})", status)
        if not isinstance(payload, list):
            raise ResponseShapeError(f"Expected a list of breeds, got {type(payload).__name__}", status)

        return _parse_breeds(payload)

    async def fetch_breed_data(self, species: str, breed_name: str) -> Optional[BreedData]:
        """
        Look up metadata for one breed.

        Never raises: failures are logged and reported as None.

        Args:
            species: ``dog`` or ``cat`` (any case)
            breed_name: Breed name, possibly partial

        Returns:
            Best matching breed or None
        """
        try:
            status, payload = await self._get_json(
                f"/api/breeds/{species.lower()}", {"name": breed_name}
            )
            if payload is None:
                return None
            if not isinstance(payload, list):
                logger.warning(f"Unexpected breed response for {breed_name}: {type(payload).__name__}")
                return None

            return select_best_breed_match(_parse_breeds(payload), breed_name)

        except ApiError as e:
            logger.warning(f"Error fetching breed data for {breed_name}: {e}")
            return None
