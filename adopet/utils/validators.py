"""
Input validation and sanitization utilities.
"""

from typing import Any, Dict, Optional, Tuple
from pydantic import ValidationError
from loguru import logger

from ..schemas.pet_data import PetFilters, Species


SORT_FIELDS = ("name", "ageYears", "createdAt", "species", "shelterCity")
SORT_DIRECTIONS = ("asc", "desc")


def sanitize_string(value: str, max_length: int = 200) -> str:
    """
    Sanitize free-text input.

    Args:
        value: Input string
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    if not isinstance(value, str):
        return str(value)

    # Remove null bytes
    value = value.replace("\x00", "")

    # Truncate to max length
    value = value[:max_length]

    return value.strip()


def validate_sort(sort: Optional[str], default: str = "createdAt,desc") -> str:
    """
    Validate a ``field,direction`` sort parameter against the allow-list.

    Args:
        sort: Sort parameter, e.g. ``"name,asc"``; empty means the default
        default: Sort used when none is given

    Returns:
        Normalized sort parameter

    Raises:
        ValueError: If the field or direction is not allowed
    """
    if not sort or not sort.strip():
        return default

    parts = [part.strip() for part in sort.split(",")]
    if len(parts) == 1:
        parts.append("asc")
    if len(parts) != 2:
        raise ValueError(f"Invalid sort '{sort}': expected 'field,direction'")

    field, direction = parts[0], parts[1].lower()
    if field not in SORT_FIELDS:
        raise ValueError(
            f"Invalid sort field '{field}'. Must be one of: {', '.join(SORT_FIELDS)}"
        )
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Invalid sort direction '{direction}'. Must be asc or desc")

    return f"{field},{direction}"


def parse_species(species: str) -> Species:
    """
    Parse a species name in any case (``dog``, ``DOG``).

    Raises:
        ValueError: If the species is not supported
    """
    try:
        return Species(sanitize_string(species, 10).upper())
    except ValueError:
        valid = ", ".join(s.value.lower() for s in Species)
        raise ValueError(f"Invalid species '{species}'. Must be one of: {valid}") from None


def validate_page_params(page: int, size: int, max_size: int = 1000) -> Tuple[bool, Optional[str]]:
    """
    Validate pagination parameters.

    Args:
        page: 0-based page index
        size: Page size
        max_size: Largest page size accepted

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(page, int) or page < 0:
        return False, "Page must be a non-negative integer"

    if not isinstance(size, int) or size < 1 or size > max_size:
        return False, f"Size must be between 1 and {max_size}"

    return True, None


def validate_filters(data: Dict[str, Any]) -> Tuple[bool, Optional[str], Optional[PetFilters]]:
    """
    Validate pet list filters coming from user input or the URL.

    Args:
        data: Mapping of filter name to raw value

    Returns:
        Tuple of (is_valid, error_message, filters)
    """
    try:
        cleaned = {
            key: sanitize_string(value) if isinstance(value, str) else value
            for key, value in data.items()
        }
        return True, None, PetFilters.from_query(cleaned)

    except ValidationError as e:
        logger.warning(f"Filter validation failed: {e}")
        return False, str(e), None
