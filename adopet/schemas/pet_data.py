"""
Pet and breed data models and schemas.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, Mapping
from urllib.parse import urlencode
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Species(str, Enum):
    """Species accepted by the adoption API."""
    DOG = "DOG"
    CAT = "CAT"


class PetStatus(str, Enum):
    """Pet availability status."""
    AVAILABLE = "AVAILABLE"
    ADOPTED = "ADOPTED"
    PENDING = "PENDING"


def _upper_enum_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().upper()
    return value


class Pet(BaseModel):
    """Adoptable pet as returned by the adoption API."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Identifiers
    id: str = Field(..., description="Unique pet identifier")

    # Basic information
    name: str = Field(..., description="Pet name")
    species: Species = Field(..., description="Species")
    breed: Optional[str] = Field(default=None, description="Breed, free text")
    age_years: Optional[float] = Field(
        default=None,
        alias="ageYears",
        description="Age in years, may be missing or NaN"
    )
    status: PetStatus = Field(
        default=PetStatus.AVAILABLE,
        description="Availability status"
    )

    # Shelter
    shelter_city: str = Field(default="", alias="shelterCity")
    shelter_lat: Optional[float] = Field(default=None, alias="shelterLat")
    shelter_lng: Optional[float] = Field(default=None, alias="shelterLng")

    # Media
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    # Metadata
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("species", "status", mode="before")
    @classmethod
    def _normalize_enums(cls, value: Any) -> Any:
        return _upper_enum_value(value)

    @field_validator("age_years")
    @classmethod
    def _check_age(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isnan(value) and value < 0:
            raise ValueError("ageYears must be non-negative")
        return value

    @property
    def has_age(self) -> bool:
        """Whether the age is a usable number."""
        return self.age_years is not None and not math.isnan(self.age_years)

    @property
    def has_coordinates(self) -> bool:
        """Whether the shelter can be placed on a map."""
        if self.shelter_lat is None or self.shelter_lng is None:
            return False
        return -90 <= self.shelter_lat <= 90 and -180 <= self.shelter_lng <= 180


class BreedData(BaseModel):
    """Breed reference data for one dog or cat breed."""

    name: str = Field(..., description="Breed name")
    origin: Optional[str] = Field(default=None)
    temperament: Optional[str] = Field(default=None)
    energy_level: Optional[int] = Field(default=None, ge=1, le=5)
    image_url: Optional[str] = Field(default=None)


class PetFilters(BaseModel):
    """
    Filters applied to the pet list.

    Empty or whitespace-only values mean "no constraint". The same set drives
    the API request parameters and the URL query string.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    species: Optional[Species] = None
    breed: Optional[str] = None
    shelter_city: Optional[str] = None
    status: Optional[PetStatus] = None

    @field_validator("name", "breed", "shelter_city", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("species", "status", mode="before")
    @classmethod
    def _normalize_choice(cls, value: Any) -> Any:
        value = _upper_enum_value(value)
        return value or None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> "PetFilters":
        """Build filters from URL query parameters, ignoring unrelated keys."""
        return cls(**{key: query.get(key) for key in cls.model_fields if key in query})

    def to_params(self) -> Dict[str, str]:
        """API request parameters for the active filters."""
        params = {}
        for key, value in self:
            if value is None:
                continue
            params[key] = value.value if isinstance(value, Enum) else value
        return params

    def to_query_string(self) -> str:
        """URL query string for the active filters (empty when unconstrained)."""
        return urlencode(self.to_params())

    def is_empty(self) -> bool:
        return not self.to_params()
