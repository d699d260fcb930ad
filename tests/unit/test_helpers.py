"""
Unit tests for display formatters, statistics, schemas and validators.
"""

import math
import pytest
from pydantic import ValidationError

from adopet.schemas.pet_data import Pet, PetFilters, PetStatus, Species
from adopet.utils.helpers import (
    calculate_age_distribution,
    calculate_pet_stats,
    format_age,
    format_results_summary,
    get_species_display_name,
    get_species_emoji,
    get_status_color,
    get_status_display_name,
)
from adopet.utils.validators import (
    parse_species,
    sanitize_string,
    validate_filters,
    validate_page_params,
    validate_sort,
)


def make_pet(pet_id="1", age=3.0, status=PetStatus.AVAILABLE, **kwargs) -> Pet:
    return Pet(
        id=pet_id,
        name=kwargs.pop("name", "Rex"),
        species=kwargs.pop("species", Species.DOG),
        age_years=age,
        status=status,
        shelter_city="Porto Alegre",
        **kwargs,
    )


class TestFormatters:
    """Tests for the display formatters."""

    def test_species(self):
        """Test species labels and emoji in any case."""
        assert get_species_display_name("dog") == "Dog"
        assert get_species_display_name(Species.CAT) == "Cat"
        assert get_species_display_name("parrot") == "parrot"
        assert get_species_emoji("DOG") == "🐕"
        assert get_species_emoji("cat") == "🐱"
        assert get_species_emoji("parrot") == "🐾"

    def test_status(self):
        """Test status labels and colour classes."""
        assert get_status_display_name("available") == "Available"
        assert get_status_display_name(PetStatus.ADOPTED) == "Adopted"
        assert get_status_display_name("PENDING") == "Pending"
        assert get_status_display_name("LOST") == "LOST"
        assert get_status_color("AVAILABLE") == "bg-green-100 text-green-800"
        assert get_status_color("ADOPTED") == "bg-gray-100 text-gray-800"
        assert get_status_color("unknown") == "bg-blue-100 text-blue-800"

    def test_format_age(self):
        """Test age text."""
        assert format_age(make_pet(age=1)) == "1 year"
        assert format_age(make_pet(age=3)) == "3 years"
        assert format_age(make_pet(age=1.5)) == "1.5 years"
        assert format_age(make_pet(age=None)) == ""
        assert format_age(make_pet(age=float("nan"))) == ""

    def test_results_summary(self):
        """Test the results summary line."""
        assert format_results_summary(10, 42, 0, 5) == "Showing 10 of 42 pets (page 1 of 5)"
        assert format_results_summary(1, 1, 0, 1) == "Showing 1 of 1 pet"
        assert format_results_summary(0, 0, 0, 0) == "0 pets waiting for a family"


class TestStatistics:
    """Tests for statistics and the age distribution."""

    def test_pet_stats(self):
        """Test headline statistics; unknown ages count as zero."""
        pets = [
            make_pet("1", age=2, status=PetStatus.AVAILABLE),
            make_pet("2", age=4, status=PetStatus.ADOPTED),
            make_pet("3", age=None, status=PetStatus.PENDING),
        ]

        stats = calculate_pet_stats(pets)

        assert stats == {"total": 3, "available": 1, "adopted": 1, "average_age": 2.0}

    def test_pet_stats_empty(self):
        """Test statistics for no pets."""
        assert calculate_pet_stats([])["average_age"] == 0.0

    def test_age_distribution(self):
        """Test age buckets."""
        pets = [make_pet(str(i), age=age) for i, age in enumerate([0.5, 1, 1.5, 2, 3.9, 4, 6, 7, 12])]
        pets.append(make_pet("x", age=float("nan")))

        distribution = calculate_age_distribution(pets)

        assert distribution == {"0-1": 3, "2-3": 2, "4-6": 2, "7+": 2, "unknown": 1}

    def test_age_distribution_without_unknown(self):
        """Test that the unknown bucket is omitted when every age is known."""
        distribution = calculate_age_distribution([make_pet(age=5)])
        assert distribution == {"0-1": 0, "2-3": 0, "4-6": 1, "7+": 0}


class TestPetSchema:
    """Tests for the Pet model."""

    def test_wire_names(self):
        """Test parsing the API's camelCase fields."""
        pet = Pet.model_validate({
            "id": 7,
            "name": "Thor",
            "species": "dog",
            "ageYears": 5,
            "status": "available",
            "shelterCity": "Natal",
        })

        assert pet.id == "7"
        assert pet.species == Species.DOG
        assert pet.status == PetStatus.AVAILABLE
        assert pet.age_years == 5

    def test_negative_age_rejected(self):
        """Test that negative ages fail validation."""
        with pytest.raises(ValidationError):
            make_pet(age=-1)

    def test_nan_age_allowed(self):
        """Test that NaN ages are kept but reported unusable."""
        pet = make_pet(age=float("nan"))
        assert math.isnan(pet.age_years)
        assert not pet.has_age

    @pytest.mark.parametrize("lat,lng,expected", [
        (-23.5, -46.6, True),
        (90, 180, True),
        (None, -46.6, False),
        (-23.5, None, False),
        (91, 0, False),
        (0, -181, False),
    ])
    def test_has_coordinates(self, lat, lng, expected):
        """Test coordinate validity."""
        pet = make_pet(shelter_lat=lat, shelter_lng=lng)
        assert pet.has_coordinates is expected

    def test_immutable(self):
        """Test that pets cannot be modified after parsing."""
        pet = make_pet()
        with pytest.raises(ValidationError):
            pet.name = "Other"


class TestPetFilters:
    """Tests for PetFilters."""

    def test_empty_values_are_unconstrained(self):
        """Test that blank values are dropped."""
        filters = PetFilters(name="  ", species="", breed=None, shelter_city="Recife ")

        assert filters.to_params() == {"shelter_city": "Recife"}
        assert not filters.is_empty()
        assert PetFilters().is_empty()

    def test_query_round_trip(self):
        """Test that URL state can be restored from the query string."""
        filters = PetFilters(name="Rex", species="dog", status="adopted", shelter_city="São Paulo")

        query = filters.to_query_string()

        assert "species=DOG" in query
        assert "status=ADOPTED" in query
        assert PetFilters.from_query({"name": "Rex", "species": "DOG", "status": "ADOPTED",
                                      "shelter_city": "São Paulo", "page": "3"}) == filters

    def test_invalid_species(self):
        """Test that unknown species are rejected."""
        with pytest.raises(ValidationError):
            PetFilters(species="bird")


class TestValidators:
    """Tests for input validators."""

    def test_sanitize_string(self):
        """Test null bytes, truncation and whitespace."""
        assert sanitize_string("  re\x00x  ") == "rex"
        assert sanitize_string("a" * 300, 10) == "a" * 10

    @pytest.mark.parametrize("sort,expected", [
        ("name,asc", "name,asc"),
        ("ageYears,DESC", "ageYears,desc"),
        ("shelterCity", "shelterCity,asc"),
        ("", "createdAt,desc"),
        (None, "createdAt,desc"),
    ])
    def test_validate_sort(self, sort, expected):
        """Test accepted sort parameters."""
        assert validate_sort(sort) == expected

    @pytest.mark.parametrize("sort", ["password,asc", "name,up", "name,asc,extra"])
    def test_validate_sort_rejects(self, sort):
        """Test rejected sort parameters."""
        with pytest.raises(ValueError):
            validate_sort(sort)

    def test_parse_species(self):
        """Test species parsing."""
        assert parse_species("dog") == Species.DOG
        assert parse_species(" CAT ") == Species.CAT
        with pytest.raises(ValueError):
            parse_species("rabbit")

    def test_validate_page_params(self):
        """Test pagination parameter validation."""
        assert validate_page_params(0, 10) == (True, None)
        assert validate_page_params(-1, 10)[0] is False
        assert validate_page_params(0, 0)[0] is False

    def test_validate_filters(self):
        """Test filter validation."""
        is_valid, error, filters = validate_filters({"name": " Luna\x00 ", "species": "cat"})
        assert is_valid and error is None
        assert filters.to_params() == {"name": "Luna", "species": "CAT"}

        is_valid, error, filters = validate_filters({"status": "lost"})
        assert not is_valid
        assert filters is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
