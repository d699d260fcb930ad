"""
Helper utilities for the adopet browser.
Display formatting for species and statuses, plus the aggregates behind the
statistics cards and the age distribution chart.
"""

from typing import Dict, Iterable, List, Union

from ..schemas.pet_data import Pet, PetStatus, Species


SPECIES_LABELS = {
    "DOG": "Dog",
    "CAT": "Cat",
}

SPECIES_EMOJI = {
    "DOG": "🐕",
    "CAT": "🐱",
}
DEFAULT_EMOJI = "🐾"

STATUS_LABELS = {
    "AVAILABLE": "Available",
    "ADOPTED": "Adopted",
    "PENDING": "Pending",
}

STATUS_COLORS = {
    "AVAILABLE": "bg-green-100 text-green-800",
    "ADOPTED": "bg-gray-100 text-gray-800",
    "PENDING": "bg-yellow-100 text-yellow-800",
}
DEFAULT_STATUS_COLOR = "bg-blue-100 text-blue-800"

AGE_BUCKETS = ("0-1", "2-3", "4-6", "7+")
UNKNOWN_AGE_BUCKET = "unknown"


def _enum_key(value: Union[str, Species, PetStatus]) -> str:
    if isinstance(value, (Species, PetStatus)):
        return value.value
    return str(value).upper()


def get_species_display_name(species: Union[str, Species]) -> str:
    """Human-readable species name; unknown values are returned unchanged."""
    return SPECIES_LABELS.get(_enum_key(species), str(species))


def get_species_emoji(species: Union[str, Species]) -> str:
    """Emoji for a species, used as the image placeholder."""
    return SPECIES_EMOJI.get(_enum_key(species), DEFAULT_EMOJI)


def get_status_display_name(status: Union[str, PetStatus]) -> str:
    """Human-readable status; unknown values are returned unchanged."""
    return STATUS_LABELS.get(_enum_key(status), str(status))


def get_status_color(status: Union[str, PetStatus]) -> str:
    """CSS classes for a status badge."""
    return STATUS_COLORS.get(_enum_key(status), DEFAULT_STATUS_COLOR)


def format_age(pet: Pet) -> str:
    """
    Format a pet's age for display.

    Args:
        pet: Pet object

    Returns:
        "1 year", "3 years", "1.5 years" or "" when the age is unknown
    """
    if not pet.has_age:
        return ""

    age = pet.age_years
    age_text = str(int(age)) if float(age).is_integer() else f"{age:g}"
    return f"{age_text} year" if age == 1 else f"{age_text} years"


def format_results_summary(shown: int, total: int, page: int, total_pages: int) -> str:
    """
    Build the "Showing X of Y pets" line above a pet grid.

    Args:
        shown: Number of pets on the current page
        total: Total number of matching pets
        page: Current 0-based page
        total_pages: Number of pages

    Returns:
        Summary text
    """
    if total <= 0:
        plural = "s" if shown != 1 else ""
        return f"{shown} pet{plural} waiting for a family"

    plural = "s" if total != 1 else ""
    summary = f"Showing {shown} of {total} pet{plural}"
    if total_pages > 1:
        summary += f" (page {page + 1} of {total_pages})"
    return summary


def calculate_pet_stats(pets: Iterable[Pet]) -> Dict[str, Union[int, float]]:
    """
    Calculate the headline statistics for a set of pets.

    Pets without a usable age count as age 0 in the average.

    Args:
        pets: Pets to aggregate

    Returns:
        Dictionary with total, available, adopted and average_age
    """
    pets = list(pets)
    total = len(pets)
    available = sum(1 for pet in pets if pet.status == PetStatus.AVAILABLE)
    adopted = sum(1 for pet in pets if pet.status == PetStatus.ADOPTED)

    average_age = 0.0
    if total:
        age_sum = sum(pet.age_years for pet in pets if pet.has_age)
        average_age = round(age_sum / total, 1)

    return {
        "total": total,
        "available": available,
        "adopted": adopted,
        "average_age": average_age,
    }


def age_bucket(pet: Pet) -> str:
    """Age distribution bucket for a single pet."""
    if not pet.has_age:
        return UNKNOWN_AGE_BUCKET

    age = pet.age_years
    if age < 2:
        return "0-1"
    if age < 4:
        return "2-3"
    if age < 7:
        return "4-6"
    return "7+"


def calculate_age_distribution(pets: Iterable[Pet]) -> Dict[str, int]:
    """
    Count pets per age bucket for the age distribution chart.

    Args:
        pets: Pets to aggregate

    Returns:
        Ordered mapping of bucket label to count; ``unknown`` is only present
        when at least one pet has no usable age
    """
    distribution = {bucket: 0 for bucket in AGE_BUCKETS}
    for pet in pets:
        bucket = age_bucket(pet)
        distribution[bucket] = distribution.get(bucket, 0) + 1
    return distribution


def species_options() -> List[Dict[str, str]]:
    """Options for a species selector, including "all species"."""
    options = [{"value": "", "label": "All species"}]
    options.extend(
        {"value": species.value, "label": f"{SPECIES_LABELS[species.value]} {SPECIES_EMOJI[species.value]}"}
        for species in Species
    )
    return options
