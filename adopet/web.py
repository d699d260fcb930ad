"""
HTTP service for the adopet browser.
Exposes the pet list, pet details and breed explorer view models as JSON.
"""

import sys
from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from loguru import logger

from .config import settings
from .app import PetBrowserApp
from .utils.validators import parse_species, validate_filters, validate_sort

# Configure logging
logger.remove()  # Remove default handler
logger.add(sys.stderr, level=settings.log_level.upper())


app = FastAPI(
    title="adopet Browser",
    description="Browse adoptable pets and dog/cat breed reference data",
    version="1.0.0"
)

browser = PetBrowserApp()


@app.on_event("startup")
async def startup_event():
    """Log startup event."""
    logger.info("adopet browser service is starting up...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Adoption API: {settings.api_base_url}")
    logger.info(f"Sample data fallback: {'enabled' if settings.mock_fallback_enabled else 'disabled'}")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "adopet Browser",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "pets": "/pets",
            "pet": "/pets/{pet_id}",
            "breeds": "/breeds/{species}",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "adopet-browser"}


@app.get("/pets")
async def list_pets(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=settings.default_page_size, ge=1, le=100),
    sort: Optional[str] = None,
    name: Optional[str] = None,
    species: Optional[str] = None,
    breed: Optional[str] = None,
    shelter_city: Optional[str] = None,
    status: Optional[str] = None,
    stats: bool = False,
):
    """List pets with filters, sorting and pagination."""
    try:
        sort = validate_sort(sort, settings.default_sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    is_valid, error_msg, filters = validate_filters({
        "name": name,
        "species": species,
        "breed": breed,
        "shelter_city": shelter_city,
        "status": status,
    })
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    return await browser.browse_pets(
        filters=filters,
        sort=sort,
        page=page,
        size=size,
        include_stats=stats,
    )


@app.get("/pets/{pet_id}")
async def get_pet(pet_id: str):
    """Details for a single pet."""
    snapshot = await browser.pet_details(pet_id)
    if snapshot["not_found"]:
        raise HTTPException(status_code=404, detail=snapshot["error"])
    if snapshot["error"]:
        raise HTTPException(status_code=502, detail=snapshot["error"])
    return snapshot["pet"]


@app.get("/breeds/{species}")
async def list_breeds(
    species: str,
    search: str = "",
    page: int = Query(default=0, ge=0),
):
    """Browse the breed catalog of a species."""
    try:
        parse_species(species)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    snapshot = await browser.browse_breeds(species, search=search, page=page)
    if snapshot["error"]:
        raise HTTPException(status_code=502, detail=snapshot["error"])
    return snapshot


def main():
    """Run the HTTP service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "adopet.web:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
