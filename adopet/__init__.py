"""
adopet - Pet Adoption Browser

Lists, filters, paginates and displays adoptable pets and dog/cat breed
reference data sourced from a remote adoption API.
"""

__version__ = "1.0.0"

from .app import PetBrowserApp

__all__ = ["PetBrowserApp"]
