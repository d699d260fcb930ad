"""
Pagination models shared by the API boundary and the views.
"""

import math
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

from .pet_data import Pet


class PageResult(BaseModel):
    """One page of pets in canonical form."""

    items: List[Pet] = Field(default_factory=list)
    page: int = Field(default=0, ge=0, description="0-based page index")
    size: int = Field(default=0, ge=0, description="Requested page size")
    total: int = Field(default=0, ge=0, description="Total matching pets")
    total_pages: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_total_pages(self) -> "PageResult":
        if self.size > 0 and self.total_pages != math.ceil(self.total / self.size):
            raise ValueError(
                f"total_pages={self.total_pages} does not match "
                f"total={self.total} and size={self.size}"
            )
        return self

    @property
    def is_empty(self) -> bool:
        return not self.items


class PageWindow(BaseModel):
    """Page-number controls to display around the current page."""

    pages: List[int] = Field(..., description="Visible 0-based page numbers")
    current_page: int
    total_pages: int

    show_first: bool = Field(default=False, description="Render a shortcut to page 0")
    leading_ellipsis: bool = Field(default=False)
    show_last: bool = Field(default=False, description="Render a shortcut to the last page")
    trailing_ellipsis: bool = Field(default=False)

    has_previous: bool = Field(default=False)
    has_next: bool = Field(default=False)

    @property
    def last_page(self) -> Optional[int]:
        return self.total_pages - 1 if self.total_pages else None
