# This project was developed with assistance from AI tools.
"""Shared schema components."""

from pydantic import BaseModel


class Pagination(BaseModel):
    """Page-based pagination metadata for list responses.

    ``total`` is the repository count for the caller's scope and pushed-down
    filters; it is not reduced by post-enrichment filters.
    """

    page: int
    limit: int
    total: int
    total_pages: int
