# This project was developed with assistance from AI tools.
"""Shared ownership filtering for application queries.

Centralizes the owner-id -> SQL WHERE logic so that listing, single-record
lookups and counts apply the same rules.
"""

from db import Application

from ..schemas.application import ApplicationQuery


def apply_data_scope(stmt, query: ApplicationQuery):
    """Restrict a SQLAlchemy select over Application to the query's owners.

    Args:
        stmt: A SQLAlchemy select statement rooted at Application.
        query: Carries at most one owner id for non-admin callers; none for
            an unrestricted admin scan.

    Returns:
        The filtered statement.
    """
    if query.recruiter_id is not None:
        stmt = stmt.where(Application.recruiter_id == query.recruiter_id)
    if query.company_id is not None:
        stmt = stmt.where(Application.company_id == query.company_id)
    if query.candidate_id is not None:
        stmt = stmt.where(Application.candidate_id == query.candidate_id)
    return stmt
