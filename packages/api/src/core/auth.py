# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Used by the middleware layer (token -> UserContext) and by the proposal
services (UserContext -> ownership scope / acting identity).
"""

from db.enums import UserRole

from ..schemas.auth import DataScope, UserContext


def build_data_scope(role: UserRole, user_id: str, company_id: str | None = None) -> DataScope:
    """Build ownership scope rules based on the user's role."""
    if role == UserRole.RECRUITER:
        return DataScope(recruiter_id=user_id)
    if role == UserRole.CANDIDATE:
        return DataScope(candidate_id=user_id)
    if role == UserRole.COMPANY:
        # A company user without a company sees nothing rather than everything.
        return DataScope(company_id=company_id or "")
    if role == UserRole.ADMIN:
        return DataScope(full_pipeline=True)
    return DataScope()


def acting_identity(user: UserContext) -> str:
    """Identifier compared against the Application's owner id for the user's role."""
    if user.role == UserRole.COMPANY:
        return user.company_id or ""
    return user.user_id
