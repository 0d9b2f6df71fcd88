# This project was developed with assistance from AI tools.
"""Authentication and authorization schemas."""

from db.enums import UserRole
from pydantic import BaseModel, ConfigDict, Field


class DataScope(BaseModel):
    """Ownership filter injected by auth middleware.

    At most one of the owner ids is set for non-admin users; ``full_pipeline``
    means no ownership filter at all.
    """

    model_config = ConfigDict(frozen=True)

    recruiter_id: str | None = None
    company_id: str | None = None
    candidate_id: str | None = None
    full_pipeline: bool = False


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: UserRole
    email: str = ""
    name: str = ""
    company_id: str | None = None
    data_scope: DataScope = Field(default_factory=DataScope)


class TokenPayload(BaseModel):
    """Decoded JWT token claims."""

    sub: str
    email: str = ""
    preferred_username: str = ""
    name: str = ""
    role: str | None = None
    org_id: str | None = None
    public_metadata: dict = Field(default_factory=dict)
