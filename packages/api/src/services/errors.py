# This project was developed with assistance from AI tools.
"""Domain errors raised by the proposal services.

Each error carries the HTTP status and machine-readable code the API
returns for it, so the route layer never has to string-match messages.
"""


class ProposalError(Exception):
    """Base class for proposal workflow errors."""

    status_code = 400
    code = "proposal_error"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ClassificationError(ProposalError):
    """Stage value is not in the known enumeration (schema drift)."""

    status_code = 500
    code = "unknown_stage"

    def __init__(self, stage: object):
        super().__init__(f"Unknown application stage '{stage}'.")
        self.stage = stage


class EnrichmentError(ProposalError):
    """Application lacks one or more required party ids."""

    status_code = 422
    code = "incomplete_application"

    def __init__(self, application_id: str, missing: list[str]):
        super().__init__(
            f"Application '{application_id}' is missing required fields: {', '.join(missing)}."
        )
        self.application_id = application_id
        self.missing = missing


class PermissionDeniedError(ProposalError):
    """Actor may not act on this proposal right now. No state changed."""

    status_code = 403
    code = "permission_denied"


class InvalidTransitionError(ProposalError):
    """Current stage has no accept/decline path (or it changed under us)."""

    status_code = 409
    code = "invalid_transition"

    def __init__(self, detail: str, *, current_stage: str | None = None):
        super().__init__(detail)
        self.current_stage = current_stage


class ProposalNotFoundError(ProposalError):
    status_code = 404
    code = "proposal_not_found"

    def __init__(self, application_id: str):
        super().__init__(f"Proposal '{application_id}' not found.")
        self.application_id = application_id
