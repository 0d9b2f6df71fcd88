# This project was developed with assistance from AI tools.
"""Accept / decline commands.

Every command re-reads the application and re-runs classification and the
permission check immediately before asking the repository to write. A
proposal rendered earlier is never trusted: if another party moved the
stage in the meantime, the late caller gets InvalidTransitionError or
PermissionDeniedError instead of a second write.
"""

import enum
import logging

from db.enums import ApplicationStage

from ..core.auth import acting_identity
from ..schemas.application import ApplicationRecord
from ..schemas.auth import UserContext
from .classifier import classify, parse_stage
from .errors import InvalidTransitionError, PermissionDeniedError, ProposalNotFoundError
from .listing import in_scope
from .permissions import can_act
from .repository import ApplicationRepository

logger = logging.getLogger(__name__)


class ProposalAction(str, enum.Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


def target_stage(stage: ApplicationStage, action: ProposalAction) -> ApplicationStage | None:
    """Stage the application moves to on ``action``, or None if not allowed."""
    targets = ApplicationStage.response_transitions().get(stage)
    if targets is None:
        return None
    accept_to, decline_to = targets
    return accept_to if action == ProposalAction.ACCEPT else decline_to


def _describe_stage(stage: str) -> str:
    return stage.replace("_", " ")


async def respond_to_proposal(
    repository: ApplicationRepository,
    user: UserContext,
    application_id: str,
    action: ProposalAction,
    notes: str | None = None,
    *,
    seen_stage: str | None = None,
) -> tuple[ApplicationRecord, ApplicationRecord]:
    """Validate and apply an accept/decline.

    Args:
        repository: Persistence collaborator.
        user: Authenticated caller; role and identity come only from here.
        application_id: Proposal (== application) id.
        action: Accept or decline.
        notes: Free-text response notes stored with the transition.
        seen_stage: Stage the caller's UI last displayed, if known. A
            mismatch with the fresh read is reported as a conflict.

    Returns:
        (application before the write, application after the write).

    Raises:
        ProposalNotFoundError: missing, or outside the caller's ownership scope.
        PermissionDeniedError, InvalidTransitionError.
    """
    current = await repository.find_application_by_id(application_id)
    # Out-of-scope callers get the same answer as for a missing id
    if current is None or not in_scope(current, user):
        raise ProposalNotFoundError(application_id)

    stage = parse_stage(current.stage)
    classification = classify(stage)
    actor_id = acting_identity(user)

    if seen_stage is not None and seen_stage != current.stage:
        logger.warning(
            "Stale %s on app=%s by user=%s: saw %s, now %s",
            action.value,
            application_id,
            user.user_id,
            seen_stage,
            current.stage,
        )
        raise InvalidTransitionError(
            f"This proposal was already moved to '{_describe_stage(current.stage)}' "
            "by another user. Refresh to see its current state.",
            current_stage=current.stage,
        )

    new_stage = target_stage(stage, action)
    if new_stage is None:
        logger.warning(
            "Rejected %s on app=%s by user=%s: stage %s has no transition",
            action.value,
            application_id,
            user.user_id,
            current.stage,
        )
        raise InvalidTransitionError(
            f"Cannot {action.value} this proposal: it is already "
            f"'{_describe_stage(current.stage)}' and awaits no response.",
            current_stage=current.stage,
        )

    if not can_act(classification.pending_action_by, current.owners, actor_id, user.role):
        logger.warning(
            "Permission denied: %s on app=%s by user=%s role=%s (pending=%s)",
            action.value,
            application_id,
            user.user_id,
            user.role.value,
            classification.pending_action_by.value,
        )
        raise PermissionDeniedError(
            f"This proposal is waiting on the {classification.pending_action_by.value}; "
            f"as {user.role.value} '{user.user_id}' you cannot {action.value} it."
        )

    updated = await repository.transition_stage(
        application_id,
        new_stage.value,
        user.user_id,
        notes,
        expected_stage=current.stage,
        actor_role=user.role.value,
    )
    if updated is None:
        latest = await repository.find_application_by_id(application_id)
        latest_stage = latest.stage if latest is not None else None
        logger.warning(
            "Lost race: %s on app=%s by user=%s, stage now %s",
            action.value,
            application_id,
            user.user_id,
            latest_stage,
        )
        if latest_stage is None:
            detail = "This proposal was removed by another user."
        else:
            detail = (
                f"This proposal was already moved to '{_describe_stage(latest_stage)}' "
                "by another user."
            )
        raise InvalidTransitionError(detail, current_stage=latest_stage)

    logger.info(
        "Proposal %s: app=%s user=%s role=%s %s -> %s",
        action.value,
        application_id,
        user.user_id,
        user.role.value,
        current.stage,
        updated.stage,
    )
    return current, updated


async def accept_proposal(
    repository: ApplicationRepository,
    user: UserContext,
    application_id: str,
    notes: str | None = None,
    *,
    seen_stage: str | None = None,
) -> tuple[ApplicationRecord, ApplicationRecord]:
    return await respond_to_proposal(
        repository, user, application_id, ProposalAction.ACCEPT, notes, seen_stage=seen_stage
    )


async def decline_proposal(
    repository: ApplicationRepository,
    user: UserContext,
    application_id: str,
    notes: str | None = None,
    *,
    seen_stage: str | None = None,
) -> tuple[ApplicationRecord, ApplicationRecord]:
    return await respond_to_proposal(
        repository, user, application_id, ProposalAction.DECLINE, notes, seen_stage=seen_stage
    )
