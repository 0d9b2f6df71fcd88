# This project was developed with assistance from AI tools.
"""Stage classification.

Maps a pipeline stage to the proposal type and the party expected to act
next. The table must cover every ApplicationStage; a stage that is not in
it is a ClassificationError, never a silent default.
"""

from typing import NamedTuple

from db.enums import ApplicationStage

from ..schemas.proposal import ActionParty, ProposalType
from .errors import ClassificationError


class StageClassification(NamedTuple):
    type: ProposalType
    pending_action_by: ActionParty


STAGE_CLASSIFICATION: dict[ApplicationStage, StageClassification] = {
    ApplicationStage.DRAFT: StageClassification(
        ProposalType.DIRECT_APPLICATION, ActionParty.CANDIDATE
    ),
    ApplicationStage.RECRUITER_PROPOSED: StageClassification(
        ProposalType.JOB_OPPORTUNITY, ActionParty.CANDIDATE
    ),
    ApplicationStage.AI_REVIEW: StageClassification(
        ProposalType.APPLICATION_SCREEN, ActionParty.RECRUITER
    ),
    ApplicationStage.SCREEN: StageClassification(
        ProposalType.APPLICATION_SCREEN, ActionParty.RECRUITER
    ),
    ApplicationStage.SUBMITTED: StageClassification(
        ProposalType.APPLICATION_REVIEW, ActionParty.COMPANY
    ),
    ApplicationStage.UNDER_REVIEW: StageClassification(
        ProposalType.APPLICATION_REVIEW, ActionParty.COMPANY
    ),
    ApplicationStage.INTERVIEWING: StageClassification(
        ProposalType.INTERVIEW_INVITATION, ActionParty.COMPANY
    ),
    ApplicationStage.OFFER_EXTENDED: StageClassification(
        ProposalType.JOB_OFFER, ActionParty.CANDIDATE
    ),
    **{
        stage: StageClassification(ProposalType.CLOSED, ActionParty.NONE)
        for stage in ApplicationStage.terminal_stages()
    },
}


def parse_stage(stage: str | ApplicationStage) -> ApplicationStage:
    """Coerce a raw stage value to ApplicationStage or raise ClassificationError."""
    if isinstance(stage, ApplicationStage):
        return stage
    try:
        return ApplicationStage(stage)
    except ValueError as exc:
        raise ClassificationError(stage) from exc


def classify(stage: str | ApplicationStage) -> StageClassification:
    """Return (type, pending_action_by) for a stage."""
    parsed = parse_stage(stage)
    try:
        return STAGE_CLASSIFICATION[parsed]
    except KeyError as exc:
        raise ClassificationError(stage) from exc


def stages_for_type(proposal_type: ProposalType) -> frozenset[str]:
    """All stage values that classify as ``proposal_type``."""
    return frozenset(
        stage.value
        for stage, classification in STAGE_CLASSIFICATION.items()
        if classification.type == proposal_type
    )
