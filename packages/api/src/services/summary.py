# This project was developed with assistance from AI tools.
"""Summary counts and worklist predicates over proposals.

The counts overlap on purpose: an item can be actionable and urgent at
the same time, and an admin's view of a closed proposal is both
actionable and completed.
"""

from collections.abc import Iterable

from ..schemas.proposal import ActionParty, Proposal, ProposalState, ProposalSummary


def is_waiting(proposal: Proposal) -> bool:
    """Awaiting a response from someone other than the viewer."""
    return proposal.pending_action_by != ActionParty.NONE and not proposal.can_current_user_act


def is_completed(proposal: Proposal) -> bool:
    return proposal.pending_action_by == ActionParty.NONE


def matches_state(proposal: Proposal, state: ProposalState) -> bool:
    if state == ProposalState.ACTIONABLE:
        return proposal.can_current_user_act
    if state == ProposalState.WAITING:
        return is_waiting(proposal)
    if state == ProposalState.COMPLETED:
        return is_completed(proposal)
    raise ValueError(f"Unknown proposal state: {state!r}")


def summarize(proposals: Iterable[Proposal]) -> ProposalSummary:
    summary = ProposalSummary()
    for p in proposals:
        if p.can_current_user_act:
            summary.actionable_count += 1
        if is_waiting(p):
            summary.waiting_count += 1
        if p.is_urgent:
            summary.urgent_count += 1
        if p.is_overdue:
            summary.overdue_count += 1
    return summary
