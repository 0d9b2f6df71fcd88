# This project was developed with assistance from AI tools.
"""Who may act on a proposal.

The actor's role always comes from the authenticated caller, never from the
proposal or request body. Admins can always act; everyone else only when the
proposal is waiting on their role and they own that side of the application.
"""

from db.enums import UserRole

from ..schemas.application import OwnerIds
from ..schemas.proposal import ActionParty

# Party -> role allowed to act for it (admin handled separately).
_PARTY_ROLE: dict[ActionParty, UserRole] = {
    ActionParty.CANDIDATE: UserRole.CANDIDATE,
    ActionParty.RECRUITER: UserRole.RECRUITER,
    ActionParty.COMPANY: UserRole.COMPANY,
}


def owner_id_for(party: ActionParty, owners: OwnerIds) -> str | None:
    """Return the owner id on the application for the given party."""
    if party == ActionParty.CANDIDATE:
        return owners.candidate_id
    if party == ActionParty.RECRUITER:
        return owners.recruiter_id
    if party == ActionParty.COMPANY:
        return owners.company_id
    return None


def can_act(
    pending_action_by: ActionParty,
    owners: OwnerIds,
    actor_id: str,
    actor_role: UserRole,
) -> bool:
    """Return True if the actor may respond to the proposal now."""
    if actor_role == UserRole.ADMIN:
        return True
    if pending_action_by == ActionParty.NONE:
        return False
    if _PARTY_ROLE.get(pending_action_by) != actor_role:
        return False

    owner_id = owner_id_for(pending_action_by, owners)
    return bool(owner_id) and owner_id == actor_id
