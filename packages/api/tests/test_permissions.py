# This project was developed with assistance from AI tools.
"""Tests for the proposal permission check."""

import pytest
from db.enums import UserRole

from src.schemas.application import OwnerIds
from src.schemas.proposal import ActionParty
from src.services.permissions import can_act, owner_id_for

OWNERS = OwnerIds(recruiter_id="rec-1", candidate_id="cand-1", company_id="comp-1")


def test_candidate_owner_can_act_when_pending_candidate():
    assert can_act(ActionParty.CANDIDATE, OWNERS, "cand-1", UserRole.CANDIDATE) is True


def test_other_candidate_cannot_act():
    assert can_act(ActionParty.CANDIDATE, OWNERS, "other-user", UserRole.CANDIDATE) is False


def test_recruiter_owner_can_act_when_pending_recruiter():
    assert can_act(ActionParty.RECRUITER, OWNERS, "rec-1", UserRole.RECRUITER) is True


def test_company_owner_can_act_when_pending_company():
    assert can_act(ActionParty.COMPANY, OWNERS, "comp-1", UserRole.COMPANY) is True


@pytest.mark.parametrize("pending", list(ActionParty))
@pytest.mark.parametrize("actor_id", ["cand-1", "rec-1", "nobody"])
def test_admin_can_always_act(pending, actor_id):
    assert can_act(pending, OWNERS, actor_id, UserRole.ADMIN) is True


def test_wrong_role_with_matching_id_cannot_act():
    """A recruiter whose id happens to equal the candidate id is still not the candidate."""
    owners = OwnerIds(recruiter_id="rec-1", candidate_id="shared-id", company_id="comp-1")
    assert can_act(ActionParty.CANDIDATE, owners, "shared-id", UserRole.RECRUITER) is False


@pytest.mark.parametrize("role", [UserRole.CANDIDATE, UserRole.RECRUITER, UserRole.COMPANY])
def test_nobody_but_admin_acts_when_pending_none(role):
    for actor_id in ("cand-1", "rec-1", "comp-1"):
        assert can_act(ActionParty.NONE, OWNERS, actor_id, role) is False


def test_missing_owner_id_never_matches_empty_actor():
    owners = OwnerIds(recruiter_id=None, candidate_id="cand-1", company_id="comp-1")
    assert can_act(ActionParty.RECRUITER, owners, "", UserRole.RECRUITER) is False
    company_less = OwnerIds(recruiter_id="rec-1", candidate_id="cand-1", company_id="")
    assert can_act(ActionParty.COMPANY, company_less, "", UserRole.COMPANY) is False


def test_every_non_admin_role_has_an_owner_field():
    for party in (ActionParty.CANDIDATE, ActionParty.RECRUITER, ActionParty.COMPANY):
        assert owner_id_for(party, OWNERS) is not None
    assert owner_id_for(ActionParty.NONE, OWNERS) is None
