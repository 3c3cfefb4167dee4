"""
Unit tests for core.policy: scope resolution and ownership predicates.
"""
import uuid

import pytest

from contactbook.core.errors import ValidationError
from contactbook.core.policy import Requester, can_access, can_update, normalize_id, resolve_scope

ALICE = Requester(id=str(uuid.uuid4()), username="alice", role="user")
BOB = Requester(id=str(uuid.uuid4()), username="bob", role="user")
ADMIN = Requester(id=str(uuid.uuid4()), username="admin", role="admin")


class TestResolveScope:
    def test_defaults_to_requester(self):
        assert resolve_scope(ALICE) == ALICE.id
        assert resolve_scope(ADMIN) == ADMIN.id

    def test_non_admin_target_is_ignored(self):
        assert resolve_scope(ALICE, BOB.id) == ALICE.id

    def test_admin_target_applies(self):
        assert resolve_scope(ADMIN, BOB.id) == BOB.id

    def test_admin_target_is_normalized(self):
        assert resolve_scope(ADMIN, f"  {BOB.id.upper()} ") == BOB.id

    def test_admin_empty_target_means_self(self):
        assert resolve_scope(ADMIN, "") == ADMIN.id

    def test_admin_malformed_target_rejected(self):
        with pytest.raises(ValidationError) as exc:
            resolve_scope(ADMIN, "not-a-uuid")
        assert "targetUserId" in exc.value.detail["errors"]


class TestPredicates:
    def test_owner_can_access(self):
        assert can_access(ALICE, ALICE.id)
        assert can_access(ALICE, uuid.UUID(ALICE.id))

    def test_other_user_cannot_access(self):
        assert not can_access(BOB, ALICE.id)

    def test_admin_can_access_anything(self):
        assert can_access(ADMIN, ALICE.id)

    def test_update_is_permissive_by_default(self):
        assert can_update(BOB, ALICE.id)

    def test_strict_update_matches_access(self):
        assert not can_update(BOB, ALICE.id, strict=True)
        assert can_update(ALICE, ALICE.id, strict=True)
        assert can_update(ADMIN, ALICE.id, strict=True)


def test_requester_from_claims():
    r = Requester.from_claims({"sub": "abc", "username": "zoe", "role": "admin", "exp": 0})
    assert r == Requester(id="abc", username="zoe", role="admin")
    assert r.is_admin


def test_normalize_id():
    u = uuid.uuid4()
    assert normalize_id(str(u)) == str(u)
    assert normalize_id("nope") is None
    assert normalize_id(None) is None
