import pytest

from app.config.permissions_config import (
    OWNER_ONLY_ACTIONS, PERMISSION_MATRIX, get_role_permissions, role_can
)

ALL_ACTIONS = {p["name"] for p in PERMISSION_MATRIX["permissions"]}


def test_owner_can_do_everything():
    assert "budgets:create" in ALL_ACTIONS
    assert set(get_role_permissions("owner")) == ALL_ACTIONS


def test_member_lacks_owner_only_actions():
    member = set(get_role_permissions("member"))
    assert member == ALL_ACTIONS - set(OWNER_ONLY_ACTIONS)


@pytest.mark.parametrize("action,allowed", [
    ("tasks:create", True),
    ("tasks:delete", True),
    ("events:create", True),
    ("transactions:create", True),
    ("budgets:create", False),
    ("budgets:update", False),
    ("members:remove", False),
    ("invitations:create", False),
])
def test_member_actions(action, allowed):
    assert role_can("member", action) is allowed


def test_unknown_role_or_action_is_denied():
    assert role_can("guest", "tasks:read") is False
    assert role_can("owner", "tasks:launch") is False
