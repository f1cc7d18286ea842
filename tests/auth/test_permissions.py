# -*- coding: utf-8 -*-
import pytest

from constants.roles import Role, normalize_role
from utils.exceptions import Forbidden
from utils.permissions import assert_role, authorize, capabilities_for, role_level


@pytest.mark.parametrize(
    "role, expected",
    [("readonly", 1), ("edit", 2), ("teamlead", 3), ("admin", 4), (Role.ADMIN, 4)],
)
def test_role_levels_are_linear(role, expected):
    assert role_level(role) == expected


@pytest.mark.parametrize("role", [None, "", "superuser", "ADMINISTRATOR"])
def test_unknown_role_falls_back_to_readonly(role):
    caps = capabilities_for(role)
    assert caps.level == 1
    assert caps.can_read is True
    assert caps.can_edit is False
    assert caps.can_add_delete is False
    assert caps.can_admin is False


def test_capabilities_are_cumulative():
    previous = None
    for role in (Role.READONLY, Role.EDIT, Role.TEAMLEAD, Role.ADMIN):
        caps = capabilities_for(role).to_dict()
        if previous is not None:
            for key in ("can_read", "can_edit", "can_add_delete", "can_admin"):
                # 高等级拥有低等级的全部能力
                assert caps[key] or not previous[key]
        previous = caps
    assert capabilities_for("admin").can_admin is True
    assert capabilities_for("teamlead").can_admin is False
    assert capabilities_for("teamlead").can_add_delete is True
    assert capabilities_for("edit").can_add_delete is False


def test_authorize_compares_levels():
    assert authorize("admin", Role.READONLY)
    assert authorize("teamlead", "teamlead")
    assert authorize("edit", Role.EDIT)
    assert not authorize("edit", Role.TEAMLEAD)
    assert not authorize("readonly", Role.EDIT)
    assert not authorize("bogus", Role.EDIT)


def test_authorize_rejects_unknown_requirement():
    with pytest.raises(ValueError):
        authorize("admin", "owner")


def test_assert_role_raises_forbidden():
    with pytest.raises(Forbidden) as exc:
        assert_role("edit", Role.ADMIN)
    assert exc.value.code == 403
    assert exc.value.kind == "Forbidden"


def test_normalize_role():
    assert normalize_role(" Admin ") == "admin"
    assert normalize_role(None) == "readonly"
    with pytest.raises(ValueError):
        normalize_role("root")


def test_readonly_user_gets_forbidden_on_mutation(api_as, make_project):
    pid = make_project()
    viewer = api_as("readonly")

    listed = viewer.request("GET", f"/api/projects/{pid}/tasks")
    assert listed["_http_status"] == 200

    resp = viewer.request("PUT", f"/api/projects/{pid}/tasks/NET-001", json_data={"status": "Complete"})
    assert resp["_http_status"] == 403
    assert resp["error"] == "Forbidden"
