# -*- coding: utf-8 -*-
from constants.catalog import DEFAULT_TASK_TEMPLATES, DEFAULT_WORKSTREAMS


class TestWorkstreams:

    def test_catalog_seeded_on_startup(self, api_as):
        viewer = api_as("readonly")
        names = [w["name"] for w in viewer.request("GET", "/api/admin/workstreams")["data"]]
        assert names == [name for name, _color, _order in DEFAULT_WORKSTREAMS]

    def test_admin_creates_workstream_at_end(self, admin_api):
        resp = admin_api.request("POST", "/api/admin/workstreams", json_data={"name": "Finance Systems"})
        assert resp["_http_status"] == 201
        assert resp["data"]["sort_order"] == len(DEFAULT_WORKSTREAMS) + 1
        assert resp["data"]["color"] == "#718096"
        assert resp["data"]["active"] is True

    def test_duplicate_workstream_name(self, admin_api):
        resp = admin_api.request("POST", "/api/admin/workstreams", json_data={"name": "Network"})
        assert resp["_http_status"] == 409

    def test_rename_to_existing_name(self, admin_api):
        items = admin_api.request("GET", "/api/admin/workstreams")["data"]
        network = next(w for w in items if w["name"] == "Network")
        resp = admin_api.request("PUT", f"/api/admin/workstreams/{network['id']}", json_data={"name": "Office 365"})
        assert resp["_http_status"] == 409

    def test_deactivate_and_delete(self, admin_api):
        created = admin_api.request("POST", "/api/admin/workstreams", json_data={"name": "Facilities"})["data"]
        resp = admin_api.request("PUT", f"/api/admin/workstreams/{created['id']}", json_data={"active": False})
        assert resp["data"]["active"] is False

        assert admin_api.request("DELETE", f"/api/admin/workstreams/{created['id']}")["_http_status"] == 200
        assert admin_api.request("DELETE", f"/api/admin/workstreams/{created['id']}")["_http_status"] == 404

    def test_non_admin_cannot_modify(self, api_as):
        lead = api_as("teamlead")
        assert lead.request("POST", "/api/admin/workstreams", json_data={"name": "X"})["_http_status"] == 403


class TestDefaultTasks:

    def test_catalog_listed(self, api_as):
        viewer = api_as("readonly")
        items = viewer.request("GET", "/api/admin/default-tasks")["data"]
        assert len(items) == len(DEFAULT_TASK_TEMPLATES)

    def test_create_appends_to_workstream(self, admin_api):
        resp = admin_api.request("POST", "/api/admin/default-tasks", json_data={
            "id": "NET-006",
            "workstream": "Network",
            "name": "Decommission legacy WAN",
        })
        assert resp["_http_status"] == 201
        assert resp["data"]["sort_order"] == 6
        assert resp["data"]["priority"] == "Medium"

    def test_duplicate_id(self, admin_api):
        resp = admin_api.request("POST", "/api/admin/default-tasks", json_data={
            "id": "NET-001", "workstream": "Network", "name": "Again",
        })
        assert resp["_http_status"] == 409
        assert resp["error"] == "DuplicateId"

    def test_invalid_priority(self, admin_api):
        resp = admin_api.request("POST", "/api/admin/default-tasks", json_data={
            "id": "NET-007", "workstream": "Network", "name": "X", "priority": "Whenever",
        })
        assert resp["_http_status"] == 400

    def test_id_is_immutable(self, admin_api):
        resp = admin_api.request("PUT", "/api/admin/default-tasks/NET-001", json_data={"id": "NET-100"})
        assert resp["_http_status"] == 400
        same = admin_api.request("PUT", "/api/admin/default-tasks/NET-001", json_data={"id": "NET-001"})
        assert same["_http_status"] == 200

    def test_new_template_used_by_next_project(self, admin_api):
        admin_api.request("POST", "/api/admin/default-tasks", json_data={
            "id": "HR-099", "workstream": "Human Resources", "name": "Benefits enrollment",
        })
        created = admin_api.request("POST", "/api/projects", json_data={"name": "Later"})["data"]
        assert created["seed"]["tasks_created"] == len(DEFAULT_TASK_TEMPLATES) + 1

    def test_delete_missing(self, admin_api):
        assert admin_api.request("DELETE", "/api/admin/default-tasks/NOPE-1")["_http_status"] == 404

    def test_editor_cannot_modify(self, api_as):
        editor = api_as("edit")
        resp = editor.request("PUT", "/api/admin/default-tasks/NET-001", json_data={"name": "X"})
        assert resp["_http_status"] == 403
