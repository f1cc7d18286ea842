# -*- coding: utf-8 -*-
import io
import os

import pytest

from services.attachment_service import AttachmentService
from utils.exceptions import DisallowedType, FileTooLarge

MB = 1024 * 1024


def _upload(api, project_id, task_id, name, content=b"data"):
    return api.request("POST", f"/api/projects/{project_id}/tasks/{task_id}/attachments", data={
        "file": (io.BytesIO(content), name),
    })


class TestUploadValidation:

    def test_executable_is_rejected(self, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        resp = _upload(editor, pid, "NET-001", "setup.exe")
        assert resp["_http_status"] == 415
        assert resp["error"] == "DisallowedType"

    def test_oversized_file_is_rejected(self, app, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        resp = _upload(editor, pid, "NET-001", "report.pdf", content=b"\0" * (12 * MB))
        assert resp["_http_status"] == 413
        assert resp["error"] == "FileTooLarge"
        storage = app.config["ATTACHMENT_STORAGE_DIR"]
        assert not os.path.isdir(storage) or os.listdir(storage) == []

    def test_size_checked_before_type(self, app):
        with pytest.raises(FileTooLarge):
            AttachmentService.validate_upload("setup.exe", 11 * MB)
        with pytest.raises(DisallowedType):
            AttachmentService.validate_upload("setup.exe", 10)

    def test_exact_limit_is_allowed(self, app):
        AttachmentService.validate_upload("report.pdf", 10 * MB)

    def test_missing_extension(self, app):
        with pytest.raises(DisallowedType):
            AttachmentService.validate_upload("README", 10)

    def test_unknown_task(self, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        resp = _upload(editor, pid, "NOPE-001", "notes.txt")
        assert resp["_http_status"] == 404

    def test_no_file_part(self, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        resp = editor.request("POST", f"/api/projects/{pid}/tasks/NET-001/attachments", data={"note": "x"})
        assert resp["_http_status"] == 415

    def test_readonly_cannot_upload(self, api_as, make_project):
        pid = make_project()
        viewer = api_as("readonly")
        assert _upload(viewer, pid, "NET-001", "notes.txt")["_http_status"] == 403


class TestAttachmentLifecycle:

    def test_stored_name_is_sanitized(self, app, api_as, make_project):
        pid = make_project()
        editor = api_as("edit", username="ed")
        resp = _upload(editor, pid, "NET-001", "q1 report (final).pdf", content=b"%PDF-1.4")
        assert resp["_http_status"] == 201
        data = resp["data"]
        assert data["original_filename"] == "q1 report (final).pdf"
        assert data["stored_filename"].endswith("-q1_report__final_.pdf")
        assert " " not in data["stored_filename"]
        assert data["size"] == len(b"%PDF-1.4")
        assert data["uploaded_by"] == "ed"
        assert os.path.exists(os.path.join(app.config["ATTACHMENT_STORAGE_DIR"], data["stored_filename"]))

    def test_same_name_twice_gets_distinct_files(self, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        first = _upload(editor, pid, "NET-001", "diagram.png")["data"]
        second = _upload(editor, pid, "NET-001", "diagram.png")["data"]
        assert first["stored_filename"] != second["stored_filename"]

        items = editor.request("GET", f"/api/projects/{pid}/tasks/NET-001/attachments")["data"]
        assert len(items) == 2
        tasks = editor.request("GET", f"/api/projects/{pid}/tasks", params={"workstream": "Network"})["data"]
        assert next(t for t in tasks if t["id"] == "NET-001")["attachment_count"] == 2

    def test_download_uses_original_name(self, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        aid = _upload(editor, pid, "NET-002", "site plan.txt", content=b"rack layout")["data"]["id"]

        resp = editor.client.get(
            f"/api/projects/{pid}/tasks/NET-002/attachments/{aid}/download",
            headers=editor.headers(),
        )
        assert resp.status_code == 200
        assert resp.data == b"rack layout"
        assert "site plan.txt" in resp.headers["Content-Disposition"]

    def test_download_missing_file(self, app, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        data = _upload(editor, pid, "NET-002", "gone.txt")["data"]
        os.remove(os.path.join(app.config["ATTACHMENT_STORAGE_DIR"], data["stored_filename"]))
        resp = editor.request("GET", f"/api/projects/{pid}/tasks/NET-002/attachments/{data['id']}/download")
        assert resp["_http_status"] == 404

    def test_delete_removes_row_and_file(self, app, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        data = _upload(editor, pid, "SEC-001", "scan.csv")["data"]
        path = os.path.join(app.config["ATTACHMENT_STORAGE_DIR"], data["stored_filename"])

        resp = editor.request("DELETE", f"/api/projects/{pid}/tasks/SEC-001/attachments/{data['id']}")
        assert resp["_http_status"] == 200
        assert resp["data"] == {"id": data["id"], "file_removed": True}
        assert not os.path.exists(path)
        assert editor.request("GET", f"/api/projects/{pid}/tasks/SEC-001/attachments")["data"] == []

    def test_delete_tolerates_missing_file(self, app, api_as, make_project):
        pid = make_project()
        editor = api_as("edit")
        data = _upload(editor, pid, "SEC-001", "scan.csv")["data"]
        os.remove(os.path.join(app.config["ATTACHMENT_STORAGE_DIR"], data["stored_filename"]))

        resp = editor.request("DELETE", f"/api/projects/{pid}/tasks/SEC-001/attachments/{data['id']}")
        assert resp["_http_status"] == 200
        assert resp["data"]["file_removed"] is False

    def test_wrong_project_or_task_is_not_found(self, api_as, make_project):
        owner_project, other_project = make_project("Owner"), make_project("Other")
        editor = api_as("edit")
        aid = _upload(editor, owner_project, "NET-001", "notes.txt")["data"]["id"]

        for pid, task_id in ((other_project, "NET-001"), (owner_project, "NET-002")):
            base = f"/api/projects/{pid}/tasks/{task_id}/attachments/{aid}"
            assert editor.request("GET", f"{base}/download")["_http_status"] == 404
            assert editor.request("DELETE", base)["_http_status"] == 404

        assert len(editor.request("GET", f"/api/projects/{owner_project}/tasks/NET-001/attachments")["data"]) == 1
