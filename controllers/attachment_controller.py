# -*- coding: utf-8 -*-
"""任务附件接口：列表 / 上传 / 下载 / 删除."""

from __future__ import annotations

from flask import Blueprint, request, send_file

from constants.roles import Role
from controllers.auth_helpers import auth_required, require_role
from services.attachment_service import AttachmentService
from utils.exceptions import DisallowedType
from utils.permissions import get_current_user
from utils.response import json_response


attachment_bp = Blueprint(
    "attachment", __name__,
    url_prefix="/api/projects/<int:project_id>/tasks/<task_id>/attachments",
)


@attachment_bp.get("")
@auth_required()
@require_role(Role.READONLY)
def list_attachments(project_id: int, task_id: str):
    items = AttachmentService.list(project_id, task_id)
    return json_response(data=[a.to_dict() for a in items])


@attachment_bp.post("")
@auth_required()
@require_role(Role.EDIT)
def upload_attachment(project_id: int, task_id: str):
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        raise DisallowedType("No file uploaded")
    attachment = AttachmentService.upload(project_id, task_id, upload, get_current_user())
    return json_response(message="Attachment uploaded", data=attachment.to_dict(), code=201)


@attachment_bp.get("/<int:attachment_id>/download")
@auth_required()
@require_role(Role.READONLY)
def download_attachment(project_id: int, task_id: str, attachment_id: int):
    attachment, path = AttachmentService.open(attachment_id, project_id, task_id)
    return send_file(
        path,
        mimetype=attachment.mime_type,
        as_attachment=True,
        download_name=attachment.original_filename,
        conditional=True,
    )


@attachment_bp.delete("/<int:attachment_id>")
@auth_required()
@require_role(Role.EDIT)
def delete_attachment(project_id: int, task_id: str, attachment_id: int):
    result = AttachmentService.delete(attachment_id, project_id, task_id)
    return json_response(message="Attachment deleted", data=result)
