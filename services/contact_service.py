# services/contact_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions.database import db
from repositories.contact_repository import ContactRepository
from repositories.project_repository import ProjectRepository
from utils.exceptions import NotFound, StorageFailure
from utils.validators import clean_payload, optional_email, optional_str

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ("name", "role", "company", "workstream", "email", "phone")


def _validate_contact_fields(payload: dict) -> dict:
    fields = {}
    for key in ("name", "role", "company", "workstream"):
        if key in payload:
            fields[key] = optional_str(payload, key, max_length=128)
    if "email" in payload:
        fields["email"] = optional_email(payload, "email")
    if "phone" in payload:
        fields["phone"] = optional_str(payload, "phone", max_length=40)
    return fields


class ContactService:

    @staticmethod
    def list(project_id: int):
        if not ProjectRepository.exists(project_id):
            raise NotFound("Project not found")
        return ContactRepository.list_by_project(project_id)

    @staticmethod
    def create(project_id: int, data):
        payload = clean_payload(data, CONTACT_FIELDS)
        fields = _validate_contact_fields(payload)
        if not ProjectRepository.exists(project_id):
            raise NotFound("Project not found")
        try:
            contact = ContactRepository.create(project_id, **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Creating contact in project %s failed: %s", project_id, e)
            raise StorageFailure("Failed to create contact")
        return contact

    @staticmethod
    def update(contact_id: int, project_id: int, data):
        payload = clean_payload(data, CONTACT_FIELDS)
        fields = _validate_contact_fields(payload)
        # 按 (id, project_id) 查找，属于其他项目时与不存在一样返回 NotFound
        contact = ContactRepository.get_scoped(contact_id, project_id)
        if not contact:
            raise NotFound("Contact not found")
        try:
            ContactRepository.update(contact, **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Updating contact %s in project %s failed: %s", contact_id, project_id, e)
            raise StorageFailure("Failed to update contact")
        return contact

    @staticmethod
    def delete(contact_id: int, project_id: int):
        try:
            deleted = ContactRepository.delete_scoped(contact_id, project_id)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Deleting contact %s in project %s failed: %s", contact_id, project_id, e)
            raise StorageFailure("Failed to delete contact")
        if not deleted:
            raise NotFound("Contact not found")
        return deleted
