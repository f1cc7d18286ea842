# services/risk_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions.database import db
from repositories.project_repository import ProjectRepository
from repositories.risk_repository import RiskRepository
from utils.exceptions import DuplicateId, NotFound, StorageFailure
from utils.validators import clean_payload, optional_str, required_str

logger = logging.getLogger(__name__)

RISK_CREATE_FIELDS = ("id", "description", "workstream", "likelihood", "impact", "mitigation", "owner")
RISK_UPDATE_FIELDS = RISK_CREATE_FIELDS[1:]

_TEXT_LIMITS = {
    "description": 10000,
    "workstream": 128,
    "likelihood": 16,
    "impact": 16,
    "mitigation": 10000,
    "owner": 128,
}


def _validate_risk_fields(payload: dict) -> dict:
    return {
        key: optional_str(payload, key, max_length=limit)
        for key, limit in _TEXT_LIMITS.items()
        if key in payload
    }


class RiskService:

    @staticmethod
    def list(project_id: int):
        if not ProjectRepository.exists(project_id):
            raise NotFound("Project not found")
        return RiskRepository.list_by_project(project_id)

    @staticmethod
    def create(project_id: int, data):
        payload = clean_payload(data, RISK_CREATE_FIELDS, required=("id",))
        risk_id = required_str(payload, "id", max_length=32)
        fields = _validate_risk_fields(payload)
        if not ProjectRepository.exists(project_id):
            raise NotFound("Project not found")
        if RiskRepository.get(risk_id, project_id):
            raise DuplicateId(f"Risk '{risk_id}' already exists in this project")
        try:
            risk = RiskRepository.create(project_id, risk_id, **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Creating risk %s in project %s failed: %s", risk_id, project_id, e)
            raise StorageFailure("Failed to create risk")
        return risk

    @staticmethod
    def update(risk_id: str, project_id: int, data):
        payload = clean_payload(data, RISK_UPDATE_FIELDS)
        fields = _validate_risk_fields(payload)
        risk = RiskRepository.get(risk_id, project_id)
        if not risk:
            raise NotFound("Risk not found")
        try:
            RiskRepository.update(risk, **fields)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Updating risk %s in project %s failed: %s", risk_id, project_id, e)
            raise StorageFailure("Failed to update risk")
        return risk

    @staticmethod
    def delete(risk_id: str, project_id: int):
        try:
            deleted = RiskRepository.delete_scoped(risk_id, project_id)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Deleting risk %s in project %s failed: %s", risk_id, project_id, e)
            raise StorageFailure("Failed to delete risk")
        if not deleted:
            raise NotFound("Risk not found")
        return deleted
