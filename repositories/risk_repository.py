from typing import List, Optional

from sqlalchemy import delete, select

from extensions.database import db
from models.risk import Risk


class RiskRepository:

    @staticmethod
    def get(risk_id: str, project_id: int) -> Optional[Risk]:
        return db.session.get(Risk, (risk_id, project_id))

    @staticmethod
    def create(project_id: int, risk_id: str, **fields) -> Risk:
        risk = Risk(id=risk_id, project_id=project_id, **fields)
        db.session.add(risk)
        db.session.flush()
        return risk

    @staticmethod
    def list_by_project(project_id: int) -> List[Risk]:
        stmt = select(Risk).where(Risk.project_id == project_id).order_by(Risk.id)
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def update(risk: Risk, **fields) -> Risk:
        for key, value in fields.items():
            setattr(risk, key, value)
        db.session.flush()
        return risk

    @staticmethod
    def delete_scoped(risk_id: str, project_id: int) -> int:
        stmt = delete(Risk).where(Risk.id == risk_id, Risk.project_id == project_id)
        return db.session.execute(stmt).rowcount or 0
