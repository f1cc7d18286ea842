from typing import List, Optional

from sqlalchemy import delete, select

from extensions.database import db
from models.contact import Contact


class ContactRepository:

    @staticmethod
    def create(project_id: int, **fields) -> Contact:
        contact = Contact(project_id=project_id, **fields)
        db.session.add(contact)
        db.session.flush()
        return contact

    @staticmethod
    def get_scoped(contact_id: int, project_id: int) -> Optional[Contact]:
        stmt = select(Contact).where(Contact.id == contact_id, Contact.project_id == project_id)
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def list_by_project(project_id: int) -> List[Contact]:
        stmt = (
            select(Contact)
            .where(Contact.project_id == project_id)
            .order_by(Contact.workstream, Contact.role, Contact.id)
        )
        return db.session.execute(stmt).scalars().all()

    @staticmethod
    def update(contact: Contact, **fields) -> Contact:
        for key, value in fields.items():
            setattr(contact, key, value)
        db.session.flush()
        return contact

    @staticmethod
    def delete_scoped(contact_id: int, project_id: int) -> int:
        stmt = delete(Contact).where(Contact.id == contact_id, Contact.project_id == project_id)
        return db.session.execute(stmt).rowcount or 0
