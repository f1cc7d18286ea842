from extensions.database import db
from .mixins import UpdatedAtMixin, COMMON_TABLE_ARGS
from utils.datetime_helpers import datetime_to_iso


class Contact(UpdatedAtMixin, db.Model):
    __tablename__ = "contacts"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    name = db.Column(db.String(128))
    role = db.Column(db.String(128))
    company = db.Column(db.String(128))
    workstream = db.Column(db.String(128))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(40))

    def to_dict(self):
        return {
            "id": self.id,
            "project_id": self.project_id,
            "name": self.name,
            "role": self.role,
            "company": self.company,
            "workstream": self.workstream,
            "email": self.email,
            "phone": self.phone,
            "updated_at": datetime_to_iso(self.updated_at),
        }
