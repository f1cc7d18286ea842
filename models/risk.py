# -*- coding: utf-8 -*-
"""风险登记，复合主键 (id, project_id)，编号如 "RISK-001" 可跨项目重复。"""

from extensions.database import db
from .mixins import UpdatedAtMixin, COMMON_TABLE_ARGS
from utils.datetime_helpers import datetime_to_iso


class Risk(UpdatedAtMixin, db.Model):
    __tablename__ = "risks"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.String(32), primary_key=True, autoincrement=False)
    project_id = db.Column(
        db.Integer, db.ForeignKey("projects.id"), primary_key=True, autoincrement=False
    )
    description = db.Column(db.Text)
    workstream = db.Column(db.String(128))
    likelihood = db.Column(db.String(16))
    impact = db.Column(db.String(16))
    mitigation = db.Column(db.Text)
    owner = db.Column(db.String(128))

    def to_dict(self):
        return {
            "id": self.id,
            "project_id": self.project_id,
            "description": self.description,
            "workstream": self.workstream,
            "likelihood": self.likelihood,
            "impact": self.impact,
            "mitigation": self.mitigation,
            "owner": self.owner,
            "updated_at": datetime_to_iso(self.updated_at),
        }
