# models/mixins.py
from sqlalchemy import func, DateTime
from extensions.database import db
from utils.datetime_helpers import utc_now

COMMON_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


class CreatedAtMixin:
    created_at = db.Column(DateTime, nullable=False, default=utc_now, server_default=func.now(), index=True)


class UpdatedAtMixin:
    updated_at = db.Column(
        DateTime, nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now
    )


class TimestampMixin(CreatedAtMixin, UpdatedAtMixin):
    pass
