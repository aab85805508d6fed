import datetime
import uuid
from app import db


def utcnow():
    """Naive UTC timestamp, matching how the columns are declared."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


def new_id():
    return str(uuid.uuid4())


class EntityMixin:
    """Columns shared by every soft-deletable entity.

    ``deleted_at`` is the only visibility flag: a row is live while it is null.
    """
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = db.Column(db.DateTime, nullable=True, index=True)

    @property
    def is_deleted(self):
        return self.deleted_at is not None


def enum_column(enum_cls, name, **kwargs):
    # Store the lowercase values ('on_hold'), not the member names
    return db.Column(
        db.Enum(enum_cls, name=name, values_callable=lambda e: [m.value for m in e]),
        **kwargs
    )
