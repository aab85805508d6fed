import enum
from app import db
from models.base import EntityMixin, enum_column

class CommunicationMode(enum.Enum):
    EMAIL = 'email'
    CALL = 'call'
    MEETING = 'meeting'

class CommunicationLog(EntityMixin, db.Model):
    __tablename__ = 'communication_logs'

    client_id = db.Column(db.String(36), db.ForeignKey('clients.id'), nullable=False, index=True)
    project_id = db.Column(db.String(36), db.ForeignKey('projects.id'), index=True)
    date = db.Column(db.Date, nullable=False)
    mode = enum_column(CommunicationMode, 'communication_mode', nullable=False)
    summary = db.Column(db.Text, nullable=False)
    follow_up_required = db.Column(db.Boolean, nullable=False, default=False)
    follow_up_date = db.Column(db.Date)

    client = db.relationship('Client', back_populates='communications')

    def __repr__(self):
        return f'<CommunicationLog {self.mode} - Client {self.client_id}>'
