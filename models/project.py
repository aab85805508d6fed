import enum
from app import db
from models.base import EntityMixin, enum_column

class ProjectStatus(enum.Enum):
    DRAFT = 'draft'
    ACTIVE = 'active'
    ON_HOLD = 'on_hold'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

class ProjectPriority(enum.Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    URGENT = 'urgent'

class Project(EntityMixin, db.Model):
    __tablename__ = 'projects'

    client_id = db.Column(db.String(36), db.ForeignKey('clients.id'), nullable=False, index=True)
    project_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    start_date = db.Column(db.Date)
    end_date = db.Column(db.Date)
    status = enum_column(ProjectStatus, 'project_status', nullable=False, default=ProjectStatus.DRAFT)
    priority = enum_column(ProjectPriority, 'project_priority', nullable=False, default=ProjectPriority.MEDIUM)
    total_budget = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    amount_paid = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    payment_terms = db.Column(db.String(500))
    last_payment_date = db.Column(db.Date)

    # Relationships
    client = db.relationship('Client', back_populates='projects')
    milestones = db.relationship('ProjectMilestone', back_populates='project')

    def __repr__(self):
        return f'<Project {self.project_name} - Client {self.client_id}>'
