import enum
from app import db
from models.base import EntityMixin, enum_column

class MilestoneStatus(enum.Enum):
    PENDING = 'pending'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

class ProjectMilestone(EntityMixin, db.Model):
    __tablename__ = 'project_milestones'

    project_id = db.Column(db.String(36), db.ForeignKey('projects.id'), nullable=False, index=True)
    milestone = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    due_date = db.Column(db.Date)
    completion_date = db.Column(db.Date)
    status = enum_column(MilestoneStatus, 'milestone_status', nullable=False, default=MilestoneStatus.PENDING)
    remarks = db.Column(db.String(500))

    project = db.relationship('Project', back_populates='milestones')

    def __repr__(self):
        return f'<ProjectMilestone {self.milestone} - Project {self.project_id}>'
