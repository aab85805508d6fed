from app import db
from models.base import new_id, utcnow

# Join rows are removed outright; the pair constraint is what the services
# rely on to reject a second assignment.

class ProjectMember(db.Model):
    __tablename__ = 'project_employees'
    __table_args__ = (
        db.UniqueConstraint('project_id', 'employee_id', name='uq_project_employee'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    project_id = db.Column(db.String(36), db.ForeignKey('projects.id'), nullable=False, index=True)
    employee_id = db.Column(db.String(36), db.ForeignKey('employees.id'), nullable=False, index=True)
    role = db.Column(db.String(100))
    assigned_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    employee = db.relationship('Employee')

    def __repr__(self):
        return f'<ProjectMember {self.employee_id} on {self.project_id}>'

class MilestoneEmployee(db.Model):
    __tablename__ = 'milestone_employees'
    __table_args__ = (
        db.UniqueConstraint('milestone_id', 'employee_id', name='uq_milestone_employee'),
    )

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    milestone_id = db.Column(db.String(36), db.ForeignKey('project_milestones.id'), nullable=False, index=True)
    employee_id = db.Column(db.String(36), db.ForeignKey('employees.id'), nullable=False, index=True)
    assigned_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    employee = db.relationship('Employee')

    def __repr__(self):
        return f'<MilestoneEmployee {self.employee_id} on {self.milestone_id}>'
