from app import ma
from models.milestone import ProjectMilestone, MilestoneStatus
from marshmallow import fields
from schemas.common import InputSchema, required_string, optional_string, optional_date, enum_field

class MilestoneInputSchema(InputSchema):
    project_id = required_string('Please select a project for this milestone')
    milestone = required_string('Please enter a milestone name', min_length=2,
                                min_message='Milestone name must be at least 2 characters', max_length=200)
    description = optional_string(max_length=1000, max_message='Description cannot exceed 1000 characters')
    due_date = optional_date('Please select a valid target finish date')
    completion_date = optional_date('Please enter a valid completion date')
    status = enum_field(MilestoneStatus, 'Please select a valid milestone status', load_default=MilestoneStatus.PENDING)
    remarks = optional_string(max_length=500, max_message='Remarks cannot exceed 500 characters')

class MilestoneSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = ProjectMilestone
        include_fk = True
        exclude = ('deleted_at',)

    status = fields.Enum(MilestoneStatus, by_value=True)
