from app import ma
from models.project import Project, ProjectStatus, ProjectPriority
from marshmallow import fields, validate, post_load
from schemas.common import InputSchema, required_string, optional_string, optional_date, enum_field

MONEY_FIELDS = ('total_budget', 'amount_paid')

class ProjectInputSchema(InputSchema):
    project_name = required_string('Please enter a project name', min_length=2,
                                   min_message='Project name must be at least 2 characters', max_length=200)
    client_id = required_string('Please select a client for this project')
    description = optional_string(max_length=2000, max_message='Description cannot exceed 2000 characters')
    start_date = optional_date('Please enter a valid start date')
    end_date = optional_date('Please enter a valid end date')
    status = enum_field(ProjectStatus, 'Please select a valid project status', load_default=ProjectStatus.DRAFT)
    priority = enum_field(ProjectPriority, 'Please select a priority level', load_default=ProjectPriority.MEDIUM)
    total_budget = fields.Float(allow_none=True, load_default=0,
                                error_messages={'invalid': 'Please enter a valid budget amount'})
    amount_paid = fields.Float(allow_none=True, load_default=0,
                               error_messages={'invalid': 'Please enter a valid payment amount'})
    payment_terms = optional_string(max_length=500, max_message='Payment terms cannot exceed 500 characters')
    last_payment_date = optional_date('Please enter a valid payment date')

    @post_load
    def default_money(self, data, **kwargs):
        # A cleared amount means zero, never null
        for key in MONEY_FIELDS:
            if key in data and data[key] is None:
                data[key] = 0
        return data

class ProjectSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Project
        include_fk = True
        exclude = ('deleted_at',)

    status = fields.Enum(ProjectStatus, by_value=True)
    priority = fields.Enum(ProjectPriority, by_value=True)
    total_budget = fields.Float()
    amount_paid = fields.Float()
