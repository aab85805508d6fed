from app import ma
from marshmallow import fields, validate
from schemas.common import InputSchema, required_string
from schemas.employee import EmployeeSummarySchema

class ProjectMemberInputSchema(InputSchema):
    employee_id = required_string('Employee ID is required')
    role = fields.String(allow_none=True, validate=validate.Length(max=100, error='Role cannot exceed 100 characters'))

class MemberRoleInputSchema(InputSchema):
    role = fields.String(allow_none=True, validate=validate.Length(max=100, error='Role cannot exceed 100 characters'))

class MilestoneEmployeeInputSchema(InputSchema):
    employee_id = required_string('Employee ID is required')

class ProjectMemberSchema(ma.Schema):
    project_id = fields.String()
    employee_id = fields.String()
    role = fields.String(allow_none=True)
    assigned_at = fields.DateTime()
    employee = fields.Nested(EmployeeSummarySchema)

class MilestoneEmployeeSchema(ma.Schema):
    milestone_id = fields.String()
    employee_id = fields.String()
    assigned_at = fields.DateTime()
    employee = fields.Nested(EmployeeSummarySchema)
