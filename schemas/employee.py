from app import ma
from models.employee import Employee, EmployeeStatus
from marshmallow import fields, validate
from schemas.common import InputSchema, required_string, optional_string, optional_date, enum_field

class EmployeeInputSchema(InputSchema):
    name = required_string('Employee name is required', min_length=2,
                           min_message='Name must be at least 2 characters', max_length=120)
    email = fields.Email(allow_none=True, error_messages={'invalid': 'Please enter a valid email address'})
    phone = optional_string(max_length=50)
    position = optional_string(max_length=120)
    department = optional_string(max_length=120)
    hire_date = optional_date('Please enter a valid hire date')
    status = enum_field(EmployeeStatus, 'Please select a valid employee status',
                        load_default=EmployeeStatus.ACTIVE)
    salary = fields.Float(allow_none=True, error_messages={'invalid': 'Please enter a valid salary'},
                          validate=validate.Range(min=0, error='Salary cannot be negative'))

class EmployeeSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Employee
        include_fk = True
        exclude = ('deleted_at',)

    status = fields.Enum(EmployeeStatus, by_value=True)
    salary = fields.Float(allow_none=True)

class EmployeeSummarySchema(ma.Schema):
    id = fields.String()
    name = fields.String()
    email = fields.String(allow_none=True)
    position = fields.String(allow_none=True)
