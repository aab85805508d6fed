from app import ma
from models.client import Client
from marshmallow import fields
from schemas.common import InputSchema, required_string, optional_string

class ClientInputSchema(InputSchema):
    name = required_string('Client name is required', min_length=2,
                           min_message='Name must be at least 2 characters', max_length=120)
    email = fields.Email(allow_none=True, error_messages={'invalid': 'Please enter a valid email address'})
    phone = optional_string(max_length=50)
    company_name = optional_string(max_length=200)
    address = optional_string(max_length=200)
    notes = optional_string()

class ClientSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Client
        include_fk = True
        exclude = ('deleted_at',)

class ClientSummarySchema(ma.Schema):
    id = fields.String()
    name = fields.String()
    email = fields.String(allow_none=True)
    company_name = fields.String(allow_none=True)
