from app import ma
from models.communication import CommunicationLog, CommunicationMode
from marshmallow import fields
from schemas.common import InputSchema, required_string, optional_string, optional_date, enum_field

class CommunicationInputSchema(InputSchema):
    client_id = required_string('Client is required')
    project_id = optional_string()
    date = fields.Date(required=True, error_messages={
        'required': 'Date is required',
        'null': 'Date is required',
        'invalid': 'Please enter a valid date',
    })
    mode = enum_field(CommunicationMode, 'Please select a valid communication mode', required=True)
    summary = required_string('Summary is required', min_length=10,
                              min_message='Summary must be at least 10 characters')
    follow_up_required = fields.Boolean(load_default=False,
                                        error_messages={'invalid': 'Follow-up flag must be true or false'})
    follow_up_date = optional_date('Please enter a valid follow-up date')

class CommunicationSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = CommunicationLog
        include_fk = True
        exclude = ('deleted_at',)

    mode = fields.Enum(CommunicationMode, by_value=True)
