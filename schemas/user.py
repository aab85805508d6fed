from app import ma
from models.user import User, UserRole
from marshmallow import fields, validate
from schemas.common import InputSchema, required_string

class UserSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = User
        exclude = ("password_hash",)

class RegisterInputSchema(InputSchema):
    username = required_string('Username is required', min_length=3,
                               min_message='Username must be at least 3 characters', max_length=64)
    email = fields.Email(required=True, error_messages={
        'required': 'Email is required',
        'null': 'Email is required',
        'invalid': 'Please enter a valid email address',
    })
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=8, error="Password must be at least 8 characters long"),
        error_messages={'required': 'Password is required', 'null': 'Password is required'},
    )
    role = fields.String(
        allow_none=True,
        validate=validate.OneOf([role.value for role in UserRole], error='Please select a valid role'),
    )
