from marshmallow import Schema, ValidationError, EXCLUDE, fields, validate

from utils.normalize import is_blank


def not_blank(message):
    """Validator rejecting strings that are empty once trimmed."""
    def _validate(value):
        if value is None or is_blank(value):
            raise ValidationError(message)
    return _validate


def required_string(message, min_length=None, min_message=None, max_length=None):
    validators = [not_blank(message)]
    if min_length:
        validators.append(validate.Length(min=min_length, error=min_message))
    if max_length:
        validators.append(validate.Length(max=max_length))
    return fields.String(
        required=True,
        validate=validators,
        error_messages={'required': message, 'null': message},
    )


def optional_string(max_length=None, max_message=None, **kwargs):
    validators = []
    if max_length:
        validators.append(validate.Length(max=max_length, error=max_message))
    return fields.String(allow_none=True, validate=validators, **kwargs)


def optional_date(message='Please enter a valid date'):
    return fields.Date(allow_none=True, error_messages={'invalid': message})


def enum_field(enum_cls, message, **kwargs):
    return fields.Enum(
        enum_cls,
        by_value=True,
        error_messages={'unknown': message, 'invalid': message, 'null': message, 'required': message},
        **kwargs
    )


class InputSchema(Schema):
    """
    Base for request-body schemas.

    Unknown keys (ids, timestamps echoed back by forms) are dropped rather
    than rejected.
    """
    class Meta:
        unknown = EXCLUDE

    @classmethod
    def required_fields(cls):
        # Required strings keep their blank value so not_blank reports it;
        # other required fields see null and use their 'null' message
        return {
            name for name, field in cls._declared_fields.items()
            if field.required and isinstance(field, fields.String)
        }

    def first_error(self, messages):
        """
        Return the first message in field-declaration order, falling back to
        schema-level errors.
        """
        for name in list(self.fields) + ['_schema']:
            if name in messages:
                return _first_message(messages[name])
        return _first_message(next(iter(messages.values()), 'Invalid input'))


def _first_message(value):
    if isinstance(value, dict):
        return _first_message(next(iter(value.values()), 'Invalid input'))
    if isinstance(value, (list, tuple)):
        return _first_message(value[0]) if value else 'Invalid input'
    return str(value)
