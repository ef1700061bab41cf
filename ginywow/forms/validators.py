# ginywow/forms/validators.py

from wtforms.validators import ValidationError
from ginywow.schemas import SchemaValidationError


class SchemaCheck:
    """
    Runs one of the ginywow.schemas validators against a single field, so the
    HTML forms accept exactly what the JSON API accepts.
    """

    def __init__(self, validate, key):
        self.validate = validate
        self.key = key

    def __call__(self, form, field):
        try:
            self.validate({self.key: field.data})
        except SchemaValidationError as e:
            raise ValidationError(e.message)
