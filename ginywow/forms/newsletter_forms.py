# ginywow/forms/newsletter_forms.py

from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, HiddenField
from wtforms.validators import DataRequired, Length, Optional
from ginywow.schemas import validate_email_address, INVALID_EMAIL_MESSAGE, SOURCE_MAX_LENGTH
from .validators import SchemaCheck


def _email_only(data):
    return validate_email_address(data.get('email'))


class NewsletterForm(FlaskForm):
    email = StringField('Email', validators=[
        DataRequired(message=INVALID_EMAIL_MESSAGE),
        Length(max=255),
        SchemaCheck(_email_only, 'email')
    ])
    source = HiddenField('Source', default='website', validators=[Optional(), Length(max=SOURCE_MAX_LENGTH)])
    submit = SubmitField('Subscribe')


class UnsubscribeForm(FlaskForm):
    email = StringField('Email', validators=[
        DataRequired(message=INVALID_EMAIL_MESSAGE),
        SchemaCheck(_email_only, 'email')
    ])
    submit = SubmitField('Unsubscribe')
