from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import DataRequired, Optional, URL


class ProfileForm(FlaskForm):
    full_name = StringField("Full name", validators=[DataRequired()])
    resume_url = StringField("Resume URL", validators=[Optional(), URL()])
    submit = SubmitField("Save profile")
