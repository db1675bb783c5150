from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, SubmitField
from wtforms.validators import DataRequired, Optional, NumberRange


class ProfileForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired()])
    skills = StringField("Skills (comma separated)")
    max_capacity = IntegerField("Interviews per week", validators=[Optional(), NumberRange(min=0)])
    submit = SubmitField("Save profile")
