from flask_wtf import FlaskForm
from wtforms import StringField, SelectField, SubmitField, IntegerField
from wtforms.validators import DataRequired, Email, Optional, NumberRange

from ...models.interviewer import InterviewerStatus


class CompanyForm(FlaskForm):
    name = StringField("Company name", validators=[DataRequired()])
    industry = StringField("Industry", validators=[Optional()])
    address = StringField("Address", validators=[Optional()])
    contact_email = StringField("Contact email", validators=[Optional(), Email()])
    submit = SubmitField("Save")


class InterviewerForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired()])
    email = StringField("Email", validators=[DataRequired(), Email()])
    skills = StringField("Skills (comma separated)")
    status = SelectField("Status", choices=InterviewerStatus.choices(), default=InterviewerStatus.ACTIVE.value)
    organization_id = SelectField("Company", choices=[], validators=[Optional()], validate_choice=False)
    max_capacity = IntegerField("Interviews per week", validators=[Optional(), NumberRange(min=0)])
    submit = SubmitField("Save")


class InterviewerStatusForm(FlaskForm):
    status = SelectField("Status", choices=InterviewerStatus.choices())
    submit = SubmitField("Update")


class SkillForm(FlaskForm):
    name = StringField("Skill", validators=[DataRequired()])
    category = StringField("Category", validators=[Optional()])
    submit = SubmitField("Save")
