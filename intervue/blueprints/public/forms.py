from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, SubmitField
from wtforms.validators import DataRequired, Email, Length, Optional

class DemoRequestForm(FlaskForm):
    full_name = StringField("Full name", validators=[DataRequired(), Length(max=160)])
    work_email = StringField("Work email", validators=[DataRequired(), Email()])
    phone_number = StringField("Phone number", validators=[DataRequired(), Length(max=40)])
    company_name = StringField("Company", validators=[DataRequired(), Length(max=160)])
    job_title = StringField("Job title", validators=[Optional(), Length(max=120)])
    team_size = SelectField("Team size", choices=[("", "—"), ("1-10", "1-10"), ("11-50", "11-50"), ("51-200", "51-200"), ("201+", "201+")], validators=[Optional()])
    hiring_goals = TextAreaField("Hiring goals", render_kw={"rows": 3})
    how_heard = StringField("How did you hear about us?", validators=[Optional(), Length(max=120)])
    submit = SubmitField("Request a demo")
