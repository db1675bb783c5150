from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SubmitField, SelectField, BooleanField, HiddenField
from wtforms.validators import DataRequired, Email, EqualTo, Length, Optional

from ...roles import SELF_REGISTER_ROLES

class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired()])
    remember = BooleanField("Remember me")
    next = HiddenField()
    submit = SubmitField("Sign in")

class RegisterForm(FlaskForm):
    full_name = StringField("Full name", validators=[DataRequired(), Length(max=160)])
    email = StringField("Email", validators=[DataRequired(), Email()])
    password = PasswordField("Password", validators=[DataRequired(), Length(min=8)])
    confirm = PasswordField("Confirm password", validators=[DataRequired(), EqualTo('password')])
    role = SelectField("I am a", choices=[(r.value, r.value.replace("_", " ").title()) for r in SELF_REGISTER_ROLES])
    # filled from the organizations table in the view
    organization_id = SelectField("Company", choices=[], validators=[Optional()], validate_choice=False)
    submit = SubmitField("Create account")
