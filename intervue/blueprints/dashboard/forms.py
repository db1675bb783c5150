from flask_wtf import FlaskForm
from wtforms import (StringField, TextAreaField, SelectField, SubmitField, IntegerField,
                     DecimalField, DateTimeLocalField, HiddenField)
from wtforms.validators import DataRequired, Email, NumberRange, Optional, URL

from ...models.candidate import CandidateStatus
from ...models.interview import InterviewStatus
from ...models.requirement import RequirementStatus
from ...services.interviews import STATUS_UPDATE_TARGETS


class RequirementForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired()])
    description = TextAreaField("Description", render_kw={"rows": 4})
    skills = StringField("Skills (comma separated)")
    years_of_experience = IntegerField("Years of experience", default=0, validators=[NumberRange(min=0)])
    number_of_positions = IntegerField("Positions", default=1, validators=[NumberRange(min=1)])
    price_per_interview = DecimalField("Price per interview", places=2, default=0, validators=[NumberRange(min=0)])
    # only shown to staff; organization actors raise for their own company
    organization_id = SelectField("Company", choices=[], validators=[Optional()], validate_choice=False)
    submit = SubmitField("Save")


class CloseRequirementForm(FlaskForm):
    status = SelectField("Close as", choices=[(RequirementStatus.FULFILLED.value, RequirementStatus.FULFILLED.value),
                                              (RequirementStatus.CANCELED.value, RequirementStatus.CANCELED.value)])
    submit = SubmitField("Close")


class ScheduleInterviewForm(FlaskForm):
    candidate_id = SelectField("Candidate", choices=[], validators=[DataRequired()], validate_choice=False)
    interviewer_id = SelectField("Interviewer", choices=[], validators=[DataRequired()], validate_choice=False)
    requirement_id = SelectField("Requirement", choices=[], validators=[DataRequired()], validate_choice=False)
    scheduled_at = DateTimeLocalField("Date & time (UTC)", format="%Y-%m-%dT%H:%M", validators=[DataRequired()])
    submit = SubmitField("Schedule")


class InterviewStatusForm(FlaskForm):
    status = SelectField("Status", choices=[(s.value, s.value) for s in InterviewStatus if s in STATUS_UPDATE_TARGETS])
    version = HiddenField()
    submit = SubmitField("Update")


class FeedbackForm(FlaskForm):
    rating = IntegerField("Rating (1-5)", validators=[DataRequired(), NumberRange(min=1, max=5)])
    comments = TextAreaField("Comments", validators=[DataRequired()], render_kw={"rows": 4})
    strengths = TextAreaField("Strengths (one per line)", render_kw={"rows": 3})
    weaknesses = TextAreaField("Weaknesses (one per line)", render_kw={"rows": 3})
    recommendation = SelectField("Recommendation", choices=[("", "—"), ("Strong hire", "Strong hire"),
                                                             ("Hire", "Hire"), ("No hire", "No hire")],
                                 validators=[Optional()])
    version = HiddenField()
    submit = SubmitField("Submit feedback")

    def payload(self):
        lines = lambda text: [s.strip() for s in (text or "").splitlines() if s.strip()]  # noqa: E731
        return {
            "rating": self.rating.data,
            "comments": self.comments.data,
            "strengths": lines(self.strengths.data),
            "weaknesses": lines(self.weaknesses.data),
            "recommendation": self.recommendation.data or None,
        }


class CandidateForm(FlaskForm):
    full_name = StringField("Full name", validators=[DataRequired()])
    email = StringField("Email", validators=[DataRequired(), Email()])
    resume_url = StringField("Resume URL", validators=[Optional(), URL()])
    requirement_id = SelectField("Requirement", choices=[], validators=[Optional()], validate_choice=False)
    submit = SubmitField("Add candidate")


class CandidateStatusForm(FlaskForm):
    status = SelectField("Status", choices=[(s.value, s.value) for s in CandidateStatus])
    submit = SubmitField("Update")
