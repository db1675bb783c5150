from dataclasses import dataclass, field
from numbers import Real
from typing import List, Optional

from ..errors import ValidationError
from ..extensions import db
from .base import TimestampMixin, StatusEnum


class InterviewStatus(StatusEnum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELED = "Canceled"


FEEDBACK_RATING_MIN = 1
FEEDBACK_RATING_MAX = 5


def _string_list(value, name):
    if value is None:
        return []
    if isinstance(value, str):
        value = [s for s in value.splitlines()]
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{name} must be a list of strings", field=name)
    out = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(f"{name} must be a list of strings", field=name)
        item = item.strip()
        if item:
            out.append(item)
    return out


@dataclass(frozen=True)
class Feedback:
    """Structured interview feedback, validated before it is persisted."""

    rating: float
    comments: str
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendation: Optional[str] = None

    @classmethod
    def parse(cls, data):
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise ValidationError("Feedback must be an object", field="feedback")

        rating = data.get("rating")
        if rating is None or rating == "":
            raise ValidationError("A rating is required", field="rating")
        if isinstance(rating, str):
            try:
                rating = float(rating)
            except ValueError:
                raise ValidationError("Rating must be a number", field="rating")
        if isinstance(rating, bool) or not isinstance(rating, Real):
            raise ValidationError("Rating must be a number", field="rating")
        if not FEEDBACK_RATING_MIN <= rating <= FEEDBACK_RATING_MAX:
            raise ValidationError(
                f"Rating must be between {FEEDBACK_RATING_MIN} and {FEEDBACK_RATING_MAX}", field="rating")

        comments = data.get("comments")
        if not isinstance(comments, str) or not comments.strip():
            raise ValidationError("Comments are required", field="comments")

        recommendation = data.get("recommendation")
        if recommendation is not None and not isinstance(recommendation, str):
            raise ValidationError("Recommendation must be text", field="recommendation")

        return cls(
            rating=rating,
            comments=comments.strip(),
            strengths=_string_list(data.get("strengths"), "strengths"),
            weaknesses=_string_list(data.get("weaknesses"), "weaknesses"),
            recommendation=(recommendation or "").strip() or None,
        )

    def to_dict(self):
        out = {"rating": self.rating, "comments": self.comments}
        if self.strengths:
            out["strengths"] = list(self.strengths)
        if self.weaknesses:
            out["weaknesses"] = list(self.weaknesses)
        if self.recommendation:
            out["recommendation"] = self.recommendation
        return out


class Interview(db.Model, TimestampMixin):
    __tablename__ = "interviews"

    id = db.Column(db.Integer, primary_key=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    interviewer_id = db.Column(db.Integer, db.ForeignKey("interviewers.id"), nullable=False, index=True)
    requirement_id = db.Column(db.Integer, db.ForeignKey("requirements.id"), nullable=False, index=True)

    scheduled_at = db.Column(db.DateTime, nullable=False, index=True)  # naive UTC
    status = db.Column(db.String(20), nullable=False, default=InterviewStatus.SCHEDULED.value, index=True)
    # present iff status == Completed; written only through Feedback.to_dict()
    feedback = db.Column(db.JSON)
    version_id = db.Column(db.Integer, nullable=False)

    candidate = db.relationship("Candidate")
    interviewer = db.relationship("Interviewer")
    requirement = db.relationship("Requirement")

    __mapper_args__ = {"version_id_col": version_id}

    @property
    def feedback_obj(self):
        return Feedback.parse(self.feedback) if self.feedback else None

    def __repr__(self) -> str:
        return f"<Interview id={self.id} status={self.status} scheduled_at={self.scheduled_at}>"
