from ..extensions import db
from .base import TimestampMixin, StatusEnum


class InterviewerStatus(StatusEnum):
    ACTIVE = "Active"
    BUSY = "Busy"
    ON_LEAVE = "On Leave"
    INACTIVE = "Inactive"


class Interviewer(db.Model, TimestampMixin):
    __tablename__ = "interviewers"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True)
    organization_id = db.Column(db.Integer, db.ForeignKey("organizations.id"), index=True)
    name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    skills = db.Column(db.JSON)
    status = db.Column(db.String(20), nullable=False, default=InterviewerStatus.ACTIVE.value)
    max_capacity = db.Column(db.Integer)  # interviews per week, informational

    def __repr__(self) -> str:
        return f"<Interviewer id={self.id} name={self.name!r}>"
