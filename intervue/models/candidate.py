from ..extensions import db
from .base import TimestampMixin, StatusEnum


class CandidateStatus(StatusEnum):
    NEW = "New"
    SHORTLISTED = "Shortlisted"
    INTERVIEWED = "Interviewed"
    HIRED = "Hired"
    REJECTED = "Rejected"


class Candidate(db.Model, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True)
    full_name = db.Column(db.String(160), nullable=False)
    email = db.Column(db.String(254), unique=True, nullable=False, index=True)
    resume_url = db.Column(db.String(512))
    status = db.Column(db.String(20), nullable=False, default=CandidateStatus.NEW.value, index=True)
    # optional, cleared when the requirement is deleted
    requirement_id = db.Column(db.Integer, db.ForeignKey("requirements.id", ondelete="SET NULL"))

    requirement = db.relationship("Requirement")

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} full_name={self.full_name!r}>"
