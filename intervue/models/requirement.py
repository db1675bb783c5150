from ..extensions import db
from .base import TimestampMixin, StatusEnum


class RequirementStatus(StatusEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    FULFILLED = "Fulfilled"
    CANCELED = "Canceled"


# "Open" is what older rows and the seed data call an approved requirement
REQUIREMENT_STATUS_ALIASES = {"open": RequirementStatus.APPROVED}


class Requirement(db.Model, TimestampMixin):
    __tablename__ = "requirements"

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey("organizations.id"), nullable=False, index=True)
    raised_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    skills = db.Column(db.JSON)  # ["React","TypeScript"]
    years_of_experience = db.Column(db.Integer, nullable=False, default=0)
    number_of_positions = db.Column(db.Integer, nullable=False, default=1)
    price_per_interview = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default=RequirementStatus.PENDING.value, index=True)

    organization = db.relationship("Organization", lazy="joined")

    def __repr__(self) -> str:
        return f"<Requirement id={self.id} title={self.title!r} status={self.status}>"
