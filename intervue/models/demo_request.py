from ..extensions import db
from .base import TimestampMixin

class DemoRequest(db.Model, TimestampMixin):
    __tablename__ = "demo_requests"
    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(160), nullable=False)
    work_email = db.Column(db.String(254), nullable=False)
    phone_number = db.Column(db.String(40), nullable=False)
    company_name = db.Column(db.String(160), nullable=False)
    job_title = db.Column(db.String(120))
    team_size = db.Column(db.String(40))
    hiring_goals = db.Column(db.Text)
    how_heard = db.Column(db.String(120))
