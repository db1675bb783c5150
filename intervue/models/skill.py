from ..extensions import db
from .base import TimestampMixin

class Skill(db.Model, TimestampMixin):
    __tablename__ = "skills"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False, unique=True)
    category = db.Column(db.String(80), nullable=False, default="General")
