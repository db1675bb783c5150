from ..extensions import db
from .base import TimestampMixin

class Organization(db.Model, TimestampMixin):
    __tablename__ = "organizations"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True)
    industry = db.Column(db.String(120))
    address = db.Column(db.String(255))
    contact_email = db.Column(db.String(254))

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name!r}>"
