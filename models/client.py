from app import db
from models.base import EntityMixin

class Client(EntityMixin, db.Model):
    __tablename__ = 'clients'

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(50))
    company_name = db.Column(db.String(200))
    address = db.Column(db.String(200))
    notes = db.Column(db.Text)

    # Relationships
    projects = db.relationship('Project', back_populates='client')
    communications = db.relationship('CommunicationLog', back_populates='client')

    def __repr__(self):
        return f'<Client {self.name}>'
