from app.data.core.user_created_base import UserCreatedBase
from app import db

class Vendor(UserCreatedBase):
    __tablename__ = 'vendors'
    
    name = db.Column(db.String(255), nullable=False)
    contact_email = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    
    def __repr__(self):
        return f'<Vendor {self.name}>'
