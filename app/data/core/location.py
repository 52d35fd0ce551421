from app.data.core.user_created_base import UserCreatedBase
from app import db

class Location(UserCreatedBase):
    __tablename__ = 'locations'
    
    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.Text, nullable=True)
    
    def __repr__(self):
        return f'<Location {self.name}>'
