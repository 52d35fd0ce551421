from app.data.core.user_created_base import UserCreatedBase
from app import db

class SoftwareLicense(UserCreatedBase):
    __tablename__ = 'software_licenses'
    
    name = db.Column(db.String(255), nullable=False)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendors.id'), nullable=True)
    license_key = db.Column(db.String(255), nullable=True)
    start_date = db.Column(db.Date, nullable=True)
    expiry_date = db.Column(db.Date, nullable=True)
    number_of_seats = db.Column(db.Integer, nullable=True)
    seats_used = db.Column(db.Integer, default=0)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    status = db.Column(db.String(50), default='ACTIVE')
    
    vendor = db.relationship('Vendor')
    
    def __repr__(self):
        return f'<SoftwareLicense {self.name}>'
