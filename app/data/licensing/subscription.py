from app.data.core.user_created_base import UserCreatedBase
from app import db

class Subscription(UserCreatedBase):
    __tablename__ = 'subscriptions'
    
    name = db.Column(db.String(255), nullable=False)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendors.id'), nullable=True)
    plan = db.Column(db.String(100), nullable=True)
    start_date = db.Column(db.Date, nullable=True)
    expiry_date = db.Column(db.Date, nullable=True)
    renewal_date = db.Column(db.Date, nullable=True)
    cost = db.Column(db.Numeric(10, 2), nullable=True)
    billing_cycle = db.Column(db.String(20), nullable=True)  # monthly / yearly
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    status = db.Column(db.String(50), default='ACTIVE')
    auto_renewal = db.Column(db.Boolean, default=False)
    
    vendor = db.relationship('Vendor')
    
    def __repr__(self):
        return f'<Subscription {self.name}>'
