from app.data.core.user_created_base import UserCreatedBase
from app import db

class MaintenanceRecord(UserCreatedBase):
    """Append-only log entry of maintenance actually performed"""
    __tablename__ = 'maintenance_records'
    
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False)
    # Plain integer: deleting a schedule leaves its records pointing at the old id
    schedule_id = db.Column(db.Integer, nullable=True)
    performed_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    maintenance_type = db.Column(db.String(100), nullable=False)
    performed_date = db.Column(db.Date, nullable=False)
    duration_hours = db.Column(db.Numeric(5, 2), nullable=True)
    cost = db.Column(db.Numeric(10, 2), nullable=True)
    description = db.Column(db.Text, nullable=True)
    parts_replaced = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(50), default='COMPLETED', nullable=False)
    
    asset = db.relationship('Asset')
    performed_by = db.relationship('User', foreign_keys=[performed_by_id])

    def __repr__(self):
        return f'<MaintenanceRecord {self.id} asset={self.asset_id} on {self.performed_date}>'
