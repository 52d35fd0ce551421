from app.data.core.user_created_base import UserCreatedBase
from app import db
from sqlalchemy import CheckConstraint

class MaintenanceSchedule(UserCreatedBase):
    __tablename__ = 'maintenance_schedules'
    __table_args__ = (
        CheckConstraint('frequency_days >= 1 AND frequency_days <= 3650', name='ck_schedule_frequency_days'),
    )
    
    #header fields
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id', ondelete='CASCADE'), nullable=False)
    maintenance_type_id = db.Column(db.Integer, db.ForeignKey('maintenance_types.id'), nullable=True)
    maintenance_type = db.Column(db.String(100), nullable=True)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    priority = db.Column(db.String(20), nullable=True)
    estimated_cost = db.Column(db.Numeric(10, 2), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    #recurrence fields
    frequency_days = db.Column(db.Integer, nullable=False)
    last_performed = db.Column(db.Date, nullable=True)
    next_due = db.Column(db.Date, nullable=False)
    
    asset = db.relationship('Asset')
    maintenance_type_ref = db.relationship('MaintenanceType')
    assigned_to = db.relationship('User', foreign_keys=[assigned_to_id])

    def __repr__(self):
        return f'<MaintenanceSchedule {self.id} asset={self.asset_id} next_due={self.next_due}>'
