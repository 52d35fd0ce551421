from app import db
from datetime import datetime
from app.buisness.core.data_insertion_mixin import DataInsertionMixin

class AssetIssue(DataInsertionMixin, db.Model):
    """A reported problem against an asset, tracked through a closed set of statuses"""
    __tablename__ = 'asset_issues'
    
    id = db.Column(db.Integer, primary_key=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False)
    reported_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    issue_type = db.Column(db.String(50), nullable=False)
    severity = db.Column(db.String(20), nullable=False)
    issue_description = db.Column(db.Text, nullable=False)
    resolution_notes = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(50), default='OPEN', nullable=False)
    
    # Audit timestamps
    reported_at = db.Column(db.DateTime, default=datetime.now, nullable=False)
    resolved_at = db.Column(db.DateTime, nullable=True)
    closed_at = db.Column(db.DateTime, nullable=True)
    
    asset = db.relationship('Asset')
    reported_by = db.relationship('User', foreign_keys=[reported_by_id])
    assigned_to = db.relationship('User', foreign_keys=[assigned_to_id])
    
    def __repr__(self):
        return f'<AssetIssue {self.id} {self.issue_type} [{self.status}]>'
