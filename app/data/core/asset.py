from app.data.core.user_created_base import UserCreatedBase
from app import db

class Asset(UserCreatedBase):
    __tablename__ = 'assets'

    name = db.Column(db.String(255), nullable=False)
    serial_number = db.Column(db.String(100), unique=True, nullable=True)
    status = db.Column(db.String(50), nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey('asset_categories.id'), nullable=True)
    location_id = db.Column(db.Integer, db.ForeignKey('locations.id'), nullable=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey('vendors.id'), nullable=True)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    purchase_date = db.Column(db.Date, nullable=True)
    purchase_price = db.Column(db.Numeric(10, 2), nullable=True)
    current_value = db.Column(db.Numeric(10, 2), nullable=True)
    warranty_expiry = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships (no backrefs)
    category = db.relationship('AssetCategory')
    location = db.relationship('Location')
    vendor = db.relationship('Vendor')
    assigned_to = db.relationship('User', foreign_keys=[assigned_to_id])

    def __repr__(self):
        return f'<Asset {self.name} ({self.serial_number})>'
