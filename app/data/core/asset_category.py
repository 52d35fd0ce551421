from app.data.core.user_created_base import UserCreatedBase
from app import db

class AssetCategory(UserCreatedBase):
    __tablename__ = 'asset_categories'
    
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    
    def __repr__(self):
        return f'<AssetCategory {self.name}>'
