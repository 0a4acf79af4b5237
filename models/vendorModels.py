from core.extensions import db
from core.models import utcnow, money


class Products(db.Model):
    __tablename__ = "products"
    __table_args__ = (db.Index("ix_products_vendor_id", "vendor_id"),)

    id = db.Column(db.Integer, primary_key=True)
    vendor_id = db.Column(db.Integer, db.ForeignKey("vendors.id"), nullable=False)
    name = db.Column(db.String(150), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, default=0, nullable=False)
    category = db.Column(db.String(100), default="Food")
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    vendor = db.relationship("Vendors", backref="products")

    def to_dict(self, with_vendor=False):
        data = {
            "productId": self.id,
            "vendorId": self.vendor_id,
            "name": self.name,
            "price": money(self.price),
            "stockQuantity": self.stock_quantity,
            "category": self.category,
            "description": self.description,
            "imageUrl": self.image_url,
        }
        if with_vendor:
            data["vendor"] = {"shopName": self.vendor.shop_name if self.vendor else None}
        return data
