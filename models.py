from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _utcnow():
    return datetime.now(timezone.utc)


class BatchState:
    PENDING = 'pending'
    COMPLETED = 'completed'


class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    # No unique constraint: persisting the same name twice yields two rows.
    product_name = db.Column(db.String(255), nullable=False, index=True)
    batch_id = db.Column(db.String(36), index=True)
    images = db.relationship(
        'ProductImage',
        backref='product',
        order_by='ProductImage.position',
        cascade='all, delete-orphan',
        lazy=True,
    )

    def __repr__(self):
        return f"<Product {self.product_name} ({len(self.images)} images)>"


class ProductImage(db.Model):
    __tablename__ = 'product_images'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    position = db.Column(db.Integer, nullable=False)
    original_url = db.Column(db.Text, nullable=False)
    compressed_location = db.Column(db.Text, nullable=False)
    image_name = db.Column(db.String(255), nullable=False)


class RequestStatus(db.Model):
    __tablename__ = 'request_status'

    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.String(36), nullable=False, unique=True)
    status = db.Column(db.String(20), nullable=False, default=BatchState.PENDING)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    completed_at = db.Column(db.DateTime(timezone=True))
