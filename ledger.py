import logging

from sqlalchemy.exc import SQLAlchemyError

from errors import StorageError
from models import Product


class ArtifactLedger:
    """Append-only store of processed products and their compressed images."""

    def __init__(self, session):
        self.session = session

    def persist(self, product):
        """Write ``product`` and its images in one commit.

        There is no uniqueness check on the product name, so persisting the
        same name twice leaves two records.
        """
        try:
            self.session.add(product)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logging.error(f"Failed to save product {product.product_name}: {e}")
            raise StorageError(f"Could not persist product {product.product_name}") from e

        logging.info(f"Saved product {product.product_name} to database.")
        return product

    def list_for_batch(self, batch_id):
        return (
            self.session.query(Product)
            .filter_by(batch_id=batch_id)
            .order_by(Product.id)
            .all()
        )
