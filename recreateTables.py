import logging

from app import create_app
from models import db


def recreate_tables(app):
    """Drop every table and create the schema again. All data is lost."""
    with app.app_context():
        db.drop_all()
        db.create_all()
    logging.info(f"Recreated tables: {', '.join(sorted(db.metadata.tables))}")


if __name__ == "__main__":
    recreate_tables(create_app())
