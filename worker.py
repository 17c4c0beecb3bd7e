# Entry point for the Celery worker: celery -A worker worker --loglevel=info
from app import create_app

flask_app = create_app()
celery = flask_app.extensions['celery']
