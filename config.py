import os
from celery import Celery, Task

# Flask Configuration
class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(24)
    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI', 'sqlite:///images.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL', 'redis://127.0.0.1:6379/0')
    CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND', 'redis://127.0.0.1:6379/0')
    CELERY_TASK_ALWAYS_EAGER = False

    # Ingestion
    INPUT_CSV_PATH = os.environ.get('INPUT_CSV_PATH', 'products.csv')
    OUTPUT_DIR = os.environ.get('OUTPUT_DIR', 'processed_images')
    UPLOAD_DIR = os.environ.get('UPLOAD_DIR', 'uploads')
    JPEG_QUALITY = int(os.environ.get('JPEG_QUALITY', 50))
    FETCH_TIMEOUT = float(os.environ.get('FETCH_TIMEOUT', 30))
    CSV_CHUNK_SIZE = int(os.environ.get('CSV_CHUNK_SIZE', 100))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    CELERY_BROKER_URL = 'memory://'
    CELERY_RESULT_BACKEND = 'cache+memory://'
    CELERY_TASK_ALWAYS_EAGER = True


# Celery Configuration
def make_celery(app):
    class ContextTask(Task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery = Celery(
        app.import_name,
        backend=app.config['CELERY_RESULT_BACKEND'],
        broker=app.config['CELERY_BROKER_URL'],
        task_cls=ContextTask,
    )
    celery.conf.update(task_always_eager=app.config['CELERY_TASK_ALWAYS_EAGER'])
    celery.set_default()
    app.extensions['celery'] = celery
    return celery
