from functools import partial
import logging

from celery import shared_task
from flask import current_app

from fetcher import fetch
from ledger import ArtifactLedger
from models import db
from pipeline import IngestionPipeline, read_rows
from tracker import BatchTracker


def build_pipeline(config, session):
    return IngestionPipeline(
        ledger=ArtifactLedger(session),
        tracker=BatchTracker(session),
        output_dir=config['OUTPUT_DIR'],
        fetch=partial(fetch, timeout=config['FETCH_TIMEOUT']),
        quality=config['JPEG_QUALITY'],
    )


@shared_task(name='tasks.process_batch', ignore_result=True)
def process_batch(request_id, csv_path):
    # Runs inside the Flask app context set up by config.make_celery.
    logging.info(f"Started processing {csv_path} for request_id: {request_id}")
    config = current_app.config
    pipeline = build_pipeline(config, db.session)
    pipeline.run(read_rows(csv_path, chunksize=config['CSV_CHUNK_SIZE']), request_id)
