from flask import Flask, request, jsonify, Response
from models import db
from config import Config, make_celery
from errors import NotFoundError, StorageError
from ledger import ArtifactLedger
from tracker import BatchTracker
import uuid
import io
import os
import csv
import logging
from flask_cors import CORS


def create_app(config_object=Config):
    app = Flask(__name__)
    CORS(app)  # Enable CORS for all routes
    app.config.from_object(config_object)
    logging.basicConfig(level=app.config['LOG_LEVEL'])

    # Initialize Database and Celery
    db.init_app(app)
    make_celery(app)

    # Import here so the task registers against the Celery app made above
    from tasks import process_batch

    os.makedirs(app.config['OUTPUT_DIR'], exist_ok=True)
    os.makedirs(app.config['UPLOAD_DIR'], exist_ok=True)

    with app.app_context():
        db.create_all()

    ## Batch submission
    @app.route('/submit', methods=['POST'])
    def submit():
        request_id = str(uuid.uuid4())
        csv_path = app.config['INPUT_CSV_PATH']

        file = request.files.get('file')
        if file:
            csv_path = os.path.join(app.config['UPLOAD_DIR'], f"{request_id}.csv")
            file.save(csv_path)
            logging.info(f"Saved uploaded CSV for request ID {request_id} to {csv_path}")

        try:
            BatchTracker(db.session).create(request_id)
        except StorageError as e:
            logging.error(f"Could not register request ID {request_id}: {e}")
            return jsonify({"error": "Failed to register request"}), 500

        process_batch.delay(request_id, csv_path)
        logging.info(f"Started async image processing task for request_id: {request_id}")

        return jsonify({"requestId": request_id}), 202

    @app.route('/status/<request_id>', methods=['GET'])
    def check_status(request_id):
        try:
            status = BatchTracker(db.session).get(request_id)
        except NotFoundError:
            logging.info(f"Request ID {request_id} not found")
            return jsonify({"message": "Request ID not found"}), 404

        logging.info(f"Status checked for request ID: {request_id}, current status: {status.status}")
        return jsonify({"requestId": request_id, "status": status.status}), 200

    ##  Create an Endpoint to Generate the Output CSV
    @app.route('/export/<request_id>', methods=['GET'])
    def export_csv(request_id):
        try:
            BatchTracker(db.session).get(request_id)
        except NotFoundError:
            return jsonify({"message": "Request ID not found"}), 404

        products = ArtifactLedger(db.session).list_for_batch(request_id)

        output = io.StringIO()
        writer = csv.writer(output)

        # Write CSV headers
        writer.writerow(['Serial Number', 'Product Name', 'Input Image Urls', 'Output Image Urls'])

        # Write CSV data
        for serial, product in enumerate(products, start=1):
            writer.writerow([
                serial,
                product.product_name,
                ','.join(image.original_url for image in product.images),
                ','.join(image.compressed_location for image in product.images),
            ])

        output.seek(0)
        return Response(
            output.getvalue(),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment;filename=output_{request_id}.csv"}
        )

    @app.errorhandler(StorageError)
    def handle_storage_error(e):
        logging.error(f"Storage error: {e}")
        return jsonify({"error": "Storage unavailable"}), 500

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
