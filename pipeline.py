"""Per-row image ingestion.

Rows are read lazily from the input CSV. For each row every image URL is
downloaded and compressed in order, the successes are saved as one product,
and once the rows run out the batch is marked completed. Rows and URLs run
strictly one after another, so the completion always lands after the last
product write.
"""
import logging
import os
import re
from typing import List, NamedTuple

import pandas as pd

from errors import FetchError, IngestionError, InputFileError, StorageError, TranscodeError
from fetcher import fetch as fetch_image
from models import Product, ProductImage
from transcoder import DEFAULT_QUALITY, transcode as transcode_image

PRODUCT_NAME_COLUMN = 'Product Name'
IMAGE_URLS_COLUMN = 'Input Image Urls'

_WHITESPACE = re.compile(r'\s')


class Row(NamedTuple):
    product_name: str
    image_urls: List[str]


def sanitize_product_name(name):
    return _WHITESPACE.sub('_', name)


def read_rows(path, chunksize=100):
    """Yield a Row per CSV record without loading the whole file."""
    try:
        reader = pd.read_csv(
            path,
            chunksize=chunksize,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
        for chunk in reader:
            missing = [c for c in (PRODUCT_NAME_COLUMN, IMAGE_URLS_COLUMN) if c not in chunk.columns]
            if missing:
                raise InputFileError(f"{path} is missing column(s): {', '.join(missing)}")
            for name, urls in zip(chunk[PRODUCT_NAME_COLUMN], chunk[IMAGE_URLS_COLUMN]):
                yield Row(product_name=name, image_urls=[u.strip() for u in urls.split(',')])
    except pd.errors.EmptyDataError:
        logging.warning(f"The input CSV {path} is empty")
    except (OSError, pd.errors.ParserError) as e:
        raise InputFileError(f"Could not read {path}: {e}") from e


class IngestionPipeline:
    def __init__(self, ledger, tracker, output_dir, fetch=fetch_image,
                 transcode=transcode_image, quality=DEFAULT_QUALITY):
        self.ledger = ledger
        self.tracker = tracker
        self.output_dir = output_dir
        self.fetch = fetch
        self.transcode = transcode
        self.quality = quality

    def run(self, rows, batch_id):
        processed = 0
        try:
            for row in rows:
                try:
                    self.process_row(row, batch_id)
                except Exception as e:
                    logging.exception(f"Unexpected error on product {row.product_name} for request ID {batch_id}: {e}")
                processed += 1
        except InputFileError as e:
            logging.error(f"Stopped reading input for request ID {batch_id}: {e}")
        finally:
            logging.info(f"CSV file processing completed for request ID: {batch_id} ({processed} rows)")
            try:
                self.tracker.complete(batch_id)
            except IngestionError as e:
                logging.error(f"Could not mark request ID {batch_id} as completed: {e}")

    def process_row(self, row, batch_id=None):
        """Fetch and compress every image of one row and persist the result.

        Returns the saved Product, or None when no image survived or the save
        failed.
        """
        product_name = sanitize_product_name(row.product_name)
        logging.info(f"Processing product: {product_name} with request ID: {batch_id}")

        images = []
        for index, url in enumerate(row.image_urls):
            if not url:
                logging.warning(f"Skipping empty URL #{index + 1} for product {product_name}")
                continue

            input_name = f"{product_name}_image{index + 1}.jpg"
            output_name = f"{product_name}_image{index + 1}_compressed.jpg"
            input_path = os.path.join(self.output_dir, input_name)
            output_path = os.path.join(self.output_dir, output_name)

            try:
                self.fetch(url, input_path)
                self.transcode(input_path, output_path, quality=self.quality)
            except (FetchError, TranscodeError) as e:
                logging.error(f"Error processing image from URL: {url} - {e}")
                continue

            images.append(ProductImage(
                position=len(images),
                original_url=url,
                compressed_location=output_path,
                image_name=input_name,
            ))

        if not images:
            logging.warning(f"No images processed for product {product_name}, nothing saved")
            return None

        product = Product(product_name=product_name, batch_id=batch_id, images=images)
        try:
            return self.ledger.persist(product)
        except StorageError as e:
            logging.error(f"Dropping product {product_name} for request ID {batch_id}: {e}")
            return None
