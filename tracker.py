import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import NotFoundError, StorageError
from models import BatchState, RequestStatus


class BatchTracker:
    """Owns the pending -> completed lifecycle of a batch id."""

    def __init__(self, session):
        self.session = session

    def create(self, request_id):
        status = RequestStatus(request_id=request_id, status=BatchState.PENDING)
        try:
            self.session.add(status)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise StorageError(f"Request ID {request_id} already exists") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Could not create status for {request_id}") from e

        logging.info(f"New request created with ID: {request_id} and status: '{status.status}'")
        return status

    def complete(self, request_id):
        status = self.get(request_id)
        if status.status == BatchState.COMPLETED:
            logging.warning(f"Request ID {request_id} is already completed")
            return status

        status.status = BatchState.COMPLETED
        status.completed_at = datetime.now(timezone.utc)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(f"Could not complete status for {request_id}") from e

        logging.info(f"Updated status for request ID {request_id} to '{status.status}'")
        return status

    def get(self, request_id):
        try:
            status = self.session.query(RequestStatus).filter_by(request_id=request_id).first()
        except SQLAlchemyError as e:
            raise StorageError(f"Could not look up request ID {request_id}") from e

        if status is None:
            raise NotFoundError(request_id)
        return status
