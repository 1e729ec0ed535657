import uuid
from typing import List

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from store_locator.database import get_read_session_context, get_write_session_context
from store_locator.exception import BackendError
from store_locator.logger import logging
from store_locator.models import StoreLocation, StoreLocationRecord, utcnow


class LocationGateway:
    """Reads and writes the store_locations table.

    Each public method is a coroutine; the blocking session work runs in the
    threadpool so the calling action only suspends.
    """

    def __init__(self, engine=None):
        # None means the application's default engine
        self.engine = engine

    async def fetch_all(self) -> List[StoreLocationRecord]:
        return await run_in_threadpool(self._fetch_all)

    async def upsert(self, record: StoreLocationRecord) -> StoreLocationRecord:
        return await run_in_threadpool(self._upsert, record)

    async def delete(self, location_id: uuid.UUID) -> bool:
        return await run_in_threadpool(self._delete, location_id)

    def _fetch_all(self) -> List[StoreLocationRecord]:
        try:
            with get_read_session_context(self.engine) as session:
                rows = session.exec(
                    select(StoreLocation).order_by(StoreLocation.created_at.desc())
                ).all()
                return [self._to_record(row) for row in rows]
        except SQLAlchemyError as e:
            logging.error(f"Failed to fetch store locations: {e}")
            raise BackendError("Failed to load store locations", detail=str(e))

    def _to_record(self, row: StoreLocation) -> StoreLocationRecord:
        try:
            return StoreLocationRecord.model_validate(row.model_dump())
        except PydanticValidationError as e:
            logging.error(f"Store location {row.id} holds invalid data: {e}")
            raise BackendError(f"Store location {row.id} holds invalid data", detail=str(e))

    def _upsert(self, record: StoreLocationRecord) -> StoreLocationRecord:
        payload = record.payload()
        payload["updated_at"] = utcnow()
        try:
            with get_write_session_context(self.engine) as session:
                if record.id is None:
                    row = StoreLocation(**payload)
                    session.add(row)
                    session.flush()
                    logging.info(f"Created store location {row.id}")
                else:
                    row = session.get(StoreLocation, record.id)
                    if not row:
                        raise BackendError(f"Store location {record.id} no longer exists")
                    for key, value in payload.items():
                        setattr(row, key, value)
                    session.add(row)
                    session.flush()
                    logging.info(f"Updated store location {row.id}")
                session.refresh(row)
                return self._to_record(row)
        except BackendError as e:
            logging.error(f"Failed to save store location {record.id}: {e}")
            raise
        except IntegrityError as e:
            logging.error(f"Integrity error saving store location {record.id}: {e}")
            raise BackendError("Store location rejected - constraint violation", detail=str(e))
        except SQLAlchemyError as e:
            logging.error(f"Failed to save store location {record.id}: {e}")
            raise BackendError("Failed to save store location", detail=str(e))

    def _delete(self, location_id: uuid.UUID) -> bool:
        try:
            with get_write_session_context(self.engine) as session:
                row = session.get(StoreLocation, location_id)
                if not row:
                    logging.debug(f"Store location {location_id} already gone, nothing to delete")
                    return False
                session.delete(row)
                logging.info(f"Deleted store location {location_id}")
                return True
        except SQLAlchemyError as e:
            logging.error(f"Failed to delete store location {location_id}: {e}")
            raise BackendError("Failed to delete location", detail=str(e))
