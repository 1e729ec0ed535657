"""
Tests for the store_locations persistence gateway against in-memory SQLite.
"""
import unittest
import uuid
from datetime import datetime, timedelta, timezone

from sqlmodel import Session, select

from store_locator.database import build_engine, create_db_and_tables
from store_locator.exception import BackendError
from store_locator.models import StoreLocation, StoreLocationRecord
from store_locator.services import EditorController, LocationGateway


def as_utc(value):
    # SQLite may hand timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TestLocationGateway(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.engine = build_engine("sqlite://")
        create_db_and_tables(self.engine)
        self.gateway = LocationGateway(self.engine)

    def tearDown(self):
        self.engine.dispose()

    def seed(self, name, created_at, **fields):
        with Session(self.engine) as session:
            row = StoreLocation(name=name, address=f"{name} Road", created_at=created_at, **fields)
            session.add(row)
            session.commit()
            session.refresh(row)
            return row.id

    def rows(self):
        with Session(self.engine) as session:
            return session.exec(select(StoreLocation)).all()

    async def test_fetch_all_newest_first(self):
        now = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
        self.seed("Oldest", now - timedelta(days=2))
        self.seed("Newest", now)
        self.seed("Middle", now - timedelta(days=1))

        records = await self.gateway.fetch_all()

        self.assertEqual([r.name for r in records], ["Newest", "Middle", "Oldest"])
        self.assertTrue(all(isinstance(r, StoreLocationRecord) for r in records))
        self.assertTrue(all(r.id is not None for r in records))

    async def test_fetch_all_empty(self):
        self.assertEqual(await self.gateway.fetch_all(), [])

    async def test_upsert_without_id_inserts(self):
        record = StoreLocationRecord(name="Karen", address="Karen Road", phone="", latitude=-1.32)

        saved = await self.gateway.upsert(record)

        self.assertIsNotNone(saved.id)
        self.assertIsNotNone(saved.created_at)
        self.assertIsNotNone(saved.updated_at)
        rows = self.rows()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].name, "Karen")
        self.assertEqual(rows[0].latitude, -1.32)
        self.assertIsNone(rows[0].longitude)
        self.assertTrue(rows[0].is_active)

    async def test_upsert_with_id_updates_every_field(self):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        location_id = self.seed("Old name", created, updated_at=created)
        record = StoreLocationRecord(
            id=location_id,
            name="New name",
            address="New address",
            phone="+254 711 111111",
            store_type="Authorized Dealer",
            latitude=-1.29,
            longitude=36.82,
            is_active=False,
        )

        saved = await self.gateway.upsert(record)

        rows = self.rows()
        self.assertEqual(len(rows), 1)
        row = rows[0]
        self.assertEqual(row.id, location_id)
        self.assertEqual(row.name, "New name")
        self.assertEqual(row.address, "New address")
        self.assertEqual(row.phone, "+254 711 111111")
        self.assertEqual(row.store_type, "Authorized Dealer")
        self.assertEqual((row.latitude, row.longitude), (-1.29, 36.82))
        self.assertFalse(row.is_active)
        self.assertEqual(as_utc(row.created_at), created)
        self.assertGreater(as_utc(row.updated_at), created)
        self.assertEqual(saved.id, location_id)

    async def test_upsert_missing_row_raises(self):
        record = StoreLocationRecord(id=uuid.uuid4(), name="Ghost")
        with self.assertRaises(BackendError):
            await self.gateway.upsert(record)
        self.assertEqual(self.rows(), [])

    async def test_delete_existing(self):
        location_id = self.seed("Doomed", datetime(2024, 1, 1, tzinfo=timezone.utc))

        deleted = await self.gateway.delete(location_id)

        self.assertTrue(deleted)
        self.assertEqual(self.rows(), [])

    async def test_delete_missing_is_noop(self):
        self.seed("Keeper", datetime(2024, 1, 1, tzinfo=timezone.utc))

        deleted = await self.gateway.delete(uuid.uuid4())

        self.assertFalse(deleted)
        self.assertEqual(len(self.rows()), 1)

    async def test_database_failure_becomes_backend_error(self):
        broken = LocationGateway(build_engine("sqlite://"))  # no tables
        with self.assertRaises(BackendError):
            await broken.fetch_all()
        with self.assertRaises(BackendError):
            await broken.upsert(StoreLocationRecord(name="x"))
        with self.assertRaises(BackendError):
            await broken.delete(uuid.uuid4())

    async def test_out_of_range_row_becomes_backend_error(self):
        self.seed("Far north", datetime(2024, 1, 1, tzinfo=timezone.utc), latitude=95.0)

        with self.assertRaises(BackendError):
            await self.gateway.fetch_all()

    async def test_editor_load_reports_out_of_range_row(self):
        self.seed("Far north", datetime(2024, 1, 1, tzinfo=timezone.utc), latitude=95.0)
        editor = EditorController(self.gateway, geocoder=None)

        result = await editor.load()

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, BackendError)
        self.assertEqual(len(editor.working_set), 0)


if __name__ == "__main__":
    unittest.main()
