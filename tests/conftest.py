"""Shared fixtures: raw record builders and an in-memory gateway."""

import pytest

from motodesign.errors import UpstreamError
from motodesign.gateway.base import BaseGateway
from motodesign.services.normalizer import normalize_record


def make_raw(record_id, created=None, **fields):
    raw = {"id": record_id, "fields": fields}
    if created:
        raw["createdTime"] = created
    return raw


def make_record(record_id, created=None, **fields):
    fields.setdefault("title_en", f"Bike {record_id}")
    fields.setdefault("year", 2022)
    return normalize_record(make_raw(record_id, created, **fields), current_year=2024)


class FakeGateway(BaseGateway):
    """Serves a fixed collection; ids listed in ``missing`` raise a 404."""

    SOURCE_NAME = "Fake"

    def __init__(self, records, extra=None, missing=(), fail_collection=False):
        super().__init__(retry_attempts=1, retry_delay=0)
        self.records = list(records)
        self.by_id = {r.id: r for r in self.records}
        self.by_id.update({r.id: r for r in (extra or [])})
        self.missing = set(missing)
        self.fail_collection = fail_collection
        self.collection_calls = 0
        self.id_calls = []

    async def fetch_collection(self):
        self.collection_calls += 1
        if self.fail_collection:
            raise UpstreamError("Airtable API Error: 503 Service Unavailable", status_code=503)
        return list(self.records)

    async def fetch_record_by_id(self, record_id):
        self.id_calls.append(record_id)
        if record_id in self.missing or record_id not in self.by_id:
            raise UpstreamError("Airtable API Error: 404 Not Found", status_code=404)
        return self.by_id[record_id]


@pytest.fixture
def sample_records():
    return [
        make_record("rec1", "2024-03-01T10:00:00.000Z", brand="Yamaha", model="MT-07",
                    category="Naked", condition="Used", year=2021, price=6500, engine_cc=689,
                    featured=True),
        make_record("rec2", "2024-05-01T10:00:00.000Z", brand="Yamaha", model="NMAX",
                    category="Scooter", condition="New", year=2024, price=3900, engine_cc=125,
                    title_gr="Σκούτερ NMAX"),
        make_record("rec3", None, brand="Honda", model="PCX",
                    category="Scooter", condition="Used", year=2019, price=2800, engine_cc=125),
        make_record("rec4", "2024-01-15T10:00:00.000Z", brand="Yamaha", model="Tracer 9",
                    category="Touring", condition="New", year=2024, price=0, engine_cc=890,
                    featured=True),
        make_record("rec5", "2023-11-20T10:00:00.000Z", brand="Kawasaki", model="Z650",
                    category="Naked", condition="Used", year=2020, price=5200, engine_cc=649),
    ]
