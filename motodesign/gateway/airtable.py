import logging
from contextlib import asynccontextmanager

import httpx

from motodesign.config import settings
from motodesign.errors import TransportError, UpstreamError
from motodesign.gateway.base import BaseGateway
from motodesign.schemas.record import Record
from motodesign.services.normalizer import normalize_record

logger = logging.getLogger(__name__)

AVAILABLE_FORMULA = "{available} = TRUE()"

# Request-time ordering hint for the store; the query engine re-sorts on its own
SORT_PARAMS = [
    ("sort[0][field]", "featured"),
    ("sort[0][direction]", "desc"),
    ("sort[1][field]", "year"),
    ("sort[1][direction]", "desc"),
]


class RecordGateway(BaseGateway):
    """Reads motorcycle records through the ``/api/bikes`` proxy boundary."""

    SOURCE_NAME = "Airtable"

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        page_size: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        super().__init__(retry_attempts=retry_attempts, retry_delay=retry_delay)
        self.base_url = base_url or settings.PROXY_BASE_URL
        self.page_size = page_size or settings.PAGE_SIZE
        self._client = client

    @asynccontextmanager
    async def _session(self):
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT) as client:
            yield client

    def _build_params(self, offset: str | None) -> list[tuple[str, str]]:
        params = [
            ("pageSize", str(self.page_size)),
            ("filterByFormula", AVAILABLE_FORMULA),
            *SORT_PARAMS,
        ]
        if offset:
            params.append(("offset", offset))
        return params

    async def _get_json(self, client: httpx.AsyncClient, params) -> dict:
        try:
            resp = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Proxy unreachable: {e}") from e

        if not resp.is_success:
            raise UpstreamError(
                f"Airtable API Error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError(f"Malformed response body: {e}", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise UpstreamError("Malformed response body: expected an object", status_code=resp.status_code)
        return data

    async def _fetch_all_pages(self, client: httpx.AsyncClient) -> list[Record]:
        all_records = []
        offset = None
        page = 0

        while True:
            page += 1
            data = await self._get_json(client, self._build_params(offset))

            records = data.get("records")
            if not isinstance(records, list):
                raise UpstreamError("Malformed response body: missing 'records'")

            all_records.extend(normalize_record(r) for r in records)
            logger.debug(f"[{self.SOURCE_NAME}] Page {page}: {len(records)} records (total: {len(all_records)})")

            offset = data.get("offset") or None
            if not offset:
                break

        return all_records

    async def fetch_collection(self) -> list[Record]:
        async with self._session() as client:
            records = await self._retry(self._fetch_all_pages, client)
        logger.info(f"[{self.SOURCE_NAME}] Fetched {len(records)} motorcycles")
        return records

    async def fetch_record_by_id(self, record_id: str) -> Record:
        async with self._session() as client:
            try:
                data = await self._get_json(client, [("id", record_id)])
            except (UpstreamError, TransportError) as e:
                logger.error(f"[{self.SOURCE_NAME}] Error fetching motorcycle {record_id}: {e}")
                raise
        return normalize_record(data)
