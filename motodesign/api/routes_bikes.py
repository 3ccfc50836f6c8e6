import logging
from urllib.parse import quote

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from motodesign.config import settings
from motodesign.errors import ConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])


def _require_api_key() -> str:
    if not settings.AIRTABLE_API_KEY:
        raise ConfigurationError("Airtable API Key not configured")
    return settings.AIRTABLE_API_KEY


def _upstream_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.REQUEST_TIMEOUT)


def build_upstream_url(record_id: str | None = None) -> str:
    table = quote(settings.AIRTABLE_TABLE_NAME, safe="")
    url = f"{settings.AIRTABLE_ENDPOINT}/{settings.AIRTABLE_BASE_ID}/{table}"
    if record_id:
        url += f"/{quote(record_id, safe='')}"
    return url


@router.get("/bikes")
async def proxy_bikes(request: Request):
    """Forward to the record store, keeping the API key server-side.

    With ``id`` a single record is fetched; otherwise every query parameter
    (filterByFormula, sort, offset, ...) is passed through verbatim. The
    upstream status and JSON body are mirrored back.
    """
    try:
        api_key = _require_api_key()
    except ConfigurationError as e:
        logger.error(f"[Proxy] {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    record_id = request.query_params.get("id")
    if record_id:
        url = build_upstream_url(record_id)
        params = None
    else:
        url = build_upstream_url()
        params = [(k, v) for k, v in request.query_params.multi_items() if k != "id"]

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    try:
        async with _upstream_client() as client:
            resp = await client.get(url, params=params, headers=headers)
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"[Proxy] Upstream call failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch data from Airtable"})

    if not resp.is_success:
        logger.warning(f"[Proxy] Airtable returned {resp.status_code} for {request.url.path}")
    return JSONResponse(status_code=resp.status_code, content=data)
