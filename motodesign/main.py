import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from motodesign.config import settings
from motodesign.api.routes_bikes import router as bikes_router
from motodesign.api.routes_listings import router as listings_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(title="Motodesign", version="1.0.0")

logger = logging.getLogger(__name__)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exc()
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}\n{tb}")
    # Raw error detail stays in the logs
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


@app.get("/api/v1/health")
async def health_check():
    return {"status": "ok", "airtable_configured": bool(settings.AIRTABLE_API_KEY)}


# API routes
app.include_router(bikes_router)
app.include_router(listings_router)
