import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Request, Response

from motodesign.errors import FetchError
from motodesign.gateway.airtable import RecordGateway
from motodesign.gateway.base import BaseGateway
from motodesign.schemas.listing import (
    FeaturedResponse,
    FilterOptions,
    GalleryImage,
    ListingCard,
    ListingDetailResponse,
    ListingsResponse,
    SpecRow,
)
from motodesign.schemas.record import Record
from motodesign.services.formatting import (
    condition_label,
    display_title,
    format_mileage,
    format_price,
    primary_image,
    resolve_language,
    thumbnail,
)
from motodesign.services.query_engine import (
    active_filter_count,
    apply_criteria,
    criteria_from_query,
    criteria_to_query,
    filter_options,
    pick_featured,
    resolve_related,
    results_summary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/listings", tags=["listings"])

LANGUAGE_COOKIE = "site-language"
LOAD_ERROR = "Failed to load motorcycles. Please try again later."


def get_gateway() -> BaseGateway:
    return RecordGateway()


def get_language(
    response: Response,
    lang: str | None = Query(None),
    site_language: str | None = Cookie(None, alias=LANGUAGE_COOKIE),
) -> str:
    """Explicit ``lang`` wins and is persisted; otherwise the cookie, then the default."""
    if lang:
        resolved = resolve_language(lang)
        response.set_cookie(LANGUAGE_COOKIE, resolved, max_age=365 * 24 * 3600, samesite="lax")
        return resolved
    return resolve_language(site_language)


def build_card(record: Record, lang: str) -> ListingCard:
    return ListingCard(
        id=record.id,
        title=display_title(record, lang),
        brand=record.brand,
        model=record.model,
        year=record.year,
        category=record.category,
        condition=record.condition,
        condition_label=condition_label(record.condition, lang),
        price=record.price,
        price_display=format_price(record.price, lang),
        mileage_km=record.mileage_km,
        mileage_display=format_mileage(record.mileage_km, lang),
        engine_cc=record.engine_cc,
        featured=record.featured,
        image=primary_image(record),
        thumbnail=thumbnail(record),
        url=f"listing?id={record.id}",
    )


def build_specs(record: Record, lang: str) -> list[SpecRow]:
    return [
        SpecRow(key="brand", value=record.brand),
        SpecRow(key="model", value=record.model),
        SpecRow(key="year", value=str(record.year)),
        SpecRow(key="category", value=record.category),
        SpecRow(key="condition", value=condition_label(record.condition, lang)),
        SpecRow(key="engine", value=f"{record.engine_cc}cc"),
        SpecRow(key="mileage", value=format_mileage(record.mileage_km, lang)),
        SpecRow(key="color", value=record.color or "-"),
        SpecRow(key="price", value=format_price(record.price, lang)),
    ]


async def _load_collection(gateway: BaseGateway) -> list[Record]:
    try:
        return await gateway.fetch_collection()
    except FetchError as e:
        logger.error(f"Failed to load listings: {e}")
        raise HTTPException(status_code=502, detail=LOAD_ERROR)


@router.get("", response_model=ListingsResponse)
async def list_listings(
    request: Request,
    lang: str = Depends(get_language),
    gateway: BaseGateway = Depends(get_gateway),
):
    collection = await _load_collection(gateway)

    criteria = criteria_from_query(request.query_params)
    results = apply_criteria(collection, criteria, lang)

    return ListingsResponse(
        lang=lang,
        total=len(collection),
        shown=len(results),
        summary=results_summary(len(results), len(collection), lang),
        sort=criteria.sort.value,
        active_filters=active_filter_count(criteria),
        query=urlencode(criteria_to_query(criteria)),
        options=FilterOptions(**filter_options(collection)),
        listings=[build_card(r, lang) for r in results],
    )


@router.get("/featured", response_model=FeaturedResponse)
async def featured_listings(
    lang: str = Depends(get_language),
    gateway: BaseGateway = Depends(get_gateway),
):
    collection = await _load_collection(gateway)
    return FeaturedResponse(
        lang=lang,
        listings=[build_card(r, lang) for r in pick_featured(collection)],
    )


@router.get("/{record_id}", response_model=ListingDetailResponse)
async def listing_detail(
    record_id: str,
    lang: str = Depends(get_language),
    gateway: BaseGateway = Depends(get_gateway),
):
    try:
        record = await gateway.fetch_record_by_id(record_id)
    except FetchError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail="Listing not found")
        raise HTTPException(status_code=502, detail=LOAD_ERROR)

    collection: list[Record] = []
    if not record.related_listings:
        try:
            collection = await gateway.fetch_collection()
        except FetchError as e:
            logger.error(f"Failed to load related motorcycles: {e}")

    related = await resolve_related(record, collection, gateway.fetch_record_by_id)

    images = [
        GalleryImage(url=img.url, thumbnail=img.thumbnail or img.url, width=img.width, height=img.height)
        for img in record.images
    ] or [GalleryImage(url=primary_image(record), thumbnail=primary_image(record))]

    return ListingDetailResponse(
        lang=lang,
        id=record.id,
        title=display_title(record, lang),
        model=record.model,
        description_en=record.description_en,
        description_gr=record.description_gr or record.description_en,
        price_display=format_price(record.price, lang),
        condition_label=condition_label(record.condition, lang),
        featured=record.featured,
        images=images,
        specs=build_specs(record, lang),
        related=[build_card(r, lang) for r in related],
    )
