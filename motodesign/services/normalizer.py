"""Turn raw record-store rows into canonical ``Record`` objects.

Every field is optional in the source. Missing or unusable values degrade to
the defaults below, so ``normalize_record`` never raises.
"""
import logging
from datetime import date, datetime

from motodesign.schemas.record import Image, Record

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "Yamaha"
DEFAULT_CONDITION = "New"


def _text(value) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _non_negative_int(value, default: int = 0) -> int:
    """Coerce to a non-negative int; anything falsy or unusable becomes ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    if number <= 0:
        return default
    return number


def _parse_timestamp(value) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _thumbnail_url(thumbnails, size: str) -> str:
    if not isinstance(thumbnails, dict):
        return ""
    entry = thumbnails.get(size)
    if not isinstance(entry, dict):
        return ""
    return _text(entry.get("url"))


def extract_images(attachments) -> tuple[Image, ...]:
    """Format the attachment array of the ``Images`` field."""
    if not attachments or not isinstance(attachments, list):
        return ()

    images = []
    for attachment in attachments:
        if not isinstance(attachment, dict):
            continue
        url = _text(attachment.get("url"))
        thumbnails = attachment.get("thumbnails")
        images.append(Image(
            id=_text(attachment.get("id")),
            url=url,
            filename=_text(attachment.get("filename")),
            thumbnail=_thumbnail_url(thumbnails, "large") or url,
            thumbnail_small=_thumbnail_url(thumbnails, "small") or url,
            width=_non_negative_int(attachment.get("width")),
            height=_non_negative_int(attachment.get("height")),
        ))
    return tuple(images)


def normalize_record(raw: dict, current_year: int | None = None) -> Record:
    """Normalize a raw record (``{"id", "fields", "createdTime"}``)."""
    if not isinstance(raw, dict):
        logger.debug(f"[Normalizer] Non-object record ignored: {type(raw).__name__}")
        raw = {}
    fields = raw.get("fields")
    if not isinstance(fields, dict):
        fields = {}

    if current_year is None:
        current_year = date.today().year

    title_en = _text(fields.get("title_en"))
    description_en = _text(fields.get("description_en"))

    related = fields.get("relatedListings")
    if not isinstance(related, list):
        related = []

    return Record(
        id=_text(raw.get("id")),
        title_en=title_en,
        title_gr=_text(fields.get("title_gr")) or title_en,
        brand=_text(fields.get("brand")) or DEFAULT_BRAND,
        model=_text(fields.get("model")),
        category=_text(fields.get("category")),
        condition=_text(fields.get("condition")) or DEFAULT_CONDITION,
        year=_non_negative_int(fields.get("year"), default=current_year),
        price=_non_negative_int(fields.get("price")),
        mileage_km=_non_negative_int(fields.get("mileage_km")),
        engine_cc=_non_negative_int(fields.get("engine_cc")),
        color=_text(fields.get("color")),
        description_en=description_en,
        description_gr=_text(fields.get("description_gr")) or description_en,
        images=extract_images(fields.get("Images")),
        featured=bool(fields.get("featured")),
        available=fields.get("available") is not False,
        created_at=_parse_timestamp(raw.get("createdTime")),
        related_listings=tuple(r for r in related if isinstance(r, str) and r),
    )
