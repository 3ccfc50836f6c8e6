"""Display helpers shared by the listings, detail and homepage views."""
from motodesign.config import settings
from motodesign.schemas.record import Record

LANGUAGES = ("en", "gr")

CONTACT_FOR_PRICE = {
    "en": "Contact for Price",
    "gr": "Επικοινωνήστε για Τιμή",
}

CONDITION_LABELS_GR = {
    "New": "Καινούργια",
    "Used": "Μεταχειρισμένη",
}


def resolve_language(value: str | None) -> str:
    """Return a supported language code, falling back to the configured default."""
    if value and value.lower() in LANGUAGES:
        return value.lower()
    return settings.DEFAULT_LANGUAGE


def _group_thousands(number: int, sep: str) -> str:
    return f"{number:,}".replace(",", sep)


def format_price(price: int | None, lang: str = "en") -> str:
    """EUR price without decimals, or the "contact for price" sentinel for 0/None."""
    if not price:
        return CONTACT_FOR_PRICE["gr" if lang == "gr" else "en"]

    amount = int(round(price))
    if lang == "gr":
        # el-GR: dot grouping, symbol after the amount
        return f"{_group_thousands(amount, '.')}\u00a0€"
    return f"€{_group_thousands(amount, ',')}"


def format_mileage(km: int, lang: str = "en") -> str:
    return f"{_group_thousands(km, '.' if lang == 'gr' else ',')} km"


def get_localized_field(record: Record, field: str, lang: str = "en") -> str:
    """Language-specific value of ``field``; falls back to English, then ""."""
    suffix = "gr" if lang == "gr" else "en"
    value = getattr(record, f"{field}_{suffix}", "") or getattr(record, f"{field}_en", "")
    return value or ""


def condition_label(condition: str, lang: str = "en") -> str:
    if lang == "gr":
        return CONDITION_LABELS_GR.get(condition, condition)
    return condition


def display_title(record: Record, lang: str = "en") -> str:
    return (
        get_localized_field(record, "title", lang)
        or record.title_en
        or record.title_gr
        or f"{record.brand} {record.model}".strip()
    )


def primary_image(record: Record) -> str:
    if record.images:
        return record.images[0].url or settings.PLACEHOLDER_IMAGE
    return settings.PLACEHOLDER_IMAGE


def thumbnail(record: Record) -> str:
    if record.images:
        return record.images[0].thumbnail or primary_image(record)
    return settings.PLACEHOLDER_IMAGE
