"""Filter, sort and serialize views over the in-memory collection.

Everything here is a pure function of its inputs: the collection is never
mutated and no state survives between calls.
"""
import logging
from datetime import timezone
from typing import Awaitable, Callable, Iterable

from motodesign.errors import FetchError
from motodesign.schemas.criteria import Criteria, SortKey
from motodesign.schemas.record import Record
from motodesign.services.formatting import get_localized_field

logger = logging.getLogger(__name__)

RELATED_FALLBACK_LIMIT = 3
FEATURED_LIMIT = 3


# --- Filtering ---

def _matches_search(record: Record, query: str, lang: str) -> bool:
    haystacks = (
        get_localized_field(record, "title", lang),
        record.model or "",
        record.brand or "",
    )
    return any(query in h.lower() for h in haystacks)


def matches(record: Record, criteria: Criteria, lang: str = "en") -> bool:
    """True when ``record`` satisfies every active criterion."""
    if criteria.brands and record.brand not in criteria.brands:
        return False
    if criteria.categories and record.category not in criteria.categories:
        return False
    if criteria.condition != "all" and record.condition != criteria.condition:
        return False

    if criteria.year_min is not None and record.year < criteria.year_min:
        return False
    if criteria.year_max is not None and record.year > criteria.year_max:
        return False
    if criteria.price_min is not None and record.price < criteria.price_min:
        return False
    if criteria.price_max is not None and record.price > criteria.price_max:
        return False

    if criteria.engine_cc is not None and record.engine_cc != criteria.engine_cc:
        return False

    query = criteria.search.strip().lower()
    if query and not _matches_search(record, query, lang):
        return False

    return True


# --- Sorting ---

def _created_key(record: Record) -> float:
    # Missing timestamps sort as the earliest possible
    if record.created_at is None:
        return float("-inf")
    created = record.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.timestamp()


_SORTS = {
    SortKey.NEWEST: (_created_key, True),
    SortKey.PRICE_ASC: (lambda r: r.price, False),
    SortKey.PRICE_DESC: (lambda r: r.price, True),
    SortKey.YEAR_ASC: (lambda r: r.year, False),
    SortKey.YEAR_DESC: (lambda r: r.year, True),
}


def sort_records(records: Iterable[Record], sort_key: SortKey = SortKey.NEWEST) -> list[Record]:
    """Stable sort; records with equal keys keep their input order."""
    key, reverse = _SORTS.get(sort_key, _SORTS[SortKey.NEWEST])
    return sorted(records, key=key, reverse=reverse)


def apply_criteria(collection: Iterable[Record], criteria: Criteria, lang: str = "en") -> list[Record]:
    filtered = [r for r in collection if matches(r, criteria, lang)]
    return sort_records(filtered, criteria.sort)


def active_filter_count(criteria: Criteria) -> int:
    """Number of independently active criteria, for the filter badge."""
    count = len(criteria.brands) + len(criteria.categories)
    if criteria.condition != "all":
        count += 1
    for bound in (criteria.year_min, criteria.year_max, criteria.price_min, criteria.price_max):
        if bound is not None:
            count += 1
    if criteria.engine_cc is not None:
        count += 1
    if criteria.search.strip():
        count += 1
    return count


# --- Query-string state ---

def _split_multi(value: str | None) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(v.strip() for v in value.split(",") if v.strip())


def _parse_int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"[QueryEngine] Ignoring non-numeric filter value: {value!r}")
        return None


def criteria_to_query(criteria: Criteria) -> dict[str, str]:
    """One query parameter per active criterion, ready for ``urlencode``."""
    params = {}
    if criteria.brands:
        params["brand"] = ",".join(sorted(criteria.brands))
    if criteria.categories:
        params["category"] = ",".join(sorted(criteria.categories))
    if criteria.condition != "all":
        params["condition"] = criteria.condition
    if criteria.year_min is not None:
        params["yearMin"] = str(criteria.year_min)
    if criteria.year_max is not None:
        params["yearMax"] = str(criteria.year_max)
    if criteria.price_min is not None:
        params["priceMin"] = str(criteria.price_min)
    if criteria.price_max is not None:
        params["priceMax"] = str(criteria.price_max)
    if criteria.engine_cc is not None:
        params["engineCC"] = str(criteria.engine_cc)
    if criteria.search.strip():
        params["search"] = criteria.search
    if criteria.sort != SortKey.NEWEST:
        params["sort"] = criteria.sort.value
    return params


def criteria_from_query(params) -> Criteria:
    """Rebuild criteria from a query mapping; unknown or malformed values are ignored."""
    sort_value = params.get("sort") or SortKey.NEWEST.value
    try:
        sort = SortKey(sort_value)
    except ValueError:
        logger.debug(f"[QueryEngine] Unknown sort key {sort_value!r}, using newest")
        sort = SortKey.NEWEST

    return Criteria(
        brands=_split_multi(params.get("brand")),
        categories=_split_multi(params.get("category")),
        condition=params.get("condition") or "all",
        year_min=_parse_int(params.get("yearMin")),
        year_max=_parse_int(params.get("yearMax")),
        price_min=_parse_int(params.get("priceMin")),
        price_max=_parse_int(params.get("priceMax")),
        engine_cc=_parse_int(params.get("engineCC")),
        search=params.get("search") or "",
        sort=sort,
    )


# --- Derived views ---

def filter_options(collection: Iterable[Record]) -> dict:
    """Values offered by the filter sidebar, derived from the collection."""
    records = list(collection)
    years = [r.year for r in records if r.year > 0]
    prices = [r.price for r in records if r.price > 0]
    return {
        "brands": sorted({r.brand for r in records if r.brand}),
        "categories": sorted({r.category for r in records if r.category}),
        "conditions": sorted({r.condition for r in records if r.condition}),
        "year_min": min(years) if years else None,
        "year_max": max(years) if years else None,
        "price_min": min(prices) if prices else None,
        "price_max": max(prices) if prices else None,
        "engine_ccs": sorted({r.engine_cc for r in records if r.engine_cc > 0}),
    }


def pick_featured(collection: Iterable[Record], limit: int = FEATURED_LIMIT) -> list[Record]:
    records = list(collection)
    featured = [r for r in records if r.featured][:limit]
    if not featured:
        return records[:limit]
    return featured


def is_displayable(record: Record) -> bool:
    """False for linked rows that are not motorcycles (e.g. inquiries)."""
    has_title = record.title_en or record.title_gr or (record.brand and record.model)
    return bool(has_title and record.brand)


async def resolve_related(
    record: Record,
    collection: Iterable[Record],
    fetch_by_id: Callable[[str], Awaitable[Record]],
) -> list[Record]:
    """Related listings for the detail view.

    Explicit links are fetched one at a time; a failed id is skipped. Without
    explicit links, fall back to up to three records of the same category
    from the already-fetched collection.
    """
    if not record.related_listings:
        return [
            r for r in collection
            if r.category == record.category and r.id != record.id and is_displayable(r)
        ][:RELATED_FALLBACK_LIMIT]

    related = []
    for related_id in record.related_listings:
        try:
            linked = await fetch_by_id(related_id)
        except FetchError as e:
            logger.warning(f"[QueryEngine] Failed to load related listing {related_id}: {e}")
            continue
        if is_displayable(linked):
            related.append(linked)
        else:
            logger.debug(f"[QueryEngine] Skipping non-listing record {related_id}")
    return related


def results_summary(shown: int, total: int, lang: str = "en") -> str:
    if lang == "gr":
        return f"Εμφανίζονται {shown} από {total} μοτοσυκλέτες"
    return f"Showing {shown} of {total} motorcycles"
