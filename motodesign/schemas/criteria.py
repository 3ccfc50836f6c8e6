from enum import Enum

from pydantic import BaseModel, field_validator


class SortKey(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    YEAR_ASC = "year_asc"
    YEAR_DESC = "year_desc"


class Criteria(BaseModel):
    """The user's current filter and sort selection.

    Values are normalized on construction the same way the query-string
    parser normalizes them, so a serialized selection restores to an equal one.
    """

    model_config = {"frozen": True}

    brands: frozenset[str] = frozenset()
    categories: frozenset[str] = frozenset()
    condition: str = "all"  # "all", "New", "Used"
    year_min: int | None = None
    year_max: int | None = None
    price_min: int | None = None
    price_max: int | None = None
    engine_cc: int | None = None
    search: str = ""
    sort: SortKey = SortKey.NEWEST

    @field_validator("brands", "categories", mode="before")
    @classmethod
    def strip_selections(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(s.strip() for s in v if isinstance(s, str) and s.strip())

    @field_validator("condition", mode="before")
    @classmethod
    def blank_condition_is_all(cls, v):
        if v is None:
            return "all"
        return str(v).strip() or "all"

    @field_validator("search", mode="before")
    @classmethod
    def strip_search(cls, v):
        if v is None:
            return ""
        return str(v).strip()
