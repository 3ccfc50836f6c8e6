from pydantic import BaseModel


class ListingCard(BaseModel):
    id: str
    title: str
    brand: str
    model: str
    year: int
    category: str
    condition: str
    condition_label: str
    price: int
    price_display: str
    mileage_km: int
    mileage_display: str
    engine_cc: int
    featured: bool
    image: str
    thumbnail: str
    url: str


class FilterOptions(BaseModel):
    brands: list[str]
    categories: list[str]
    conditions: list[str]
    year_min: int | None
    year_max: int | None
    price_min: int | None
    price_max: int | None
    engine_ccs: list[int]


class ListingsResponse(BaseModel):
    lang: str
    total: int
    shown: int
    summary: str
    sort: str
    active_filters: int
    query: str
    options: FilterOptions
    listings: list[ListingCard]


class FeaturedResponse(BaseModel):
    lang: str
    listings: list[ListingCard]


class SpecRow(BaseModel):
    key: str
    value: str


class GalleryImage(BaseModel):
    url: str
    thumbnail: str
    width: int = 0
    height: int = 0


class ListingDetailResponse(BaseModel):
    lang: str
    id: str
    title: str
    model: str
    description_en: str
    description_gr: str
    price_display: str
    condition_label: str
    featured: bool
    images: list[GalleryImage]
    specs: list[SpecRow]
    related: list[ListingCard]
