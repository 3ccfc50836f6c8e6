from pydantic import BaseModel, Field
from datetime import datetime


class Image(BaseModel):
    id: str = ""
    url: str = ""
    filename: str = ""
    thumbnail: str = ""
    thumbnail_small: str = ""
    width: int = 0
    height: int = 0


class Record(BaseModel):
    """One motorcycle listing in canonical form."""

    model_config = {"frozen": True}

    id: str
    title_en: str = ""
    title_gr: str = ""
    brand: str = "Yamaha"
    model: str = ""
    category: str = ""
    condition: str = "New"
    year: int
    price: int = 0
    mileage_km: int = 0
    engine_cc: int = 0
    color: str = ""
    description_en: str = ""
    description_gr: str = ""
    images: tuple[Image, ...] = ()
    featured: bool = False
    available: bool = True
    created_at: datetime | None = None
    related_listings: tuple[str, ...] = Field(default_factory=tuple)

    def to_raw(self) -> dict:
        """Dump back into the record store's wire shape."""
        fields = {
            "title_en": self.title_en,
            "title_gr": self.title_gr,
            "brand": self.brand,
            "model": self.model,
            "category": self.category,
            "condition": self.condition,
            "year": self.year,
            "price": self.price,
            "mileage_km": self.mileage_km,
            "engine_cc": self.engine_cc,
            "color": self.color,
            "description_en": self.description_en,
            "description_gr": self.description_gr,
            "Images": [
                {
                    "id": img.id,
                    "url": img.url,
                    "filename": img.filename,
                    "width": img.width,
                    "height": img.height,
                    "thumbnails": {
                        "large": {"url": img.thumbnail},
                        "small": {"url": img.thumbnail_small},
                    },
                }
                for img in self.images
            ],
            "featured": self.featured,
            "available": self.available,
            "relatedListings": list(self.related_listings),
        }
        raw = {"id": self.id, "fields": fields}
        if self.created_at is not None:
            raw["createdTime"] = self.created_at.isoformat().replace("+00:00", "Z")
        return raw
