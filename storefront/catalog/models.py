from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

Variant = Literal["Standard", "Mini", "Pro", "Pro Max", "Plus"]
Storage = Literal["32GB", "64GB", "128GB", "256GB", "512GB", "1TB"]
Condition = Literal["New", "Excellent", "Good", "Fair"]
SortKey = Literal["newest", "price-asc", "price-desc"]

CONDITIONS: tuple[str, ...] = ("New", "Excellent", "Good", "Fair")
STORAGE_OPTIONS: tuple[str, ...] = ("32GB", "64GB", "128GB", "256GB", "512GB", "1TB")

PLACEHOLDER_IMAGE_URL = "/api/placeholder.jpg"


# ------------------------------------------------------------------------------
# Stored records
# ------------------------------------------------------------------------------

class CatalogEntry(BaseModel):
    """
    One sellable phone, exactly as it is kept in the durable slot.

    Field names are camelCase on purpose: they are the on-disk format and must
    stay readable by data written by earlier versions of the store.
    Unknown fields are kept so a round-trip never drops them.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    model: str
    variant: Variant
    storage: Storage
    color: str
    condition: Condition
    price: float = Field(ge=0)
    description: str = ""
    images: List[str] = Field(default_factory=list)
    inStock: bool
    featured: bool = False
    createdAt: str


CatalogEntries = TypeAdapter(List[CatalogEntry])


# ------------------------------------------------------------------------------
# Admin input models
# ------------------------------------------------------------------------------

class CatalogEntryCreate(BaseModel):
    """
    Everything an admin supplies for a new entry. `id` and `createdAt` are
    stamped by the store and cannot be sent.
    """
    model_config = ConfigDict(extra="forbid")

    model: str
    variant: Variant = "Standard"
    storage: Storage = "128GB"
    color: str
    condition: Condition = "Excellent"
    price: float = Field(default=0, ge=0)
    description: str = ""
    images: List[str] = Field(default_factory=list)
    inStock: bool = True
    featured: bool = False


class CatalogEntryUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    model: Optional[str] = None
    variant: Optional[Variant] = None
    storage: Optional[Storage] = None
    color: Optional[str] = None
    condition: Optional[Condition] = None
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    images: Optional[List[str]] = None
    inStock: Optional[bool] = None
    featured: Optional[bool] = None


class AttachImageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str


# ------------------------------------------------------------------------------
# API views
# ------------------------------------------------------------------------------

class ProductView(CatalogEntry):
    """
    Catalog entry as the shop renders it: `coverImage` is the first image, or
    the placeholder when the entry has none.
    """
    coverImage: str

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "ProductView":
        cover = entry.images[0] if entry.images else PLACEHOLDER_IMAGE_URL
        return cls.model_validate({**entry.model_dump(), "coverImage": cover})


class ProductListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    products: List[ProductView] = Field(default_factory=list)
    total: int = 0      # size of the unfiltered catalog
    matched: int = 0    # size of `products`


class CatalogStats(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total: int = 0
    featured: int = 0
    outOfStock: int = 0


class CatalogStatus(BaseModel):
    """
    Status of the durable slot behind the store.
    """
    model_config = ConfigDict(extra="forbid")

    key: str
    loaded: bool = False
    entries_count: int = 0
    last_loaded_at: Optional[str] = None
    last_saved_at: Optional[str] = None
    error: Optional[str] = None
