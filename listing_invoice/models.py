"""Read-only listing snapshots built from the marketplace API's JSON."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import ListingParseError


@dataclass(frozen=True)
class ListingAttribute:
    category_attribute_id: str
    value: Any
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListingAttribute":
        return cls(
            category_attribute_id=data.get("categoryAttributeId", ""),
            value=data.get("value"),
            id=data.get("id"),
        )


@dataclass(frozen=True)
class Category:
    id: Optional[str]
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    slug: Optional[str] = None
    parent_category_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            description=data.get("description"),
            image_url=data.get("imageUrl"),
            slug=data.get("slug"),
            parent_category_id=data.get("parentCategoryId"),
        )


@dataclass(frozen=True)
class Address:
    state: Optional[str] = None


@dataclass(frozen=True)
class Listing:
    id: str
    listing_title: Any = None
    selling_price: Any = None
    secondary_id: Any = None
    category_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    listing_description: Optional[str] = None
    appraised_price: Any = None
    estimated_price_min: Any = None
    estimated_price_max: Any = None
    item_length: Any = None
    item_width: Any = None
    item_height: Any = None
    item_weight: Any = None
    item_brand: Optional[str] = None
    item_age: Any = None
    vin: Optional[str] = None
    delivery_method: Optional[str] = None
    image_urls: Tuple[str, ...] = ()
    attributes: Tuple[ListingAttribute, ...] = ()
    category: Optional[Category] = None
    address: Optional[Address] = None

    @property
    def display_id(self) -> str:
        """Short numeric id when present, else the first 8 characters of the id."""
        if self.secondary_id is not None:
            return str(self.secondary_id)
        return self.id[:8]

    @property
    def primary_image_url(self) -> Optional[str]:
        return self.image_urls[0] if self.image_urls else None

    @property
    def resolved_category_id(self) -> Optional[str]:
        if self.category_id:
            return self.category_id
        if self.category is not None:
            return self.category.id
        return None

    @classmethod
    def from_dict(cls, data: Any) -> "Listing":
        """Build a listing from decoded JSON.

        Only the shape needed to identify the listing is checked; every
        other field is taken as-is.
        """
        if not isinstance(data, dict):
            raise ListingParseError("Listing response must be a JSON object.")
        listing_id = data.get("id")
        if listing_id is None or listing_id == "":
            raise ListingParseError("Listing response is missing 'id'.")

        category = data.get("category")
        address = data.get("address")
        raw_attributes = data.get("ListingAttribute") or []
        attributes: List[ListingAttribute] = [
            ListingAttribute.from_dict(item) for item in raw_attributes if isinstance(item, dict)
        ]

        return cls(
            id=str(listing_id),
            listing_title=data.get("listingTitle"),
            selling_price=data.get("sellingPrice"),
            secondary_id=data.get("secondaryId"),
            category_id=data.get("categoryId"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            listing_description=data.get("listingDescription"),
            appraised_price=data.get("appraisedPrice"),
            estimated_price_min=data.get("estimatedPriceMin"),
            estimated_price_max=data.get("estimatedPriceMax"),
            item_length=data.get("itemLength"),
            item_width=data.get("itemWidth"),
            item_height=data.get("itemHeight"),
            item_weight=data.get("itemWeight"),
            item_brand=data.get("itemBrand"),
            item_age=data.get("itemAge"),
            vin=data.get("vin"),
            delivery_method=data.get("deliveryMethod"),
            image_urls=tuple(data.get("imageUrls") or ()),
            attributes=tuple(attributes),
            category=Category.from_dict(category) if isinstance(category, dict) else None,
            address=Address(state=address.get("state")) if isinstance(address, dict) else None,
        )


@dataclass(frozen=True)
class ImagePayload:
    """Image bytes ready to embed, with intrinsic dimensions.

    Raster formats are sized in pixels; SVG in its own user units.
    """

    data: bytes = field(repr=False)
    width: float
    height: float
    image_format: str = "JPEG"
