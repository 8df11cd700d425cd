"""
Catalog Domain Models

Section -> Brand -> Line -> Product, exactly as stored under
catalog/sections in the Realtime Database. Field names follow the stored
keys (snake_case on brands/lines, camelCase on products) so a model can be
written back without renaming anything. Unknown keys are kept.
"""
import re
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def slugify(name: str) -> str:
    """Product id derived from its name: 'Mint Ice 2' -> 'mint-ice-2'"""
    slug = re.sub(r"\s+", "-", name.lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def _as_list(value: Any) -> List[Any]:
    """The database returns sparse arrays as objects and empty ones as null"""
    if value is None:
        return []
    if isinstance(value, dict):
        return list(value.values())
    return [v for v in value if v is not None]


class Product(BaseModel):
    """
    Product in a line

    Fields:
        id: Slug of the name unless given explicitly
        name: Display name
        description: Free text
        flavorProfile: Flavor / profile text
        imageUrl: Main image (first of images when not given)
        images: All image URLs
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field("", description="Product id (slug)")
    name: str = Field("", description="Product name")
    description: str = Field("", description="Product description")
    flavorProfile: str = Field("", description="Flavor profile")
    imageUrl: str = Field("", description="Main image URL")
    images: List[str] = Field(default_factory=list, description="Image URLs")

    @field_validator("name", "description", "flavorProfile", "imageUrl", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or ""

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return [url for url in _as_list(v) if url]

    @model_validator(mode="after")
    def _derive_defaults(self):
        if not self.id:
            self.id = slugify(self.name)
        if not self.imageUrl and self.images:
            self.imageUrl = self.images[0]
        return self

    def to_dict(self) -> dict:
        return self.model_dump()


class Line(BaseModel):
    """Product line of a brand; name is unique within the brand"""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    image_url: str = ""
    products: List[Product] = Field(default_factory=list)

    @field_validator("name", "image_url", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or ""

    @field_validator("products", mode="before")
    @classmethod
    def _products(cls, v):
        # products are stored keyed by id; the key stands in for a missing id field
        if isinstance(v, dict):
            return [
                {**p, "id": p.get("id") or str(key)} if isinstance(p, dict) else p
                for key, p in v.items() if p is not None
            ]
        return _as_list(v)

    def find_product(self, product_id: str):
        return next((p for p in self.products if p.id == product_id), None)

    def to_dict(self) -> dict:
        """Stored shape: products keyed by id, key omitted when empty"""
        data = self.model_dump(exclude={"products"})
        if self.products:
            data["products"] = {p.id: p.to_dict() for p in self.products}
        return data


class Brand(BaseModel):
    """Brand within a section; name is unique within the section"""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    logo_url: str = ""
    website: str = ""
    description: str = ""
    lines: List[Line] = Field(default_factory=list)

    @field_validator("name", "logo_url", "website", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or ""

    @field_validator("lines", mode="before")
    @classmethod
    def _lines(cls, v):
        return _as_list(v)

    def find_line(self, line_name: str):
        return next((line for line in self.lines if line.name == line_name), None)

    def to_dict(self) -> dict:
        data = self.model_dump(exclude={"lines"})
        data["lines"] = [line.to_dict() for line in self.lines]
        return data


class Section(BaseModel):
    """Top-level catalog category (liquids, devices, ...)"""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    brands: List[Brand] = Field(default_factory=list)

    @field_validator("brands", mode="before")
    @classmethod
    def _brands(cls, v):
        return _as_list(v)

    def find_brand(self, brand_name: str):
        """Exact-name lookup (as used by writes)"""
        return next((b for b in self.brands if b.name == brand_name), None)

    def to_dict(self) -> dict:
        data = self.model_dump(exclude={"brands"})
        data["brands"] = [brand.to_dict() for brand in self.brands]
        return data


def parse_sections(raw: Any) -> List[Section]:
    """
    Normalize a raw catalog/sections payload

    Accepts a list, an object keyed by index, or null.
    """
    return [Section.model_validate(s) for s in _as_list(raw)]
