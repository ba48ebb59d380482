"""Product data models."""

import json
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductSize(BaseModel):
    name: str = ""
    dimensions: str = ""
    price_modifier: Decimal = Field(default=Decimal("0"), alias="priceModifier")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Product(BaseModel):
    """A catalogue product as the admin listing returns it."""

    id: str = Field(..., alias="_id", min_length=1)
    name: str = ""
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    discount_price: Decimal | None = Field(default=None, alias="discountPrice")
    categories: list[str] = Field(default_factory=list)
    stock: int = 0
    featured: bool = False
    customizable: bool = True
    sizes: list[ProductSize] = Field(default_factory=list)
    images: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("categories", mode="before")
    @classmethod
    def _category_ids(cls, value: Any) -> list[str]:
        # populated categories arrive as documents
        return [c.get("_id", "") if isinstance(c, dict) else str(c) for c in value or []]

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ProductDraft(BaseModel):
    """Contents of the create/edit product form.

    Everything is optional here; ``ProductManager.save`` reports what is
    missing the way the form does.
    """

    name: str = ""
    description: str = ""
    price: Decimal | None = None
    discount_price: Decimal | None = None
    categories: list[str] = Field(default_factory=list)
    stock: int = 10
    featured: bool = False
    customizable: bool = True
    sizes: list[ProductSize] = Field(default_factory=list)
    remove_images: list[str] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product: Product) -> "ProductDraft":
        """Prefill the form for editing ``product``; no images are removed yet."""
        return cls(
            name=product.name,
            description=product.description,
            price=product.price,
            discount_price=product.discount_price,
            categories=list(product.categories),
            stock=product.stock,
            featured=product.featured,
            customizable=product.customizable,
            sizes=list(product.sizes),
        )

    def toggle_category(self, category_id: str) -> None:
        if category_id in self.categories:
            self.categories.remove(category_id)
        else:
            self.categories.append(category_id)

    def to_form_data(self) -> dict[str, str]:
        """Multipart fields; list fields travel JSON-encoded."""
        form = {
            "name": self.name,
            "description": self.description,
            "price": str(self.price),
            "categories": json.dumps(self.categories),
            "stock": str(self.stock),
            "featured": "true" if self.featured else "false",
            "customizable": "true" if self.customizable else "false",
            "sizes": json.dumps([s.model_dump(mode="json", by_alias=True) for s in self.sizes]),
        }
        if self.discount_price is not None:
            form["discountPrice"] = str(self.discount_price)
        if self.remove_images:
            form["removeImages"] = json.dumps(self.remove_images)
        return form
