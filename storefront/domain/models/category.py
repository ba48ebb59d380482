"""Category data model."""

from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    id: str = Field(..., alias="_id", min_length=1)
    name: str = Field(..., min_length=1)
    slug: str | None = None
    description: str | None = None
    is_active: bool = Field(default=True, alias="isActive")
    product_count: int = Field(default=0, alias="productCount", ge=0)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")
