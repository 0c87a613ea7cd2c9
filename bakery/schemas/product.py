"""Product and product ordering API schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from bakery.services.product_service import ProductStatus


class ProductCreate(BaseModel):
    """New catalog product."""

    name: str = Field(min_length=1)
    description: str | None = None
    price: Decimal = Field(ge=0)
    status: ProductStatus = ProductStatus.ACTIVE


class ProductResponse(BaseModel):
    """Serialized product snapshot."""

    id: int
    name: str
    description: str | None
    price: Decimal
    status: ProductStatus

    model_config = ConfigDict(from_attributes=True)


class ProductOrderingStatusResponse(BaseModel):
    status: str
