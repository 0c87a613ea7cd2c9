"""Order API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from bakery.schemas.product import ProductResponse
from bakery.services.order_service import (
    NewOrderCommand,
    OrderType,
    ProductIdWithQuantity,
    UpdateOrderCommand,
)


class OrderItemPayload(BaseModel):
    """Single order line: product id and quantity.

    Quantity bounds are checked by the order rules so that the error message
    stays the same for every caller.
    """

    product_id: int
    quantity: int


class OrderCreate(BaseModel):
    """Place a new order. Field presence is validated by the order rules, not here."""

    client_name: str | None = None
    client_phone_number: str | None = None
    client_email_address: str | None = None
    products: list[OrderItemPayload] = []
    type: str | None = None
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None
    note: str | None = None

    def to_command(self) -> NewOrderCommand:
        return NewOrderCommand(
            client_name=self.client_name,
            client_phone_number=self.client_phone_number,
            client_email_address=self.client_email_address,
            products=[ProductIdWithQuantity(product_id=item.product_id, quantity=item.quantity) for item in self.products],
            type=self.type,
            pick_up_date=self.pick_up_date,
            delivery_date=self.delivery_date,
            delivery_address=self.delivery_address,
            reservation_date=self.reservation_date,
            note=self.note,
        )


class OrderUpdate(BaseModel):
    """Replace the content and schedule of an existing order."""

    products: list[OrderItemPayload] = []
    type: str | None = None
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None
    note: str | None = None

    def to_command(self, order_id: int) -> UpdateOrderCommand:
        return UpdateOrderCommand(
            order_id=order_id,
            products=[ProductIdWithQuantity(product_id=item.product_id, quantity=item.quantity) for item in self.products],
            type=self.type,
            pick_up_date=self.pick_up_date,
            delivery_date=self.delivery_date,
            delivery_address=self.delivery_address,
            reservation_date=self.reservation_date,
            note=self.note,
        )


class OrderCreatedResponse(BaseModel):
    id: int


class OrderItemResponse(BaseModel):
    """Serialized order line with its product snapshot."""

    product: ProductResponse
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Serialized order."""

    id: int
    client_name: str
    client_phone_number: str
    client_email_address: str
    products: list[OrderItemResponse]
    type: OrderType
    pick_up_date: datetime | None
    delivery_date: datetime | None
    delivery_address: str | None
    reservation_date: datetime | None
    note: str | None
    checked: bool

    model_config = ConfigDict(from_attributes=True)
