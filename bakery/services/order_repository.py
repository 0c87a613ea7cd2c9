"""Order persistence and the use cases built on top of the order engine."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import extract, or_
from sqlalchemy.orm import Session, selectinload

from bakery.models.order import OrderItem, OrderRecord
from bakery.services.closing_period_service import ClosingPeriod, get_closing_periods
from bakery.services.errors import OrderNotFound, ProductOrderingDisabled
from bakery.services.order_service import NewOrderCommand, Order, OrderType, UpdateOrderCommand
from bakery.services.product_ordering_service import is_product_ordering_enabled
from bakery.services.product_service import Product, ProductStatus, ProductWithQuantity, get_active_products
from bakery.utils.time import to_business_time

logger = logging.getLogger(__name__)


def _to_column(value: datetime | None) -> datetime | None:
    return to_business_time(value) if value is not None else None


def to_record(order: Order, record: OrderRecord | None = None) -> OrderRecord:
    """Write ``order`` into ``record`` (or a new record), replacing its line items."""
    if record is None:
        record = OrderRecord()
    record.client_name = order.client_name
    record.client_phone_number = order.client_phone_number
    record.client_email_address = order.client_email_address
    record.type = order.type.value
    record.pick_up_date = _to_column(order.pick_up_date)
    record.delivery_date = _to_column(order.delivery_date)
    record.delivery_address = order.delivery_address
    record.reservation_date = _to_column(order.reservation_date)
    record.note = order.note
    record.checked = order.checked
    record.items = [
        OrderItem(
            position=position,
            product_id=item.product.id,
            name=item.product.name,
            description=item.product.description,
            price_snapshot=item.product.price,
            status=item.product.status.value,
            qty=item.quantity,
        )
        for position, item in enumerate(order.products)
    ]
    return record


def from_record(record: OrderRecord) -> Order:
    return Order(
        id=record.id,
        client_name=record.client_name,
        client_phone_number=record.client_phone_number,
        client_email_address=record.client_email_address,
        products=[
            ProductWithQuantity(
                product=Product(
                    id=item.product_id,
                    name=item.name,
                    description=item.description,
                    price=item.price_snapshot,
                    status=ProductStatus(item.status),
                ),
                quantity=item.qty,
            )
            for item in record.items
        ],
        type=OrderType(record.type),
        pick_up_date=record.pick_up_date,
        delivery_date=record.delivery_date,
        delivery_address=record.delivery_address,
        reservation_date=record.reservation_date,
        note=record.note,
        checked=record.checked,
    )


def _get_record(db: Session, order_id: int) -> OrderRecord:
    record: OrderRecord | None = db.get(OrderRecord, order_id)
    if record is None:
        raise OrderNotFound(f'Order not found with id "{order_id}"')
    return record


def save(db: Session, order: Order) -> int:
    """Insert or update ``order`` and return its id."""
    record: OrderRecord | None = _get_record(db, order.id) if order.id is not None else None
    record = to_record(order, record)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record.id


def find_by_id(db: Session, order_id: int) -> Order:
    return from_record(_get_record(db, order_id))


def get_orders(db: Session, year: int | None = None) -> list[Order]:
    """Return orders, optionally restricted to those scheduled during ``year``."""
    query = db.query(OrderRecord).options(selectinload(OrderRecord.items))
    if year is not None:
        query = query.filter(
            or_(
                extract("year", OrderRecord.pick_up_date) == year,
                extract("year", OrderRecord.delivery_date) == year,
                extract("year", OrderRecord.reservation_date) == year,
            )
        )
    return [from_record(record) for record in query.order_by(OrderRecord.id.asc()).all()]


def get_last_orders(db: Session, count: int) -> list[Order]:
    records: list[OrderRecord] = (
        db.query(OrderRecord)
        .options(selectinload(OrderRecord.items))
        .order_by(OrderRecord.id.desc())
        .limit(count)
        .all()
    )
    return [from_record(record) for record in records]


def order_products(db: Session, command: NewOrderCommand, *, is_admin: bool, now: datetime) -> int:
    """Validate and persist a new order against the current catalog and closing periods."""
    if not is_admin and not is_product_ordering_enabled(db):
        raise ProductOrderingDisabled("product ordering is disabled")

    active_products: list[Product] = get_active_products(db)
    closing_periods: list[ClosingPeriod] = get_closing_periods(db)
    order: Order = Order.create(command, active_products, closing_periods, is_admin, now)
    order_id: int = save(db, order)
    logger.info("Order %s placed (type=%s, admin=%s)", order_id, order.type.value, is_admin)
    return order_id


def update_existing_order(db: Session, order_id: int, command: UpdateOrderCommand, *, now: datetime) -> Order:
    order: Order = find_by_id(db, order_id)
    active_products: list[Product] = get_active_products(db)
    closing_periods: list[ClosingPeriod] = get_closing_periods(db)
    order.update_with(command, active_products, closing_periods, now)
    save(db, order)
    logger.info("Order %s updated (type=%s)", order_id, order.type.value)
    return order


def set_order_checked(db: Session, order_id: int, checked: bool) -> Order:
    """Mark an order as picked up (or not) without re-validating it."""
    order: Order = find_by_id(db, order_id)
    if checked:
        order.check()
    else:
        order.uncheck()
    save(db, order)
    return order


def delete_order(db: Session, order_id: int) -> None:
    record: OrderRecord = _get_record(db, order_id)
    db.delete(record)
    db.commit()
    logger.info("Order %s deleted", order_id)
