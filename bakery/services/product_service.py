"""Product snapshots used by orders, and catalog queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from sqlalchemy.orm import Session

from bakery.models.product import ProductRecord

logger = logging.getLogger(__name__)


class ProductStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class Product:
    """Immutable copy of a catalog product at a point in time."""

    id: int
    name: str
    description: str | None
    price: Decimal
    status: ProductStatus = ProductStatus.ACTIVE


@dataclass(frozen=True)
class ProductWithQuantity:
    product: Product
    quantity: int


def to_product(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        description=record.description,
        price=record.price,
        status=ProductStatus(record.status),
    )


def get_products(db: Session) -> list[Product]:
    """Return every catalog product, archived ones included."""
    records: list[ProductRecord] = db.query(ProductRecord).order_by(ProductRecord.id.asc()).all()
    return [to_product(record) for record in records]


def get_active_products(db: Session) -> list[Product]:
    """Return the products customers can currently order."""
    records: list[ProductRecord] = (
        db.query(ProductRecord)
        .filter(ProductRecord.status == ProductStatus.ACTIVE.value)
        .order_by(ProductRecord.id.asc())
        .all()
    )
    return [to_product(record) for record in records]


def add_product(
    db: Session,
    *,
    name: str,
    description: str | None,
    price: Decimal,
    status: ProductStatus = ProductStatus.ACTIVE,
) -> Product:
    record = ProductRecord(name=name, description=description, price=price, status=status.value)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Product %s added with status %s", record.id, record.status)
    return to_product(record)
