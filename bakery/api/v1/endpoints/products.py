"""Product catalog and product ordering switch endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bakery.core.security import require_admin
from bakery.db.session import get_db
from bakery.schemas.product import ProductCreate, ProductOrderingStatusResponse, ProductResponse
from bakery.services.product_ordering_service import (
    DISABLED,
    ENABLED,
    is_product_ordering_enabled,
    set_product_ordering_enabled,
)
from bakery.services.product_service import add_product, get_active_products, get_products

router: APIRouter = APIRouter()
ordering_router: APIRouter = APIRouter()


@router.get("", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)) -> list[ProductResponse]:
    """Return products customers can currently order."""
    return [ProductResponse.model_validate(product) for product in get_active_products(db)]


@router.get("/all", response_model=list[ProductResponse], dependencies=[Depends(require_admin)])
def list_all_products(db: Session = Depends(get_db)) -> list[ProductResponse]:
    return [ProductResponse.model_validate(product) for product in get_products(db)]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def post_product(payload: ProductCreate, db: Session = Depends(get_db)) -> ProductResponse:
    product = add_product(
        db,
        name=payload.name,
        description=payload.description,
        price=payload.price,
        status=payload.status,
    )
    return ProductResponse.model_validate(product)


def _ordering_status(db: Session) -> ProductOrderingStatusResponse:
    return ProductOrderingStatusResponse(status=ENABLED if is_product_ordering_enabled(db) else DISABLED)


@ordering_router.get("/status", response_model=ProductOrderingStatusResponse)
def get_product_ordering_status(db: Session = Depends(get_db)) -> ProductOrderingStatusResponse:
    return _ordering_status(db)


@ordering_router.put("/enable", response_model=ProductOrderingStatusResponse, dependencies=[Depends(require_admin)])
def enable_product_ordering(db: Session = Depends(get_db)) -> ProductOrderingStatusResponse:
    set_product_ordering_enabled(db, True)
    return _ordering_status(db)


@ordering_router.put("/disable", response_model=ProductOrderingStatusResponse, dependencies=[Depends(require_admin)])
def disable_product_ordering(db: Session = Depends(get_db)) -> ProductOrderingStatusResponse:
    set_product_ordering_enabled(db, False)
    return _ordering_status(db)
