"""Order endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from bakery.api.v1.errors import to_http_exception
from bakery.core.security import get_is_admin, require_admin
from bakery.db.session import get_db
from bakery.schemas.order import OrderCreate, OrderCreatedResponse, OrderResponse, OrderUpdate
from bakery.services import order_repository
from bakery.services.errors import DomainError
from bakery.utils.time import now_in_business_timezone

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
def get_orders(
    year: int | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[OrderResponse]:
    """Return all orders, or those scheduled during ``year``."""
    orders = order_repository.get_orders(db, year=year)
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/last", response_model=list[OrderResponse], dependencies=[Depends(require_admin)])
def get_last_orders(
    count: int = Query(default=10, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[OrderResponse]:
    orders = order_repository.get_last_orders(db, count)
    return [OrderResponse.model_validate(order) for order in orders]


@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
def post_order(
    payload: OrderCreate,
    response: Response,
    db: Session = Depends(get_db),
    is_admin: bool = Depends(get_is_admin),
) -> OrderCreatedResponse:
    """Place an order; anonymous customers are subject to lead-time rules, admins are not."""
    try:
        order_id: int = order_repository.order_products(
            db,
            payload.to_command(),
            is_admin=is_admin,
            now=now_in_business_timezone(),
        )
    except DomainError as exc:
        logger.info("[ORDER] Rejected order: %s", exc.message)
        raise to_http_exception(exc) from exc

    response.headers["Location"] = f"/api/v1/orders/{order_id}"
    return OrderCreatedResponse(id=order_id)


@router.put("/{order_id}", response_model=OrderResponse, dependencies=[Depends(require_admin)])
def put_order(order_id: int, payload: OrderUpdate, db: Session = Depends(get_db)) -> OrderResponse:
    try:
        order = order_repository.update_existing_order(
            db,
            order_id,
            payload.to_command(order_id),
            now=now_in_business_timezone(),
        )
    except DomainError as exc:
        logger.info("[ORDER] Rejected update of order %s: %s", order_id, exc.message)
        raise to_http_exception(exc) from exc
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/check", response_model=OrderResponse, dependencies=[Depends(require_admin)])
def check_order(order_id: int, db: Session = Depends(get_db)) -> OrderResponse:
    try:
        order = order_repository.set_order_checked(db, order_id, True)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/uncheck", response_model=OrderResponse, dependencies=[Depends(require_admin)])
def uncheck_order(order_id: int, db: Session = Depends(get_db)) -> OrderResponse:
    try:
        order = order_repository.set_order_checked(db, order_id, False)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return OrderResponse.model_validate(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def delete_order(order_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        order_repository.delete_order(db, order_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
