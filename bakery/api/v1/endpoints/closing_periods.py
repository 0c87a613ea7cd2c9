"""Closing period endpoints."""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from bakery.api.v1.errors import to_http_exception
from bakery.core.security import require_admin
from bakery.db.session import get_db
from bakery.schemas.closing_period import ClosingPeriodCreate, ClosingPeriodCreatedResponse, ClosingPeriodResponse
from bakery.services.closing_period_service import add_closing_period, delete_closing_period, get_closing_periods
from bakery.services.errors import DomainError
from bakery.utils.time import now_in_business_timezone

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ClosingPeriodResponse])
def list_closing_periods(db: Session = Depends(get_db)) -> list[ClosingPeriodResponse]:
    return [ClosingPeriodResponse.model_validate(closing_period) for closing_period in get_closing_periods(db)]


@router.post(
    "",
    response_model=ClosingPeriodCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def post_closing_period(payload: ClosingPeriodCreate, db: Session = Depends(get_db)) -> ClosingPeriodCreatedResponse:
    try:
        closing_period_id: int = add_closing_period(
            db,
            start_date=payload.start_date,
            end_date=payload.end_date,
            now=now_in_business_timezone(),
        )
    except DomainError as exc:
        logger.info("[CLOSING_PERIOD] Rejected closing period: %s", exc.message)
        raise to_http_exception(exc) from exc
    return ClosingPeriodCreatedResponse(id=closing_period_id)


@router.delete("/{closing_period_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
def remove_closing_period(closing_period_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        delete_closing_period(db, closing_period_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
