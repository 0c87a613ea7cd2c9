"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from bakery.services.errors import (
    ClosingPeriodNotFound,
    DomainError,
    InvalidClosingPeriod,
    InvalidOrder,
    InvalidUser,
    OrderNotFound,
    ProductOrderingDisabled,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    InvalidOrder: status.HTTP_400_BAD_REQUEST,
    InvalidClosingPeriod: status.HTTP_400_BAD_REQUEST,
    InvalidUser: status.HTTP_401_UNAUTHORIZED,
    OrderNotFound: status.HTTP_404_NOT_FOUND,
    ClosingPeriodNotFound: status.HTTP_404_NOT_FOUND,
    ProductOrderingDisabled: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(exc: DomainError) -> HTTPException:
    """Build the HTTP error matching a domain error, keeping its message as detail."""
    status_code: int = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=exc.message)
