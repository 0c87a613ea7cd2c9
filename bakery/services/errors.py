"""Domain errors raised by order, closing period and product services."""


class DomainError(Exception):
    """Base class for errors carrying a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidOrder(DomainError):
    """Raised when an order command is malformed or breaks a scheduling rule."""


class InvalidClosingPeriod(DomainError):
    """Raised when a closing period date range is invalid."""


class InvalidUser(DomainError):
    """Raised when the actor lacks the privilege for the requested operation."""


class OrderNotFound(DomainError):
    """Raised when no order exists with the requested id."""


class ClosingPeriodNotFound(DomainError):
    """Raised when no closing period exists with the requested id."""


class ProductOrderingDisabled(DomainError):
    """Raised when customers try to order while ordering is switched off."""
