"""Order domain logic: validation and scheduling of pick-up, delivery and reservation orders.

The shop opens Tuesday to Saturday. Pick-ups need a few days of lead time
depending on the weekday the order is placed on, deliveries only happen on
Thursdays and reservations are reserved to admins. Lead-time rules only apply
to customers placing a new order; staff edits skip them.

No function here reads the clock: callers read "now" once per request and
pass it along so that every comparison of one validation pass agrees.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from bakery.core.config import settings
from bakery.services.closing_period_service import ClosingPeriod
from bakery.services.errors import InvalidOrder, InvalidUser
from bakery.services.order_constraints import (
    CLOSING_DAYS,
    DELIVERY_DAY,
    MAXIMUM_DAY_FOR_DELIVERY_SAME_WEEK,
    NUMBER_OF_DAYS_IN_A_WEEK,
    Day,
    first_available_pick_up_day,
)
from bakery.services.product_service import Product, ProductWithQuantity
from bakery.utils.time import (
    business_date,
    day_index,
    days_between,
    is_before_ignoring_hours,
    to_business_time,
    to_iso_string,
)

EMAIL_REGEX: re.Pattern[str] = re.compile(
    r"(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))"
)


class OrderType(str, Enum):
    PICK_UP = "PICK_UP"
    DELIVERY = "DELIVERY"
    RESERVATION = "RESERVATION"


@dataclass(frozen=True)
class ProductIdWithQuantity:
    product_id: int
    quantity: int


@dataclass
class NewOrderCommand:
    """Customer or admin request to place a new order."""

    client_name: str | None
    client_phone_number: str | None
    client_email_address: str | None
    products: list[ProductIdWithQuantity]
    type: OrderType | str | None
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None
    note: str | None = None


@dataclass
class UpdateOrderCommand:
    """Staff request to change the content and schedule of an existing order."""

    order_id: int
    products: list[ProductIdWithQuantity]
    type: OrderType | str | None
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None
    note: str | None = None


@dataclass(frozen=True)
class _Schedule:
    """Validated order type with the single date block that goes with it."""

    type: OrderType
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None


@dataclass
class Order:
    """Order aggregate. Build it with ``create`` or ``copy``, never directly from a request."""

    client_name: str
    client_phone_number: str
    client_email_address: str
    products: list[ProductWithQuantity]
    type: OrderType
    pick_up_date: datetime | None = None
    delivery_date: datetime | None = None
    delivery_address: str | None = None
    reservation_date: datetime | None = None
    note: str | None = None
    checked: bool = False
    id: int | None = field(default=None)

    @classmethod
    def create(
        cls,
        command: NewOrderCommand,
        active_products: Sequence[Product],
        closing_periods: Sequence[ClosingPeriod],
        is_admin: bool,
        now: datetime,
    ) -> Order:
        """Validate ``command`` and build a new order; the first broken rule raises."""
        _assert_client_name_is_valid(command.client_name)
        _assert_client_phone_number_is_valid(command.client_phone_number)
        _assert_client_email_address_is_valid(command.client_email_address)
        products: list[ProductWithQuantity] = _resolve_products(command.products, active_products)
        schedule: _Schedule = _resolve_schedule(command, closing_periods, is_admin, now)

        if not is_admin:
            if schedule.type is OrderType.PICK_UP:
                _assert_pick_up_date_is_equal_or_after_the_first_available_day(schedule.pick_up_date, now)
            elif schedule.type is OrderType.DELIVERY:
                _assert_delivery_date_is_equal_or_after_the_first_available_day(schedule.delivery_date, now)

        return cls(
            client_name=command.client_name,
            client_phone_number=command.client_phone_number,
            client_email_address=command.client_email_address,
            products=products,
            type=schedule.type,
            pick_up_date=schedule.pick_up_date,
            delivery_date=schedule.delivery_date,
            delivery_address=schedule.delivery_address,
            reservation_date=schedule.reservation_date,
            note=command.note,
        )

    @classmethod
    def copy(cls, order: Order) -> Order:
        """Return a detached copy of an already valid order."""
        return cls(
            id=order.id,
            client_name=order.client_name,
            client_phone_number=order.client_phone_number,
            client_email_address=order.client_email_address,
            products=[ProductWithQuantity(product=item.product, quantity=item.quantity) for item in order.products],
            type=order.type,
            pick_up_date=order.pick_up_date,
            delivery_date=order.delivery_date,
            delivery_address=order.delivery_address,
            reservation_date=order.reservation_date,
            note=order.note,
            checked=order.checked,
        )

    def update_with(
        self,
        command: UpdateOrderCommand,
        active_products: Sequence[Product],
        closing_periods: Sequence[ClosingPeriod],
        now: datetime,
    ) -> None:
        """Apply a staff update. Contact details are kept and lead-time rules are skipped.

        Nothing is written unless the whole command is valid.
        """
        if self.id != command.order_id:
            raise InvalidOrder(f"existing order id {self.id} does not match command order id {command.order_id}")

        products: list[ProductWithQuantity] = _resolve_products(command.products, active_products)
        schedule: _Schedule = _resolve_schedule(command, closing_periods, True, now)

        self.products = products
        self.type = schedule.type
        self.pick_up_date = schedule.pick_up_date
        self.delivery_date = schedule.delivery_date
        self.delivery_address = schedule.delivery_address
        self.reservation_date = schedule.reservation_date
        self.note = command.note

    def check(self) -> None:
        self.checked = True

    def uncheck(self) -> None:
        self.checked = False


def _assert_client_name_is_valid(client_name: str | None) -> None:
    if not client_name:
        raise InvalidOrder("client name has to be defined")


def _assert_client_phone_number_is_valid(client_phone_number: str | None) -> None:
    if not client_phone_number:
        raise InvalidOrder("client phone number has to be defined")


def _assert_client_email_address_is_valid(client_email_address: str | None) -> None:
    if not client_email_address:
        raise InvalidOrder("client email address has to be defined")
    if EMAIL_REGEX.fullmatch(client_email_address) is None:
        raise InvalidOrder(f"invalid client email address {client_email_address}")


def _resolve_products(
    products: Sequence[ProductIdWithQuantity] | None,
    active_products: Sequence[Product],
) -> list[ProductWithQuantity]:
    if not products:
        raise InvalidOrder("an order must have at least one product")
    for product_id_with_quantity in products:
        if product_id_with_quantity.quantity < 1:
            raise InvalidOrder(f"product quantity {product_id_with_quantity.quantity} has to be positive")

    products_by_id: dict[int, Product] = {}
    for product in active_products:
        products_by_id.setdefault(product.id, product)

    resolved: list[ProductWithQuantity] = []
    for product_id_with_quantity in products:
        product: Product | None = products_by_id.get(product_id_with_quantity.product_id)
        if product is None:
            raise InvalidOrder(f"product with id {product_id_with_quantity.product_id} not found")
        resolved.append(ProductWithQuantity(product=product, quantity=product_id_with_quantity.quantity))
    return resolved


def _assert_type_is_valid(order_type: OrderType | str | None, is_admin: bool) -> OrderType:
    if not order_type:
        raise InvalidOrder("order type has to be defined")
    name: str = order_type.value if isinstance(order_type, OrderType) else str(order_type)
    if name not in OrderType.__members__:
        raise InvalidOrder(f"unknown order type {name}")

    resolved: OrderType = OrderType[name]
    if resolved is OrderType.RESERVATION and not is_admin:
        raise InvalidUser("RESERVATION order type requires to be ADMIN")
    return resolved


def _resolve_schedule(
    command: NewOrderCommand | UpdateOrderCommand,
    closing_periods: Sequence[ClosingPeriod],
    is_admin: bool,
    now: datetime,
) -> _Schedule:
    order_type: OrderType = _assert_type_is_valid(command.type, is_admin)

    if order_type is OrderType.PICK_UP:
        _assert_pick_up_date_is_valid(command.pick_up_date, closing_periods, now)
        return _Schedule(type=order_type, pick_up_date=command.pick_up_date)

    if order_type is OrderType.DELIVERY:
        _assert_delivery_date_is_valid(command.delivery_date, closing_periods, now)
        if not command.delivery_address:
            raise InvalidOrder("a delivery address has to be defined when order type is delivery")
        return _Schedule(
            type=order_type,
            delivery_date=command.delivery_date,
            delivery_address=command.delivery_address,
        )

    _assert_reservation_date_is_valid(command.reservation_date, closing_periods, now)
    return _Schedule(type=order_type, reservation_date=command.reservation_date)


def _is_in_a_closing_period(value: datetime, closing_periods: Sequence[ClosingPeriod]) -> bool:
    return any(closing_period.contains(value) for closing_period in closing_periods)


def _assert_pick_up_date_is_valid(
    pick_up_date: datetime | None,
    closing_periods: Sequence[ClosingPeriod],
    now: datetime,
) -> None:
    if pick_up_date is None:
        raise InvalidOrder("a pick-up date has to be defined when order type is pick-up")
    if is_before_ignoring_hours(pick_up_date, now):
        raise InvalidOrder(f"pick-up date {to_iso_string(pick_up_date)} has to be in the future")
    if day_index(pick_up_date) in CLOSING_DAYS:
        raise InvalidOrder(f"pick-up date {to_iso_string(pick_up_date)} has to be between a Tuesday and a Saturday")
    if _is_in_a_closing_period(pick_up_date, closing_periods):
        raise InvalidOrder(f"pick-up date {to_iso_string(pick_up_date)} has to be outside closing periods")


def _assert_delivery_date_is_valid(
    delivery_date: datetime | None,
    closing_periods: Sequence[ClosingPeriod],
    now: datetime,
) -> None:
    if delivery_date is None:
        raise InvalidOrder("a delivery date has to be defined when order type is delivery")
    if is_before_ignoring_hours(delivery_date, now):
        raise InvalidOrder(f"delivery date {to_iso_string(delivery_date)} has to be in the future")
    if _is_in_a_closing_period(delivery_date, closing_periods):
        raise InvalidOrder(f"delivery date {to_iso_string(delivery_date)} has to be outside closing periods")
    if day_index(delivery_date) != DELIVERY_DAY:
        raise InvalidOrder(f"delivery date {to_iso_string(delivery_date)} has to be a Thursday")


def _assert_reservation_date_is_valid(
    reservation_date: datetime | None,
    closing_periods: Sequence[ClosingPeriod],
    now: datetime,
) -> None:
    if reservation_date is None:
        raise InvalidOrder("a reservation date has to be defined when order type is reservation")
    if is_before_ignoring_hours(reservation_date, now):
        raise InvalidOrder(f"reservation date {to_iso_string(reservation_date)} has to be in the future")
    if day_index(reservation_date) in CLOSING_DAYS:
        raise InvalidOrder(
            f"reservation date {to_iso_string(reservation_date)} has to be between a Tuesday and a Saturday"
        )
    if _is_in_a_closing_period(reservation_date, closing_periods):
        raise InvalidOrder(f"reservation date {to_iso_string(reservation_date)} has to be outside closing periods")


def _next_date_having_day(day: Day, after: datetime) -> date:
    """Return the first calendar date strictly after ``after`` that falls on ``day``."""
    days_ahead: int = (day - day_index(after) - 1) % NUMBER_OF_DAYS_IN_A_WEEK + 1
    return business_date(after) + timedelta(days=days_ahead)


def _assert_pick_up_date_is_equal_or_after_the_first_available_day(pick_up_date: datetime, now: datetime) -> None:
    # Orders placed after the cutoff hour count as placed the following day.
    effective_now: datetime = to_business_time(now)
    if effective_now.hour >= settings.pick_up_cutoff_hour:
        effective_now += timedelta(days=1)

    placed_on: Day = Day(day_index(effective_now))
    is_pick_up_date_in_the_next_six_days: bool = days_between(effective_now, pick_up_date) < NUMBER_OF_DAYS_IN_A_WEEK
    if is_pick_up_date_in_the_next_six_days and placed_on == day_index(pick_up_date):
        raise InvalidOrder(f"pick-up date {to_iso_string(pick_up_date)} cannot be same day as now")

    first_available_date: date = _next_date_having_day(first_available_pick_up_day(placed_on), effective_now)
    if business_date(pick_up_date) < first_available_date:
        required_days: int = (first_available_date - business_date(effective_now)).days
        raise InvalidOrder(
            f"pick-up date {to_iso_string(pick_up_date)} has to be at least {required_days} days after now"
        )


def _assert_delivery_date_is_equal_or_after_the_first_available_day(delivery_date: datetime, now: datetime) -> None:
    local_now: datetime = to_business_time(now)
    current_day: int = day_index(local_now)
    is_delivery_date_in_the_same_week_as_now: bool = (
        days_between(local_now, delivery_date) < NUMBER_OF_DAYS_IN_A_WEEK and current_day <= day_index(delivery_date)
    )
    is_past_same_week_cutoff: bool = current_day > MAXIMUM_DAY_FOR_DELIVERY_SAME_WEEK or (
        current_day == MAXIMUM_DAY_FOR_DELIVERY_SAME_WEEK and local_now.hour >= settings.delivery_cutoff_hour
    )
    if is_delivery_date_in_the_same_week_as_now and is_past_same_week_cutoff:
        raise InvalidOrder(f"delivery date {to_iso_string(delivery_date)} has to be one of the next available Thursday")
