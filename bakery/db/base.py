"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from bakery.models import app_setting as _app_setting  # noqa: E402,F401
from bakery.models import closing_period as _closing_period  # noqa: E402,F401
from bakery.models import order as _order  # noqa: E402,F401
from bakery.models import product as _product  # noqa: E402,F401
