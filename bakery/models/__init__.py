"""Application models package."""

from bakery.models.app_setting import AppSetting
from bakery.models.closing_period import ClosingPeriodRecord
from bakery.models.order import OrderItem, OrderRecord
from bakery.models.product import ProductRecord

__all__ = ["AppSetting", "ClosingPeriodRecord", "OrderItem", "OrderRecord", "ProductRecord"]
