"""Runtime switch allowing admins to suspend customer ordering."""

import logging

from sqlalchemy.orm import Session

from bakery.models.app_setting import AppSetting

PRODUCT_ORDERING_KEY: str = "product_ordering"
ENABLED: str = "enabled"
DISABLED: str = "disabled"

logger = logging.getLogger(__name__)


def is_product_ordering_enabled(db: Session) -> bool:
    """Return True unless an admin has disabled ordering."""
    setting: AppSetting | None = db.get(AppSetting, PRODUCT_ORDERING_KEY)
    return setting is None or setting.value != DISABLED


def set_product_ordering_enabled(db: Session, enabled: bool) -> None:
    value: str = ENABLED if enabled else DISABLED
    setting: AppSetting | None = db.get(AppSetting, PRODUCT_ORDERING_KEY)
    if setting is None:
        setting = AppSetting(key=PRODUCT_ORDERING_KEY, value=value)
        db.add(setting)
    else:
        setting.value = value

    db.commit()
    logger.info("Product ordering %s", value)
