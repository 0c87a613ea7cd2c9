"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "bakery-orders API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./bakery-orders.db")
    business_timezone: str = getenv("BUSINESS_TIMEZONE", "Canada/Eastern")
    pick_up_cutoff_hour: int = int(getenv("PICK_UP_CUTOFF_HOUR", "19"))
    delivery_cutoff_hour: int = int(getenv("DELIVERY_CUTOFF_HOUR", "19"))
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    admin_username: str = getenv("ADMIN_USERNAME", "admin")
    admin_password_hash: str = getenv("ADMIN_PASSWORD_HASH", "")


settings: Settings = Settings()
