"""Application configuration settings."""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Meter Share"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Signs the session cookie holding each visitor's bill
    SECRET_KEY: str = "your-secret-key-change-this-in-production"

    # Display and export
    CURRENCY_SYMBOL: str = "₦"
    REPORT_FILENAME: str = "electricity-bill-split"

    # Starting bill for a fresh session
    DEFAULT_TOTAL_UNITS: Decimal = Decimal("52.8")
    DEFAULT_TOTAL_AMOUNT: Decimal = Decimal("12000")

    # Encoded session limit, kept under the 4KB browsers allow per cookie
    MAX_SESSION_BYTES: int = 3500


settings = Settings()
