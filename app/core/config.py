from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BUS_BOOKING_")

    app_name: str = "Bus Booking System"
    default_fare: Decimal = Field(Decimal("300.00"), ge=0, decimal_places=2)
    currency_label: str = "Rs."
    log_level: str = "WARNING"
    clear_screen: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
