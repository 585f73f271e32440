"""Storefront Configuration"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache

from ..models.checkout import Destination


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001
    cors_origins: list[str] = ["*"]

    # Brand
    brand_name: str = "T&T Botanica"
    brand_tagline: str = "Tropical • Whimsical • Lush"
    brand_email: str = "hello@ttbotanica.com"
    facebook_url: Optional[str] = "https://www.facebook.com/ttbotanica"
    instagram_url: Optional[str] = "https://www.instagram.com/ttbotanica"

    # Destination prefilled on new carts
    default_country: str = "US"
    default_state: str = "WA"
    default_city: str = "Tacoma"
    default_postal_code: str = ""

    # Persistence; unset keeps everything in memory
    data_dir: Optional[Path] = None

    # Idle sessions are unloaded after this; their carts stay in storage
    session_max_age_hours: float = 24

    class Config:
        env_prefix = "STOREFRONT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def default_destination(self) -> Destination:
        return Destination(
            country=self.default_country,
            state=self.default_state,
            city=self.default_city,
            postal_code=self.default_postal_code,
        )

    @property
    def social_links(self) -> dict[str, str]:
        """Configured social profile links"""
        links = {
            "facebook": self.facebook_url,
            "instagram": self.instagram_url,
        }
        return {name: url for name, url in links.items() if url}


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
