"""
Service configuration.

Values come from the environment; a ``.env`` file in the working directory
is loaded first if present.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from rich.logging import RichHandler

DEFAULT_SHOP_DOMAIN = "play-farhan.myshopify.com"
DEFAULT_API_VERSION = "2025-07"
DEFAULT_VARIANT_ID = "45626932789401"


@dataclass
class Settings:
    shop_domain: str = DEFAULT_SHOP_DOMAIN
    api_version: str = DEFAULT_API_VERSION
    access_token: Optional[str] = None
    variant_id: str = DEFAULT_VARIANT_ID
    port: int = 3000
    timeout: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            shop_domain=os.getenv("SHOPIFY_DOMAIN", DEFAULT_SHOP_DOMAIN),
            api_version=os.getenv("API_VERSION", DEFAULT_API_VERSION),
            access_token=os.getenv("ADMIN_API_TOKEN") or None,
            variant_id=os.getenv("PROTECTION_VARIANT_ID", DEFAULT_VARIANT_ID),
            port=int(os.getenv("PORT", "3000")),
            timeout=float(os.getenv("SHOPIFY_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
