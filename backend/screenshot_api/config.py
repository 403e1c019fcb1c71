"""
Application configuration
"""

import os
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings"""

    def __init__(self):
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8000"))

        # Security settings - parse comma-separated values
        cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000")
        self.CORS_ORIGINS: List[str] = _split_csv(cors_origins_str)
        self.HTTPS_REDIRECT: bool = os.getenv("HTTPS_REDIRECT", "false").lower() == "true"

        # Screenshot settings
        self.VIEWPORT_WIDTH: int = int(os.getenv("VIEWPORT_WIDTH", "1920"))
        self.VIEWPORT_HEIGHT: int = int(os.getenv("VIEWPORT_HEIGHT", "1080"))
        self.DEFAULT_JPEG_QUALITY: int = int(os.getenv("DEFAULT_JPEG_QUALITY", "80"))

        # Browser settings
        browser_args_str = os.getenv("BROWSER_ARGS", "--no-sandbox,--disable-setuid-sandbox")
        self.BROWSER_ARGS: List[str] = _split_csv(browser_args_str)
        self.AUTO_INSTALL_BROWSER: bool = os.getenv("AUTO_INSTALL_BROWSER", "true").lower() == "true"
        self.BROWSER_INSTALL_TIMEOUT: int = int(os.getenv("BROWSER_INSTALL_TIMEOUT", "300"))  # seconds

settings = Settings()
