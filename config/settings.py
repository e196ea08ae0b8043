"""
Application settings and configuration management.
Handles environment variables, API configuration, token sources and logging defaults.
"""

import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class APIConfig:
    """Configuration for external API services."""
    base_url: str
    timeout: int = 30
    max_retries: int = 3

class Settings:
    """Main application settings."""

    def __init__(self):
        # Apple Music API Configuration
        self.apple_music = APIConfig(
            base_url=os.getenv("APPLE_MUSIC_BASE_URL", "https://api.music.apple.com/v1"),
            timeout=int(os.getenv("APPLE_MUSIC_TIMEOUT", "30")),
            max_retries=int(os.getenv("APPLE_MUSIC_MAX_RETRIES", "3"))
        )

        # Developer token sources, checked in this order
        self.APPLE_MUSIC_DEVELOPER_TOKEN = os.getenv("APPLE_MUSIC_DEVELOPER_TOKEN")
        self.APPLE_MUSIC_TOKEN_URL = os.getenv("APPLE_MUSIC_TOKEN_URL")
        self.APPLE_MUSIC_TOKEN_METHOD = os.getenv("APPLE_MUSIC_TOKEN_METHOD", "GET").upper()
        self.APPLE_MUSIC_KEY_ID = os.getenv("APPLE_MUSIC_KEY_ID")
        self.APPLE_MUSIC_TEAM_ID = os.getenv("APPLE_MUSIC_TEAM_ID")
        self.APPLE_MUSIC_PRIVATE_KEY = os.getenv("APPLE_MUSIC_PRIVATE_KEY")
        self.APPLE_MUSIC_TOKEN_TTL = int(os.getenv("APPLE_MUSIC_TOKEN_TTL", "3600"))

        # Music user token for /me endpoints
        self.APPLE_MUSIC_USER_TOKEN = os.getenv("APPLE_MUSIC_USER_TOKEN")

        # Request defaults
        self.default_storefront = os.getenv("APPLE_MUSIC_STOREFRONT", "us")
        self.default_lang = os.getenv("APPLE_MUSIC_LANG")

        # Logging Configuration
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        self.debug = os.getenv("APPLE_MUSIC_DEBUG", "").lower() in ("1", "true", "yes")

    @property
    def can_sign_tokens(self) -> bool:
        """Whether a developer token can be signed locally."""
        return bool(self.APPLE_MUSIC_KEY_ID and self.APPLE_MUSIC_TEAM_ID and self.APPLE_MUSIC_PRIVATE_KEY)

    @property
    def developer_token_source(self) -> Optional[str]:
        """Name of the developer token source that will be used, if any."""
        if self.APPLE_MUSIC_DEVELOPER_TOKEN:
            return "static"
        if self.APPLE_MUSIC_TOKEN_URL:
            return "token_server"
        if self.can_sign_tokens:
            return "signed"
        return None

    def validate(self, require_user_token: bool = False) -> bool:
        """Validate that required configuration is present."""
        required_vars = []

        if self.developer_token_source is None:
            required_vars.append(
                "APPLE_MUSIC_DEVELOPER_TOKEN or APPLE_MUSIC_TOKEN_URL or "
                "APPLE_MUSIC_KEY_ID/APPLE_MUSIC_TEAM_ID/APPLE_MUSIC_PRIVATE_KEY"
            )
        if require_user_token and not self.APPLE_MUSIC_USER_TOKEN:
            required_vars.append("APPLE_MUSIC_USER_TOKEN")
        if self.APPLE_MUSIC_TOKEN_METHOD not in ("GET", "POST"):
            raise ValueError(f"Invalid APPLE_MUSIC_TOKEN_METHOD: {self.APPLE_MUSIC_TOKEN_METHOD}")

        if required_vars:
            raise ValueError(f"Missing required environment variables: {', '.join(required_vars)}")

        return True
