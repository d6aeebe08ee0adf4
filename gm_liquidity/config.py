"""
Configuration settings for the liquidity amounts engine

Loads environment variables and provides the UI fee factor default.
"""
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Engine settings"""

    # UI fee factor (FLOAT_PRECISION scaled, 10^30 == 100%)
    UI_FEE_FACTOR: int = int(os.getenv("UI_FEE_FACTOR", "0"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    def get_ui_fee_factor(self) -> int:
        """Get UI fee factor, re-reading the environment"""
        return int(os.getenv("UI_FEE_FACTOR", str(self.UI_FEE_FACTOR)))


# Create global settings instance
settings = Settings()


def configure_logging(level: str = "") -> None:
    """Apply LOG_LEVEL to the package logger"""
    logging.getLogger("gm_liquidity").setLevel(level.upper() or settings.LOG_LEVEL)
