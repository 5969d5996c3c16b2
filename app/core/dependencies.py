"""FastAPI dependencies."""
from app.core.config import Settings, settings


def get_settings() -> Settings:
    """Get application settings."""
    return settings
