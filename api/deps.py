"""API dependency injection components."""

from fastapi import Request

from config import Settings, settings


def get_settings(request: Request) -> Settings:
    """Retrieve the settings the app was created with."""
    return getattr(request.app.state, "settings", settings)
