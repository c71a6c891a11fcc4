"""API route definitions and exports."""
from api.routes import files

__all__ = ["files"]
